"""
File naming rules shared by template lookup and output files.

Names from the configuration are normalized with :func:`format_for_file`
everywhere they become part of a path. Versions and architectures are used
literally.
"""
from typing import Iterable

TEMPLATE_EXTENSION = ".njk"
OUTPUT_EXTENSION = ".mdx"
SEPARATOR = "_"
PRODUCTS_ROOT = "products"


def format_for_file(text: str) -> str:
    """Lowercase ``text`` and replace every space with a dash."""
    return text.lower().replace(" ", "-")


def product_base(product_name: str) -> str:
    return f"{PRODUCTS_ROOT}/{format_for_file(product_name)}"


def template_identifier(base: str, parts: Iterable[str]) -> str:
    """Join ``parts`` into a template name below ``base``.

    Identifiers always use forward slashes since they double as jinja2
    loader names, e.g. ``products/foo/v1_bar-linux_x86_64.njk``.
    """
    return f"{base.rstrip('/')}/{SEPARATOR.join(parts)}{TEMPLATE_EXTENSION}"


def output_filename(product_name: str, version: str, platform_name: str, arch: str) -> str:
    parts = [
        format_for_file(product_name),
        version,
        format_for_file(platform_name),
        arch,
    ]
    return SEPARATOR.join(parts) + OUTPUT_EXTENSION

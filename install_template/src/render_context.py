"""
Context handed to document templates.
"""
from typing import Any, Dict

from .catalog import Platform, Product


def build_context(product: Product, platform: Platform, version: str) -> Dict[str, Dict[str, Any]]:
    """Return the template context for one tuple; names are left as written."""
    return {
        "product": {
            "name": product.name,
            "version": version,
        },
        "platform": {
            "name": platform.name,
            "arch": platform.arch,
        },
    }

"""
Template lookup for a (product, version, platform, architecture) query.

Candidates are tried from most to least specific; the first one present in
the template store wins:

1. ``products/<product>/v<version>_<platform>_<arch>.njk``
2. ``products/<product>/v<version>_<platform>.njk``
3. ``products/<product>/<platform>_<arch>.njk``
4. ``products/<product>/<platform>.njk``
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from core.console import Console

from .naming import format_for_file, product_base, template_identifier


@dataclass(frozen=True)
class TemplateQuery:
    product: str
    version: str
    platform: str
    arch: str

    @property
    def base(self) -> str:
        return product_base(self.product)

    @property
    def platform_token(self) -> str:
        return format_for_file(self.platform)

    @property
    def version_token(self) -> str:
        return f"v{self.version}"


def _version_platform_arch(query: TemplateQuery) -> str:
    return template_identifier(query.base, [query.version_token, query.platform_token, query.arch])


def _version_platform(query: TemplateQuery) -> str:
    return template_identifier(query.base, [query.version_token, query.platform_token])


def _platform_arch(query: TemplateQuery) -> str:
    return template_identifier(query.base, [query.platform_token, query.arch])


def _platform(query: TemplateQuery) -> str:
    return template_identifier(query.base, [query.platform_token])


SPECIFICITY_TIERS: tuple[Callable[[TemplateQuery], str], ...] = (
    _version_platform_arch,
    _version_platform,
    _platform_arch,
    _platform,
)


def candidate_templates(query: TemplateQuery) -> List[str]:
    """Return every candidate identifier for ``query``, most specific first."""
    return [tier(query) for tier in SPECIFICITY_TIERS]


class TemplateFinder:
    """Locate the most specific template available under ``templates_dir``."""

    def __init__(self, templates_dir: Path, console: Console) -> None:
        self.templates_dir = templates_dir
        self.console = console

    def exists(self, identifier: str) -> bool:
        return (self.templates_dir / identifier).is_file()

    def find(self, product_name: str, version: str, platform_name: str, arch: str) -> Optional[str]:
        """Return the chosen template identifier, or ``None`` when none exists.

        A miss is reported with the full list of candidates so the author
        knows which file to add; it does not stop the run.
        """
        query = TemplateQuery(product=product_name, version=version, platform=platform_name, arch=arch)
        candidates = candidate_templates(query)
        for identifier in candidates:
            self.console.debug(f"  checking {self.templates_dir / identifier}")
            if self.exists(identifier):
                return identifier

        lines = ["no template could be found", "  Please add one of the following files:"]
        lines.extend(f"  {identifier}" for identifier in candidates)
        self.console.error("\n".join(lines))
        return None

"""
Generation loop over every product/platform/version combination.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from core.console import Console

from .catalog import Platform, Product
from .naming import format_for_file
from .render_context import build_context
from .renderer import DocumentRenderer, RenderError
from .resolver import TemplateFinder
from .settings import GeneratorSettings


@dataclass
class GeneratorContext:
    console: Console
    settings: GeneratorSettings
    finder: TemplateFinder
    renderer: DocumentRenderer


@dataclass
class GenerationReport:
    written: List[Path] = field(default_factory=list)
    skipped: List[Tuple[str, str, str, str]] = field(default_factory=list)


def render_doc(ctx: GeneratorContext, product: Product, platform: Platform, version: str) -> Optional[Path]:
    """Render the document for one tuple.

    Returns the output path, or ``None`` when no template matched. Render
    failures propagate as :class:`RenderError`.
    """
    ctx.console.info(
        f"Starting render for {product.name} {version} on {platform.name} {platform.arch}"
    )

    template = ctx.finder.find(product.name, version, platform.name, platform.arch)
    if template is None:
        return None

    ctx.console.info(f'  using template "{template}"')

    context = build_context(product, platform, version)
    return ctx.renderer.write(template, context)


def _selected(ctx: GeneratorContext, products: Sequence[Product], only: Optional[Iterable[str]]) -> List[Product]:
    if not only:
        return list(products)
    wanted = {format_for_file(name) for name in only}
    known = {format_for_file(product.name) for product in products}
    for name in sorted(wanted - known):
        ctx.console.error(f"no product named '{name}' in the configuration")
    return [product for product in products if format_for_file(product.name) in wanted]


def render_all(
    ctx: GeneratorContext,
    products: Sequence[Product],
    only: Optional[Iterable[str]] = None,
) -> GenerationReport:
    """Render every tuple in declaration order, stopping at the first failure."""
    report = GenerationReport()
    for product in _selected(ctx, products, only):
        for platform in product.platforms:
            for version in platform.versions:
                written = render_doc(ctx, product, platform, version)
                if written is None:
                    report.skipped.append((product.name, version, platform.name, platform.arch))
                else:
                    report.written.append(written)
    return report


def run_generate(
    ctx: GeneratorContext,
    products: Sequence[Product],
    only: Optional[Iterable[str]] = None,
) -> int:
    """Run the whole generation and return the process exit status."""
    try:
        report = render_all(ctx, products, only)
    except RenderError as exc:
        ctx.console.error("An exception occurred. Details below:")
        ctx.console.error(str(exc))
        if exc.__cause__ is not None:
            ctx.console.error(f"  caused by {type(exc.__cause__).__name__}: {exc.__cause__}")
        return 1

    ctx.console.info(
        f"Rendered {len(report.written)} document(s) into {ctx.settings.renders_dir}, "
        f"skipped {len(report.skipped)} without a template"
    )
    return 0

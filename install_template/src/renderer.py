"""
Template expansion, formatting and output for a single document.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import jinja2
import mdformat

from core.console import Console

from .naming import output_filename


class RenderError(RuntimeError):
    """Raised when a document cannot be expanded or formatted."""

    def __init__(self, template: str, message: str) -> None:
        super().__init__(f"{template}: {message}")
        self.template = template


def create_environment(templates_dir: Path) -> jinja2.Environment:
    """Build the template environment used for every document of a run.

    Undefined context fields raise instead of rendering as empty strings,
    and output is not HTML-escaped.
    """
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(templates_dir)),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


def format_markdown(text: str) -> str:
    return mdformat.text(text, extensions={"frontmatter"})


class DocumentRenderer:
    """Render templates into formatted documents below ``renders_dir``."""

    def __init__(
        self,
        environment: jinja2.Environment,
        renders_dir: Path,
        console: Console,
        *,
        dry_run: bool = False,
    ) -> None:
        self.environment = environment
        self.renders_dir = renders_dir
        self.console = console
        self.dry_run = dry_run

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        try:
            expanded = self.environment.get_template(template).render(context)
        except Exception as exc:
            raise RenderError(template, f"template expansion failed: {exc}") from exc

        try:
            return format_markdown(expanded)
        except Exception as exc:
            raise RenderError(template, f"formatting failed: {exc}") from exc

    def output_path(self, context: Mapping[str, Any]) -> Path:
        product = context["product"]
        platform = context["platform"]
        filename = output_filename(product["name"], product["version"], platform["name"], platform["arch"])
        return self.renders_dir / filename

    def write(self, template: str, context: Mapping[str, Any]) -> Path:
        """Render ``template`` and write it out; the file is complete on return."""
        document = self.render(template, context)
        destination = self.output_path(context)
        self.console.info(f"  writing {destination.name}")

        if self.dry_run:
            self.console.dry(f"Would write {len(document)} characters to {destination}")
            return destination

        try:
            self.renders_dir.mkdir(parents=True, exist_ok=True)
            destination.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise RenderError(template, f"writing {destination} failed: {exc}") from exc
        return destination

"""Command line interface for the install template generator."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import List, Optional

import yaml

from core.config_loader import load_config_file
from core.console import Console
from core.template import TemplateError

from .catalog import ConfigError, parse_catalog
from .generator import GeneratorContext, run_generate
from .renderer import DocumentRenderer, create_environment
from .resolver import TemplateFinder
from .settings import load_settings


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Render installation guides for every product/platform/version in the configuration"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to the configuration file (default: config.yaml)")
    parser.add_argument(
        "--templates",
        "-t",
        type=Path,
        default=None,
        help="Template store directory (default: settings.templates or <config dir>/templates)")
    parser.add_argument(
        "--renders",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: settings.renders or <config dir>/renders)")
    parser.add_argument(
        "--product",
        "-p",
        action="append",
        dest="products",
        default=[],
        help="Only render this product (repeatable)")
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Render documents without writing them")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (maps to debug)")
    parser.add_argument(
        "--log",
        "-l",
        choices=["none", "error", "info", "debug"],
        default=None,
        help="Set log level (default: info)")
    return parser


def _log_level(args: Namespace) -> str:
    # explicit --log wins over --verbose
    if args.log:
        return args.log
    return "debug" if args.verbose else "info"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(level=_log_level(args), dry_run=args.dry_run)

    config_path: Path = args.config
    if not config_path.is_file():
        console.error(f"Configuration file not found: {config_path}")
        return 1

    config_dir = config_path.resolve().parent
    try:
        config = load_config_file(config_path)
        products = parse_catalog(config)
        settings = load_settings(
            config,
            config_dir,
            templates_override=args.templates,
            renders_override=args.renders,
        )
    except (ConfigError, TemplateError, yaml.YAMLError, TypeError, ValueError, OSError) as exc:
        console.error(f"Failed to load config: {exc}")
        return 1

    console.debug(f"Templates: {settings.templates_dir}")
    console.debug(f"Renders: {settings.renders_dir}")

    if not settings.templates_dir.is_dir():
        console.error(f"Templates directory not found: {settings.templates_dir}")
        return 1

    ctx = GeneratorContext(
        console=console,
        settings=settings,
        finder=TemplateFinder(settings.templates_dir, console),
        renderer=DocumentRenderer(
            create_environment(settings.templates_dir),
            settings.renders_dir,
            console,
            dry_run=args.dry_run,
        ),
    )
    return run_generate(ctx, products, args.products)

"""
Directory settings for a generator run.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional
import os

from core.template import PlaceholderResolver

from .catalog import ConfigError

DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_RENDERS_DIR = "renders"


@dataclass(frozen=True)
class GeneratorSettings:
    templates_dir: Path
    renders_dir: Path


def _placeholder_context(config_dir: Path) -> dict[str, Any]:
    return {
        "config": {"dir": str(config_dir)},
        "env": dict(os.environ),
    }


def _resolve_dir(resolver: PlaceholderResolver, value: Any, key: str, config_dir: Path) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"settings.{key} must be a non-empty string")
    path = Path(os.path.expanduser(resolver.resolve(value)))
    if not path.is_absolute():
        path = config_dir / path
    return path


def load_settings(
    config: Mapping[str, Any],
    config_dir: Path,
    *,
    templates_override: Optional[Path] = None,
    renders_override: Optional[Path] = None,
) -> GeneratorSettings:
    """Build settings from the optional ``settings`` table of ``config``.

    Directory values may reference ``{{config.dir}}`` and ``{{env.NAME}}``.
    Relative directories are anchored at ``config_dir``; explicit overrides
    (from the command line) win over the configuration.
    """
    raw = config.get("settings", {}) or {}
    if not isinstance(raw, Mapping):
        raise ConfigError("settings must be a table")

    resolver = PlaceholderResolver(_placeholder_context(config_dir))

    if templates_override is not None:
        templates_dir = templates_override
    else:
        templates_dir = _resolve_dir(
            resolver, raw.get("templates", DEFAULT_TEMPLATES_DIR), "templates", config_dir
        )

    if renders_override is not None:
        renders_dir = renders_override
    else:
        renders_dir = _resolve_dir(
            resolver, raw.get("renders", DEFAULT_RENDERS_DIR), "renders", config_dir
        )

    return GeneratorSettings(templates_dir=templates_dir, renders_dir=renders_dir)

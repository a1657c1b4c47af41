"""
Product catalog parsed from the generator configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from core.config_loader import load_config_file

VERSIONS_KEY = "supported versions"


class ConfigError(ValueError):
    """Raised when the configuration does not describe a valid catalog."""


@dataclass(frozen=True, slots=True)
class Platform:
    name: str
    arch: str
    versions: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Product:
    name: str
    platforms: tuple[Platform, ...]


def _require_sequence(value: Any, location: str) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return value
    raise ConfigError(f"{location} must be a list")


def _require_mapping(value: Any, location: str) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    raise ConfigError(f"{location} must be a table")


def _require_name(entry: Mapping[str, Any], key: str, location: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{location}.{key} must be a non-empty string")
    return value


def _parse_version(value: Any, location: str) -> str:
    # bool is an int subclass, and floats lose digits ("9.10" -> 9.1)
    if isinstance(value, bool) or isinstance(value, float):
        raise ConfigError(f"{location} must be quoted as a string (got {value!r})")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    raise ConfigError(f"{location} must be a non-empty string")


def _parse_platform(raw: Any, location: str) -> Platform:
    entry = _require_mapping(raw, location)
    name = _require_name(entry, "name", location)
    arch = _require_name(entry, "arch", location)
    if VERSIONS_KEY not in entry:
        raise ConfigError(f"{location} is missing '{VERSIONS_KEY}'")
    raw_versions = _require_sequence(entry[VERSIONS_KEY], f"{location}.{VERSIONS_KEY}")
    versions = tuple(
        _parse_version(value, f"{location}.{VERSIONS_KEY}[{index}]")
        for index, value in enumerate(raw_versions)
    )
    return Platform(name=name, arch=arch, versions=versions)


def _parse_product(raw: Any, location: str) -> Product:
    entry = _require_mapping(raw, location)
    name = _require_name(entry, "name", location)
    raw_platforms = _require_sequence(entry.get("platforms", []), f"{location}.platforms")
    platforms = tuple(
        _parse_platform(item, f"{location}.platforms[{index}]")
        for index, item in enumerate(raw_platforms)
    )
    return Product(name=name, platforms=platforms)


def parse_catalog(config: Mapping[str, Any]) -> List[Product]:
    """Validate ``config`` and return its products in declaration order."""
    if "products" not in config:
        raise ConfigError("Configuration is missing the 'products' list")
    raw_products = _require_sequence(config["products"], "products")
    return [
        _parse_product(item, f"products[{index}]")
        for index, item in enumerate(raw_products)
    ]


def load_catalog(path: Path) -> List[Product]:
    return parse_catalog(load_config_file(path))

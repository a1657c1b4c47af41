"""Placeholder substitution for configuration values."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
import re


_PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


class TemplateError(ValueError):
    """Raised when a placeholder cannot be resolved."""


@dataclass(slots=True)
class PlaceholderResolver:
    """Expands ``{{dotted.path}}`` placeholders using a nested mapping context.

    Values found in the context may themselves contain placeholders; they are
    expanded recursively and memoized per path. Unknown paths and circular
    references raise :class:`TemplateError` instead of expanding to an empty
    string.
    """

    context: Mapping[str, Any]
    _cache: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def resolve(self, value: str) -> str:
        return self._expand(value, stack=[])

    def _expand(self, text: str, *, stack: list[str]) -> str:
        if not _PLACEHOLDER_PATTERN.search(text):
            return text

        def replacement(match: re.Match[str]) -> str:
            return self._resolve_path(match.group(1).strip(), stack=stack)

        return _PLACEHOLDER_PATTERN.sub(replacement, text)

    def _resolve_path(self, path: str, *, stack: list[str]) -> str:
        if path in self._cache:
            return self._cache[path]
        if path in stack:
            cycle = " -> ".join(stack + [path])
            raise TemplateError(f"Circular dependency detected: {cycle}")

        raw_value = self._lookup(path)
        stack.append(path)
        resolved = self._expand(str(raw_value), stack=stack)
        stack.pop()
        self._cache[path] = resolved
        return resolved

    def _lookup(self, path: str) -> Any:
        current: Any = self.context
        for part in path.split("."):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
                continue
            raise TemplateError(f"Cannot resolve path '{path}' in template context")
        if isinstance(current, Mapping):
            raise TemplateError(f"Path '{path}' refers to a table, not a value")
        return current


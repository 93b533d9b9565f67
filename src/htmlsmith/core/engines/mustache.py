"""Placeholder engine resolving ``{{ path.to.value }}`` expressions.

Placeholders are looked up against ``node``, ``content``, ``ctx`` and ``next``.
Attribute access falls back to mapping access. A callable found at the end of
a path is called when it takes no arguments, so ``{{ next }}`` delegates to the
next template of the chain; callables needing arguments (``{{ node.attr }}``)
stay unresolved.
"""

from __future__ import annotations

from collections.abc import Mapping
import inspect
import re
from typing import Any

from .base import CompileOptions, RenderFunction


_MUSTACHE_RE = re.compile(r"\{\{\s*([^\}\s][^\}]*?)\s*\}\}")
_MISSING = object()


def _takes_no_arguments(func: Any) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def _lookup(root: Mapping[str, Any], path: str) -> Any:
    current: Any = root
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
            continue
        if part.startswith("_"):
            return _MISSING
        current = getattr(current, part, _MISSING)
        if current is _MISSING:
            return _MISSING
    if callable(current):
        if not _takes_no_arguments(current):
            return _MISSING
        current = current()
    return current


class MustacheEngine:
    """Compile mustache-style placeholder templates."""

    name = "mustache"

    def __call__(self, source: str, options: CompileOptions) -> RenderFunction:
        emitter = options.emitter
        location = options.path.name

        def render(ctx) -> str:
            node = ctx.node
            root = {"node": node, "content": lambda: node.content, "ctx": ctx, "next": ctx.next}

            def _replacement(match: re.Match[str]) -> str:
                raw_path = match.group(1).strip()
                value = _lookup(root, raw_path)
                if value is _MISSING or value is None:
                    if emitter is not None:
                        emitter.warning(
                            f"Unresolved mustache '{{{{{raw_path}}}}}' in {location}; "
                            "leaving placeholder as-is."
                        )
                    return match.group(0)
                return str(value)

            return _MUSTACHE_RE.sub(_replacement, source)

        render.__name__ = f"mustache:{location}"
        return render


__all__ = ["MustacheEngine"]

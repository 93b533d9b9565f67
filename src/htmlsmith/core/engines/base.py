"""Contracts shared by template engines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..diagnostics import DiagnosticEmitter
    from ..invoker import TemplateContext
    from ..nodes import NodeType


RenderFunction = Callable[["TemplateContext"], str]


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Compile-time information handed to an engine alongside the source text."""

    path: Path
    template_dir: Path
    node_type: NodeType
    emitter: DiagnosticEmitter | None = None


class TemplateEngine(Protocol):
    """Callable compiling template source text into a render function."""

    def __call__(self, source: str, options: CompileOptions) -> RenderFunction:
        """Compile ``source`` and return the resulting render function."""
        ...


def engine_name(engine: object) -> str:
    """Return a short display name for an engine callable."""
    name = getattr(engine, "name", None)
    if isinstance(name, str) and name:
        return name
    return getattr(engine, "__name__", type(engine).__name__)


__all__ = ["CompileOptions", "RenderFunction", "TemplateEngine", "engine_name"]

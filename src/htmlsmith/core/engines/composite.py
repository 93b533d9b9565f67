"""Composite engine binding file name patterns to concrete engines.

The composite keeps an ordered list of ``(pattern, engine)`` bindings. A file
name resolves to the engine of the *first* binding whose pattern matches, so
callers express precedence purely through registration order::

    engines = (
        CompositeEngine()
        .register("*.xyz", JinjaEngine())
        .register("*", MustacheEngine())
    )

The composite is itself an engine: calling it compiles a template through the
engine resolved for the template's file name.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import ConfigurationError
from ..patterns import FilePattern, compile_pattern
from .base import CompileOptions, RenderFunction, TemplateEngine, engine_name


@dataclass(frozen=True, slots=True)
class EngineBinding:
    """Association between a file pattern and the engine compiling matches."""

    pattern: FilePattern
    engine: TemplateEngine


def _coerce_engine(value: Any) -> TemplateEngine:
    if isinstance(value, str):
        from .builtins import create_engine

        return create_engine(value)
    if callable(value):
        return value
    raise ConfigurationError(f"Template engine must be callable or a built-in name, got {value!r}.")


class CompositeEngine:
    """Ordered registry of engine bindings resolved first-match-wins."""

    name = "composite"

    def __init__(self, bindings: Iterable[EngineBinding] = ()) -> None:
        self._bindings: list[EngineBinding] = list(bindings)

    def register(self, pattern: str | FilePattern, engine: TemplateEngine | str) -> CompositeEngine:
        """Bind ``engine`` to ``pattern`` and return the registry for chaining."""
        binding = EngineBinding(pattern=compile_pattern(pattern), engine=_coerce_engine(engine))
        self._bindings.append(binding)
        return self

    def register_many(
        self, patterns: str | Iterable[str], engine: TemplateEngine | str
    ) -> CompositeEngine:
        """Bind ``engine`` to every pattern of ``patterns`` in order."""
        if isinstance(patterns, str):
            patterns = (patterns,)
        selected = list(patterns)
        if not selected:
            raise ConfigurationError("Template engine record declares no patterns.")
        resolved = _coerce_engine(engine)
        for pattern in selected:
            self.register(pattern, resolved)
        return self

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> CompositeEngine:
        """Build a registry from ``{patterns, engine}`` records preserving order."""
        composite = cls()
        for record in records:
            if not isinstance(record, Mapping):
                raise ConfigurationError(
                    f"Template engine records must be mappings, got {record!r}."
                )
            unknown = set(record) - {"patterns", "engine"}
            if unknown:
                raise ConfigurationError(
                    f"Unknown template engine record key(s): {', '.join(sorted(unknown))}."
                )
            if "patterns" not in record or "engine" not in record:
                raise ConfigurationError(
                    "Template engine records require both 'patterns' and 'engine'."
                )
            composite.register_many(record["patterns"], record["engine"])
        return composite

    @property
    def bindings(self) -> tuple[EngineBinding, ...]:
        """Return the bindings in registration order."""
        return tuple(self._bindings)

    def resolve(self, file_name: str) -> TemplateEngine | None:
        """Return the engine of the first binding matching ``file_name``."""
        for binding in self._bindings:
            if binding.pattern.matches(file_name):
                return binding.engine
        return None

    def __call__(self, source: str, options: CompileOptions) -> RenderFunction:
        engine = self.resolve(options.path.name)
        if engine is None:
            raise ConfigurationError(f"No template engine registered for '{options.path.name}'.")
        return engine(source, options)

    def __len__(self) -> int:
        return len(self._bindings)

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the bindings."""
        return [
            {"order": order, "pattern": str(binding.pattern), "engine": engine_name(binding.engine)}
            for order, binding in enumerate(self._bindings)
        ]


__all__ = ["CompositeEngine", "EngineBinding"]

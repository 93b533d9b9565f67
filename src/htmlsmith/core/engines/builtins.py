"""Built-in engines and the registry used when no engines are configured."""

from __future__ import annotations

from collections.abc import Callable

from ..exceptions import ConfigurationError
from .base import TemplateEngine
from .composite import CompositeEngine
from .jinja import JinjaEngine
from .mustache import MustacheEngine
from .python import PythonEngine


BUILTIN_ENGINES: dict[str, Callable[[], TemplateEngine]] = {
    "jinja": JinjaEngine,
    "mustache": MustacheEngine,
    "python": PythonEngine,
}


def create_engine(name: str) -> TemplateEngine:
    """Instantiate the built-in engine registered under ``name``."""
    factory = BUILTIN_ENGINES.get(name.strip().lower())
    if factory is None:
        known = ", ".join(sorted(BUILTIN_ENGINES))
        raise ConfigurationError(f"Unknown template engine '{name}'. Built-in engines: {known}.")
    return factory()


def default_engines() -> CompositeEngine:
    """Return the registry applied to template directories by default."""
    jinja = JinjaEngine()
    return (
        CompositeEngine()
        .register("*.jinja", jinja)
        .register("*.j2", jinja)
        .register("*.html", jinja)
        .register("*.mustache", MustacheEngine())
        .register("*.py", PythonEngine())
    )


__all__ = ["BUILTIN_ENGINES", "create_engine", "default_engines"]

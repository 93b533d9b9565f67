"""Template engines and the composite registry binding them to file names."""

from __future__ import annotations

from .base import CompileOptions, RenderFunction, TemplateEngine, engine_name
from .builtins import BUILTIN_ENGINES, create_engine, default_engines
from .composite import CompositeEngine, EngineBinding
from .jinja import JinjaEngine
from .mustache import MustacheEngine
from .python import PythonEngine

__all__ = [
    "BUILTIN_ENGINES",
    "CompileOptions",
    "CompositeEngine",
    "EngineBinding",
    "JinjaEngine",
    "MustacheEngine",
    "PythonEngine",
    "RenderFunction",
    "TemplateEngine",
    "create_engine",
    "default_engines",
    "engine_name",
]

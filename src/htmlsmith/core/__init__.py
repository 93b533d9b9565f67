"""Template discovery, chaining and invocation core."""

from __future__ import annotations

from .chain import CandidateList, TemplateCandidate, TemplateChains, build_candidates
from .config import ConfigFile, TemplateOptions, load_config_file, load_template_options
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .engines import (
    CompileOptions,
    CompositeEngine,
    JinjaEngine,
    MustacheEngine,
    PythonEngine,
    RenderFunction,
    TemplateEngine,
    default_engines,
)
from .exceptions import ConfigurationError, HtmlsmithError, TemplateCompileError
from .invoker import ChainCursor, ChainInvoker, TemplateContext
from .nodes import Node, NodeType
from .patterns import CATCH_ALL, FilePattern, compile_pattern, matches
from .sources import DirectorySource, MappingSource, TemplateSource, load_template_dir

__all__ = [
    "CATCH_ALL",
    "CandidateList",
    "ChainCursor",
    "ChainInvoker",
    "CompileOptions",
    "CompositeEngine",
    "ConfigFile",
    "ConfigurationError",
    "DiagnosticEmitter",
    "DirectorySource",
    "FilePattern",
    "HtmlsmithError",
    "JinjaEngine",
    "LoggingEmitter",
    "MappingSource",
    "MustacheEngine",
    "Node",
    "NodeType",
    "NullEmitter",
    "PythonEngine",
    "RenderFunction",
    "TemplateCandidate",
    "TemplateChains",
    "TemplateCompileError",
    "TemplateContext",
    "TemplateEngine",
    "TemplateOptions",
    "TemplateSource",
    "build_candidates",
    "compile_pattern",
    "default_engines",
    "load_config_file",
    "load_template_dir",
    "load_template_options",
    "matches",
]

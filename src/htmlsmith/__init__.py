"""Primary public API for HTMLSmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from htmlsmith.core import (
    CATCH_ALL,
    ChainInvoker,
    CompileOptions,
    CompositeEngine,
    ConfigFile,
    ConfigurationError,
    DiagnosticEmitter,
    DirectorySource,
    FilePattern,
    HtmlsmithError,
    JinjaEngine,
    LoggingEmitter,
    MappingSource,
    MustacheEngine,
    Node,
    NodeType,
    NullEmitter,
    PythonEngine,
    TemplateChains,
    TemplateCompileError,
    TemplateContext,
    TemplateOptions,
    compile_pattern,
    default_engines,
    load_config_file,
    load_template_dir,
    load_template_options,
)
from htmlsmith.document import DocumentNode, parse_html, parse_markdown
from htmlsmith.html import (
    BaseHtmlRenderer,
    HtmlConverter,
    NodeView,
    convert_document,
    convert_html,
    convert_markdown,
)


try:
    __version__ = _pkg_version("htmlsmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CATCH_ALL",
    "BaseHtmlRenderer",
    "ChainInvoker",
    "CompileOptions",
    "CompositeEngine",
    "ConfigFile",
    "ConfigurationError",
    "DiagnosticEmitter",
    "DirectorySource",
    "DocumentNode",
    "FilePattern",
    "HtmlConverter",
    "HtmlsmithError",
    "JinjaEngine",
    "LoggingEmitter",
    "MappingSource",
    "MustacheEngine",
    "Node",
    "NodeType",
    "NodeView",
    "NullEmitter",
    "PythonEngine",
    "TemplateChains",
    "TemplateCompileError",
    "TemplateContext",
    "TemplateOptions",
    "__version__",
    "compile_pattern",
    "convert_document",
    "convert_html",
    "convert_markdown",
    "default_engines",
    "load_config_file",
    "load_template_dir",
    "load_template_options",
    "parse_html",
    "parse_markdown",
]

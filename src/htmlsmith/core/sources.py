"""Template sources contributing render functions keyed by node type.

Two kinds of source exist:

`DirectorySource`
: a flat directory of template files, each compiled through the engine its
  file name resolves to. ``image.jinja`` contributes the ``image`` template.

`MappingSource`
: an in-memory ``{node_type: render_function}`` mapping used as-is.

Directories are compiled eagerly when a source is loaded; rendering never
touches the file system.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

from .debug import ensure_emitter, record_event
from .diagnostics import DiagnosticEmitter
from .engines.base import CompileOptions, RenderFunction, engine_name
from .engines.composite import CompositeEngine
from .exceptions import ConfigurationError, HtmlsmithError, TemplateCompileError
from .nodes import NodeType


logger = logging.getLogger(__name__)

TemplateMapping = Mapping[NodeType, RenderFunction]


class TemplateSource(Protocol):
    """Contributor of render functions keyed by node type."""

    @property
    def label(self) -> str: ...

    def load(self, emitter: DiagnosticEmitter | None = None) -> TemplateMapping: ...


def node_type_from_filename(file_name: str) -> str:
    """Return the template name carried by ``file_name`` (text before the first dot)."""
    return file_name.split(".", 1)[0]


def _skip(
    emitter: DiagnosticEmitter,
    path: Path,
    reason: str,
    *,
    warn: bool,
) -> None:
    if warn:
        emitter.warning(f"Skipping template file {path}: {reason}")
    record_event(emitter, "template_skipped", {"path": str(path), "reason": reason})


def load_template_dir(
    path: Path,
    engines: CompositeEngine,
    *,
    emitter: DiagnosticEmitter | None = None,
    warn_on_skip: bool = False,
) -> dict[NodeType, RenderFunction]:
    """Compile every template file found directly under ``path``."""
    emitter = ensure_emitter(emitter)
    directory = Path(path).expanduser()
    if not directory.is_dir():
        if warn_on_skip:
            emitter.warning(f"Template directory not found: {directory}")
        record_event(emitter, "template_dir_missing", {"path": str(directory)})
        return {}

    templates: dict[NodeType, RenderFunction] = {}
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if entry.name.startswith(".") or not entry.is_file():
            continue

        engine = engines.resolve(entry.name)
        if engine is None:
            _skip(emitter, entry, "no engine registered", warn=warn_on_skip)
            continue

        name = node_type_from_filename(entry.name)
        node_type = NodeType.lookup(name)
        if node_type is None:
            _skip(emitter, entry, f"'{name}' is not a node type", warn=warn_on_skip)
            continue

        try:
            source = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateCompileError(f"Unable to read template file '{entry}': {exc}") from exc

        options = CompileOptions(
            path=entry,
            template_dir=directory,
            node_type=node_type,
            emitter=emitter,
        )
        try:
            render = engine(source, options)
        except HtmlsmithError:
            raise
        except Exception as exc:
            raise TemplateCompileError(
                f"Engine '{engine_name(engine)}' failed to compile '{entry}': {exc}"
            ) from exc

        if node_type in templates:
            logger.debug("Template %s overrides an earlier '%s' template", entry, node_type)
        templates[node_type] = render
        record_event(
            emitter,
            "template_loaded",
            {"node_type": node_type.value, "path": str(entry), "engine": engine_name(engine)},
        )

    return templates


def coerce_template_mapping(mapping: Mapping[Any, Any]) -> dict[NodeType, RenderFunction]:
    """Validate an in-memory template mapping and key it by :class:`NodeType`."""
    if not isinstance(mapping, Mapping):
        raise ConfigurationError(f"Template mappings must be mappings, got {mapping!r}.")
    templates: dict[NodeType, RenderFunction] = {}
    for key, value in mapping.items():
        node_type = NodeType.coerce(key)
        if not callable(value):
            raise ConfigurationError(
                f"Template for '{node_type}' must be callable, got {type(value).__name__}."
            )
        templates[node_type] = value
    return templates


@dataclass(frozen=True, slots=True)
class DirectorySource:
    """Template source backed by a flat directory of template files."""

    path: Path
    engines: CompositeEngine
    warn_on_skip: bool = False

    @property
    def label(self) -> str:
        return str(self.path)

    def load(self, emitter: DiagnosticEmitter | None = None) -> TemplateMapping:
        return MappingProxyType(
            load_template_dir(
                self.path,
                self.engines,
                emitter=emitter,
                warn_on_skip=self.warn_on_skip,
            )
        )


@dataclass(frozen=True, slots=True)
class MappingSource:
    """Template source backed by an in-memory mapping."""

    templates: Mapping[NodeType, RenderFunction] = field(default_factory=dict)
    name: str = "templates"

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Callable[..., str]], *, name: str) -> MappingSource:
        """Build a source from a raw mapping, coercing its keys."""
        return cls(templates=MappingProxyType(coerce_template_mapping(mapping)), name=name)

    @property
    def label(self) -> str:
        return self.name

    def load(self, emitter: DiagnosticEmitter | None = None) -> TemplateMapping:
        return self.templates


__all__ = [
    "DirectorySource",
    "MappingSource",
    "TemplateMapping",
    "TemplateSource",
    "coerce_template_mapping",
    "load_template_dir",
    "node_type_from_filename",
]

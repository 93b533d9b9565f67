"""Configuration models consumed by the template layer.

TemplateOptions

`template_dirs` (`Path | list[Path]`)
: One directory or an ordered list of directories. Each becomes a directory
  source compiled with `template_engines`. Missing directories contribute
  nothing.

`templates` (`Mapping | list[Mapping]`)
: One in-memory `{node_type: render_function}` mapping or an ordered list of
  them. An empty mapping or an empty list disables inline templates while
  keeping the option present.

`template_engines` (`engine | CompositeEngine | list[dict] | None`)
: A single engine (bound to the `*` catch-all pattern), a composite engine,
  or a list of `{patterns, engine}` records expanded in order. Engines may be
  given by built-in name (`jinja`, `mustache`, `python`). Defaults to the
  built-in registry.

`source_order` (`"dirs_first" | "templates_first"`)
: How directory sources and inline sources are linearised. With
  `dirs_first` (default) every directory precedes every inline mapping, so
  inline templates have the final say.

`warn_on_skip` (`bool`)
: Emit warnings for missing directories and for files no engine claims
  instead of recording silent diagnostic events.

ConfigFile

YAML counterpart of `TemplateOptions` used by the CLI. It accepts the same
keys except `templates` (render functions cannot be written in YAML) and
adds `attributes`, a mapping of document attributes such as `imagesdir`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from os import PathLike
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .engines.builtins import default_engines
from .engines.composite import CompositeEngine
from .exceptions import ConfigurationError
from .patterns import CATCH_ALL
from .sources import DirectorySource, MappingSource, TemplateSource


SourceOrder = Literal["dirs_first", "templates_first"]


def normalise_template_dirs(value: Any) -> tuple[Path, ...]:
    """Return the ordered directory list described by ``value``."""
    if value is None:
        return ()
    if isinstance(value, (str, PathLike)):
        return (Path(value),)
    if isinstance(value, Iterable) and not isinstance(value, (bytes, Mapping)):
        directories: list[Path] = []
        for item in value:
            if not isinstance(item, (str, PathLike)):
                raise ConfigurationError(f"Template directories must be paths, got {item!r}.")
            directories.append(Path(item))
        return tuple(directories)
    raise ConfigurationError(f"Unsupported value for template_dirs: {value!r}.")


def normalise_templates(value: Any) -> tuple[MappingSource, ...]:
    """Return the ordered in-memory sources described by ``value``."""
    if value is None:
        return ()
    if isinstance(value, MappingSource):
        return (value,)
    if isinstance(value, Mapping):
        return (MappingSource.from_mapping(value, name="templates"),)
    if isinstance(value, (list, tuple)):
        sources: list[MappingSource] = []
        for index, item in enumerate(value):
            if isinstance(item, MappingSource):
                sources.append(item)
            elif isinstance(item, Mapping):
                sources.append(MappingSource.from_mapping(item, name=f"templates[{index}]"))
            else:
                raise ConfigurationError(
                    f"templates[{index}] must be a mapping of node types to callables, "
                    f"got {item!r}."
                )
        return tuple(sources)
    raise ConfigurationError(f"Unsupported value for templates: {value!r}.")


def normalise_template_engines(value: Any) -> CompositeEngine:
    """Return the engine registry described by ``value``."""
    if value is None:
        return default_engines()
    if isinstance(value, CompositeEngine):
        return value
    if isinstance(value, str):
        return CompositeEngine().register(CATCH_ALL, value)
    if isinstance(value, Mapping):
        return CompositeEngine.from_records([value])
    if isinstance(value, (list, tuple)):
        return CompositeEngine.from_records(value)
    if callable(value):
        return CompositeEngine().register(CATCH_ALL, value)
    raise ConfigurationError(f"Unsupported value for template_engines: {value!r}.")


class TemplateOptions(BaseModel):
    """Normalised template configuration."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    template_dirs: tuple[Path, ...] = ()
    # Items are MappingSource instances produced by the validator below.
    templates: tuple[Any, ...] = ()
    template_engines: CompositeEngine = Field(default_factory=default_engines)
    source_order: SourceOrder = "dirs_first"
    warn_on_skip: bool = False

    @field_validator("template_dirs", mode="before")
    @classmethod
    def _coerce_template_dirs(cls, value: Any) -> tuple[Path, ...]:
        return normalise_template_dirs(value)

    @field_validator("templates", mode="before")
    @classmethod
    def _coerce_templates(cls, value: Any) -> tuple[MappingSource, ...]:
        return normalise_templates(value)

    @field_validator("template_engines", mode="before")
    @classmethod
    def _coerce_template_engines(cls, value: Any) -> CompositeEngine:
        return normalise_template_engines(value)

    @classmethod
    def from_mapping(
        cls, values: Mapping[str, Any] | None = None, **overrides: Any
    ) -> TemplateOptions:
        """Validate raw option values, raising ``ConfigurationError`` on failure."""
        payload = dict(values or {})
        payload.update(overrides)
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid template options: {exc}") from exc

    def directory_sources(self) -> tuple[DirectorySource, ...]:
        """Return one source per template directory, in declaration order."""
        return tuple(
            DirectorySource(
                path=path, engines=self.template_engines, warn_on_skip=self.warn_on_skip
            )
            for path in self.template_dirs
        )

    def sources(self) -> tuple[TemplateSource, ...]:
        """Return every template source linearised according to ``source_order``."""
        directories: tuple[TemplateSource, ...] = self.directory_sources()
        inline: tuple[TemplateSource, ...] = self.templates
        if self.source_order == "templates_first":
            return inline + directories
        return directories + inline


def load_template_options(**values: Any) -> TemplateOptions:
    """Build template options from keyword arguments."""
    return TemplateOptions.from_mapping(values)


class ConfigFile(BaseModel):
    """Template configuration read from a YAML file."""

    model_config = ConfigDict(extra="forbid")

    template_dirs: list[Path] = Field(default_factory=list)
    template_engines: list[dict[str, Any]] | str | None = None
    source_order: SourceOrder = "dirs_first"
    warn_on_skip: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("template_dirs", mode="before")
    @classmethod
    def _coerce_template_dirs(cls, value: Any) -> list[Path]:
        return list(normalise_template_dirs(value))

    def to_options(self, **overrides: Any) -> TemplateOptions:
        """Return the runtime options described by the file."""
        payload = self.model_dump(exclude={"attributes"})
        payload.update(overrides)
        return TemplateOptions.from_mapping(payload)


def load_config_file(path: Path) -> ConfigFile:
    """Read a YAML configuration file, resolving directories relative to it."""
    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{config_path}': {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Configuration file '{config_path}' must contain a mapping.")

    try:
        config = ConfigFile.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration file '{config_path}': {exc}") from exc

    base = config_path.resolve().parent
    config.template_dirs = [
        directory if directory.is_absolute() else base / directory
        for directory in config.template_dirs
    ]
    return config


__all__ = [
    "ConfigFile",
    "SourceOrder",
    "TemplateOptions",
    "load_config_file",
    "load_template_options",
    "normalise_template_dirs",
    "normalise_template_engines",
    "normalise_templates",
]

"""Parsing helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from htmlsmith.core.config import TemplateOptions, load_config_file
from htmlsmith.document import DocumentNode, parse_html, parse_markdown


MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mdown", ".mkd"})
HTML_SUFFIXES = frozenset({".html", ".htm", ".xhtml"})


def parse_key_value_option(values: Iterable[str] | None) -> dict[str, str]:
    """Parse CLI document attributes declared as 'key=value' pairs."""
    attributes: dict[str, str] = {}
    if not values:
        return attributes

    for raw in values:
        entry = raw.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise ValueError(f"Invalid attribute '{raw}', expected format 'key=value'.")
        key, value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid attribute '{raw}', expected format 'key=value'.")
        attributes[key] = value.strip()

    return attributes


def parse_engine_option(values: Iterable[str] | None) -> list[dict[str, Any]]:
    """Parse engine bindings declared as 'PATTERN[,PATTERN...]=ENGINE'."""
    records: list[dict[str, Any]] = []
    if not values:
        return records

    for raw in values:
        entry = raw.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise ValueError(f"Invalid engine binding '{raw}', expected format 'PATTERN=ENGINE'.")
        patterns_part, engine = entry.rsplit("=", 1)
        patterns = [pattern.strip() for pattern in patterns_part.split(",") if pattern.strip()]
        engine = engine.strip()
        if not patterns or not engine:
            raise ValueError(f"Invalid engine binding '{raw}', expected format 'PATTERN=ENGINE'.")
        records.append({"patterns": patterns, "engine": engine})

    return records


def resolve_options(
    *,
    config: Path | None,
    template_dirs: Iterable[Path] | None,
    engines: Iterable[str] | None,
    attributes: Iterable[str] | None,
    templates_first: bool,
    warn_on_skip: bool,
) -> tuple[TemplateOptions, dict[str, Any]]:
    """Combine the configuration file with command-line overrides.

    Directories given on the command line come after (and therefore outrank)
    those of the configuration file. Engine bindings given on the command
    line replace the file's bindings.
    """
    directories: list[Path] = []
    engine_records: Any = None
    source_order = "dirs_first"
    skip_warnings = False
    document_attributes: dict[str, Any] = {}

    if config is not None:
        config_file = load_config_file(config)
        directories.extend(config_file.template_dirs)
        engine_records = config_file.template_engines
        source_order = config_file.source_order
        skip_warnings = config_file.warn_on_skip
        document_attributes.update(config_file.attributes)

    directories.extend(template_dirs or [])
    cli_engines = parse_engine_option(engines)
    if cli_engines:
        engine_records = cli_engines
    if templates_first:
        source_order = "templates_first"
    document_attributes.update(parse_key_value_option(attributes))

    options = TemplateOptions.from_mapping(
        {
            "template_dirs": directories,
            "template_engines": engine_records,
            "source_order": source_order,
            "warn_on_skip": skip_warnings or warn_on_skip,
        }
    )
    return options, document_attributes


def read_document(path: Path, attributes: dict[str, Any] | None = None) -> DocumentNode:
    """Parse ``path`` as Markdown or HTML depending on its suffix."""
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in MARKDOWN_SUFFIXES:
        return parse_markdown(text, attributes)
    if suffix in HTML_SUFFIXES:
        return parse_html(text, attributes)
    raise ValueError(
        f"Unsupported input '{path.name}', expected a Markdown (.md) or HTML (.html) file."
    )


def write_output_file(target: Path, content: str) -> None:
    """Persist HTML content to disk, creating parent directories as needed."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors
        raise OSError(f"Failed to write HTML output to '{target}': {exc}") from exc


__all__ = [
    "HTML_SUFFIXES",
    "MARKDOWN_SUFFIXES",
    "parse_engine_option",
    "parse_key_value_option",
    "read_document",
    "resolve_options",
    "write_output_file",
]

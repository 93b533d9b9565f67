"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
OUTPUT_PANEL = "Output"
TEMPLATE_PANEL = "Templates"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Markdown (.md) or HTML (.html) document to convert.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the HTML to this file instead of standard output.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

AttributeOption = Annotated[
    list[str] | None,
    typer.Option(
        "--attribute",
        "-a",
        metavar="KEY=VALUE",
        help="Set a document attribute (for example imagesdir=assets). Repeatable.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

TemplateDirOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--template-dir",
        "-t",
        metavar="DIR",
        help="Template directory. Repeat to stack directories; later ones take precedence.",
        file_okay=False,
        resolve_path=True,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

EngineOption = Annotated[
    list[str] | None,
    typer.Option(
        "--engine",
        "-e",
        metavar="PATTERN=ENGINE",
        help=(
            "Bind file patterns to a built-in engine (jinja, mustache, python), "
            "e.g. '*.tpl,*.html=jinja'. Replaces the default bindings when given."
        ),
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file providing template_dirs, template_engines and attributes.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

TemplatesFirstOption = Annotated[
    bool,
    typer.Option(
        "--templates-first",
        help="Give template directories precedence over inline template mappings.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

WarnOnSkipOption = Annotated[
    bool,
    typer.Option(
        "--warn-on-skip",
        help="Warn about missing template directories and files no engine handles.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

"""Implementation of the ``htmlsmith render`` command."""

from __future__ import annotations

import typer

from htmlsmith.core.debug import format_user_friendly_error
from htmlsmith.core.exceptions import HtmlsmithError
from htmlsmith.html import HtmlConverter

from .._options import (
    AttributeOption,
    ConfigOption,
    DebugOption,
    EngineOption,
    InputPathArgument,
    OutputPathOption,
    TemplateDirOption,
    TemplatesFirstOption,
    VerboseOption,
    WarnOnSkipOption,
)
from ..diagnostics import CliEmitter
from ..state import consume_event_diagnostics, debug_enabled, emit_error, set_cli_state
from ..utils import read_document, resolve_options, write_output_file


def render(
    ctx: typer.Context,
    input_path: InputPathArgument,
    output: OutputPathOption = None,
    template_dirs: TemplateDirOption = None,
    engines: EngineOption = None,
    config: ConfigOption = None,
    attributes: AttributeOption = None,
    templates_first: TemplatesFirstOption = False,
    warn_on_skip: WarnOnSkipOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Convert a Markdown or HTML document to HTML through templates."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    try:
        options, document_attributes = resolve_options(
            config=config,
            template_dirs=template_dirs,
            engines=engines,
            attributes=attributes,
            templates_first=templates_first,
            warn_on_skip=warn_on_skip,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except HtmlsmithError as exc:
        if debug_enabled():
            raise
        emit_error(format_user_friendly_error(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    emitter = CliEmitter(state=state, debug_enabled=debug_enabled())

    try:
        document = read_document(input_path, document_attributes)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="INPUT") from exc
    except HtmlsmithError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        converter = HtmlConverter(options, attributes=document_attributes, emitter=emitter)
        html = converter.convert(document)
    except HtmlsmithError as exc:
        if debug_enabled():
            raise
        emit_error(format_user_friendly_error(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if state.verbosity >= 1:
        for line in consume_event_diagnostics(state):
            typer.echo(line, err=True)

    if output is None:
        typer.echo(html)
        return

    write_output_file(output, html + "\n")
    typer.echo(f"HTML written to {output}", err=True)


__all__ = ["render"]

"""CLI helpers for inspecting resolved template chains."""

from __future__ import annotations

from collections.abc import Iterable

import typer

from htmlsmith.core.chain import TemplateChains
from htmlsmith.core.config import TemplateOptions
from htmlsmith.core.debug import format_user_friendly_error
from htmlsmith.core.exceptions import HtmlsmithError

from .._options import (
    ConfigOption,
    DebugOption,
    EngineOption,
    TemplateDirOption,
    TemplatesFirstOption,
    VerboseOption,
    WarnOnSkipOption,
)
from ..diagnostics import CliEmitter
from ..state import (
    consume_event_diagnostics,
    debug_enabled,
    emit_error,
    get_cli_state,
    set_cli_state,
)
from ..utils import resolve_options


def _format_list(values: Iterable[str]) -> str:
    sequence = list(values)
    return ", ".join(sequence) if sequence else "-"


def print_chains(options: TemplateOptions, chains: TemplateChains) -> None:
    """Print the template chains and the engine bindings as Rich tables."""
    from rich import box
    from rich.table import Table

    console = get_cli_state().console

    sources = Table(title="Template Sources", box=box.SQUARE, header_style="bold cyan")
    sources.add_column("Order", justify="right")
    sources.add_column("Source", style="green")
    for order, source in enumerate(options.sources()):
        sources.add_row(str(order), source.label)
    if not options.sources():
        sources.add_row("-", "No template sources configured")
    console.print(sources)

    chain_table = Table(title="Template Chains", box=box.SQUARE, header_style="bold cyan")
    chain_table.add_column("Node type", style="magenta")
    chain_table.add_column("Priority", justify="right")
    chain_table.add_column("Origin", style="green")
    chain_table.add_column("Render")
    entries = chains.describe()
    if not entries:
        chain_table.add_row("-", "-", "-", "No templates found")
    for entry in entries:
        chain_table.add_row(
            str(entry["node_type"]),
            str(entry["priority"]),
            str(entry["origin"]),
            str(entry["render"]),
        )
    console.print(chain_table)

    engine_table = Table(title="Engine Bindings", box=box.SQUARE, header_style="bold cyan")
    engine_table.add_column("Order", justify="right")
    engine_table.add_column("Pattern", style="magenta")
    engine_table.add_column("Engine", style="green")
    for binding in options.template_engines.describe():
        engine_table.add_row(str(binding["order"]), str(binding["pattern"]), str(binding["engine"]))
    console.print(engine_table)

    console.print(f"Templated node types: {_format_list(node.value for node in chains.node_types())}")


def templates(
    ctx: typer.Context,
    template_dirs: TemplateDirOption = None,
    engines: EngineOption = None,
    config: ConfigOption = None,
    templates_first: TemplatesFirstOption = False,
    warn_on_skip: WarnOnSkipOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """List the template chains resolved from directories and configuration."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    try:
        options, _ = resolve_options(
            config=config,
            template_dirs=template_dirs,
            engines=engines,
            attributes=None,
            templates_first=templates_first,
            warn_on_skip=warn_on_skip,
        )
        chains = TemplateChains.build(
            options.sources(), emitter=CliEmitter(state=state, debug_enabled=debug_enabled())
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except HtmlsmithError as exc:
        if debug_enabled():
            raise
        emit_error(format_user_friendly_error(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    print_chains(options, chains)

    if state.verbosity >= 1:
        for line in consume_event_diagnostics(state):
            typer.echo(line, err=True)


__all__ = ["print_chains", "templates"]

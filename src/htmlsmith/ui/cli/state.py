"""Per-invocation CLI state: verbosity, traceback mode and recorded events."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, Any

import click


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "consume_event_diagnostics",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Options shared by every command of one CLI invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list, init=False)

    @property
    def console(self) -> Console:
        """Console bound to the current ``sys.stdout``."""
        from rich.console import Console

        return Console(file=sys.stdout)

    @property
    def err_console(self) -> Console:
        """Console bound to the current ``sys.stderr``."""
        from rich.console import Console

        return Console(file=sys.stderr, highlight=False)

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.append((name, dict(payload or {})))

    def drain_events(self) -> list[tuple[str, dict[str, Any]]]:
        """Return the recorded events in arrival order and forget them."""
        drained, self.events = self.events, []
        return drained


_CURRENT_STATE: ContextVar[CLIState | None] = ContextVar("htmlsmith_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state attached to the active Click context.

    Outside of a command (tests, ``main()`` error handling) the state of the
    last command that ran is reused.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        state = ctx.find_object(CLIState)
        if state is None and create:
            state = ctx.ensure_object(CLIState)
        if state is not None:
            _CURRENT_STATE.set(state)
            return state

    state = _CURRENT_STATE.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _CURRENT_STATE.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Apply command options to the current state and return it."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _details(exception: BaseException, message: str, verbosity: int) -> list[str]:
    lines: list[str] = []
    detail = str(exception).strip()
    if detail and detail not in message:
        lines.append(detail)
    lines.append(f"type: {type(exception).__name__}")
    lines.extend(str(note) for note in getattr(exception, "__notes__", ()))

    if verbosity >= 2:
        causes: list[str] = []
        seen = {id(exception)}
        cause = exception.__cause__ or exception.__context__
        while cause is not None and id(cause) not in seen:
            seen.add(id(cause))
            causes.append(f"  {type(cause).__name__}: {cause}")
            cause = cause.__cause__ or cause.__context__
        if causes:
            lines.append("caused by:")
            lines.extend(causes)

    if verbosity >= 3:
        lines.append(f"repr: {exception!r}")
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print a warning or an error to stderr.

    With ``-v`` the exception type and notes follow the message, ``-vv`` adds
    the cause chain and ``-vvv`` the exception repr.
    """
    from rich.text import Text

    state = get_cli_state()
    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        text.append("\n" + "\n".join(_details(exception, message, state.verbosity)), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def consume_event_diagnostics(state: CLIState) -> list[str]:
    """Drain recorded events, returning one summary line per known event."""
    from htmlsmith.core.diagnostics import format_event_message

    lines: list[str] = []
    for name, payload in state.drain_events():
        message = format_event_message(name, payload)
        if message:
            lines.append(message)
    return lines


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False

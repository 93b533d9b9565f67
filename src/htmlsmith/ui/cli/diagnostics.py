"""Emitter connecting the template layer to the CLI state."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from htmlsmith.core.diagnostics import DiagnosticEmitter

from .state import CLIState, emit_error, emit_warning, get_cli_state


class CliEmitter(DiagnosticEmitter):
    """Print warnings and errors right away; keep events on the CLI state.

    Commands print the recorded events once their work is done, and only in
    verbose mode.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self.state = state if state is not None else get_cli_state()
        self.debug_enabled = (
            self.state.show_tracebacks if debug_enabled is None else bool(debug_enabled)
        )

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.state.record_event(name, payload)


__all__ = ["CliEmitter"]

"""Helpers for code that accepts an optional diagnostic emitter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import HtmlsmithError, exception_hint


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    return NullEmitter() if emitter is None else emitter


def record_event(emitter: DiagnosticEmitter | None, name: str, payload: Mapping[str, Any]) -> None:
    ensure_emitter(emitter).event(name, payload)


def format_user_friendly_error(error: BaseException) -> str:
    """Summarise ``error`` in one sentence ending with a ``--debug`` hint.

    Template layer errors are reported as configuration failures, anything else
    as a rendering failure. The innermost cause supplies the detail.
    """
    prefix = "Configuration failed" if isinstance(error, HtmlsmithError) else "Rendering failed"
    hint = exception_hint(error)
    summary = f"{prefix}: {hint}" if hint else prefix
    return f"{summary.rstrip('.')}. Re-run with --debug for technical details."


__all__ = [
    "ensure_emitter",
    "format_user_friendly_error",
    "record_event",
]

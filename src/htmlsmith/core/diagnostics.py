"""Diagnostics raised while templates are discovered and compiled.

Library code never prints: it hands warnings, errors and structured events to
an emitter chosen by the caller (the CLI, a logging bridge, or nothing).
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver for template layer diagnostics."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard everything."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def error(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        pass


class LoggingEmitter:
    """Route diagnostics to a :mod:`logging` logger.

    Known events become ``INFO`` records, anything else is logged at ``DEBUG``.
    """

    def __init__(self, log: logging.Logger | None = None, *, debug_enabled: bool = False) -> None:
        self.log = log or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.log.warning(message, exc_info=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.log.error(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        summary = format_event_message(name, payload)
        if summary is None:
            self.log.debug("event %s %r", name, dict(payload))
        else:
            self.log.info(summary)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Describe a known event in one line, or return ``None`` for other events."""
    data = dict(payload)

    if name == "template_loaded":
        node_type = data.get("node_type") or "<unknown>"
        path = data.get("path") or "<unknown>"
        engine = data.get("engine")
        suffix = f" ({engine})" if engine else ""
        return f"Loaded template '{node_type}' from {path}{suffix}"

    if name == "template_skipped":
        path = data.get("path") or "<unknown>"
        reason = data.get("reason") or "skipped"
        return f"Skipping {path}: {reason}"

    if name == "template_dir_missing":
        path = data.get("path") or "<unknown>"
        return f"Template directory not found: {path}"

    if name == "chains_built":
        sources = data.get("sources", 0)
        node_types = data.get("node_types") or []
        return f"Resolved {len(node_types)} templated node type(s) from {sources} source(s)"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]

"""Custom exception hierarchy for the template resolution layer."""

from __future__ import annotations


class HtmlsmithError(RuntimeError):
    """Base exception for template resolution failures."""


class ConfigurationError(HtmlsmithError):
    """Raised when template options cannot be turned into a usable configuration."""


class TemplateCompileError(HtmlsmithError):
    """Raised when an engine fails to compile a template file."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigurationError",
    "HtmlsmithError",
    "TemplateCompileError",
    "exception_hint",
    "exception_messages",
]

"""Node types recognised by the template layer.

Templates are keyed by :class:`NodeType` rather than by free-form strings so a
typo in a template mapping or a stray file in a template directory surfaces
as a configuration problem instead of silently never matching.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .exceptions import ConfigurationError


class NodeType(str, Enum):
    """Closed set of node kinds emitted by the document pipeline."""

    DOCUMENT = "document"
    SECTION = "section"
    PREAMBLE = "preamble"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    LISTING = "listing"
    LITERAL = "literal"
    ADMONITION = "admonition"
    EXAMPLE = "example"
    SIDEBAR = "sidebar"
    QUOTE = "quote"
    OPEN = "open"
    PASS = "pass"
    ULIST = "ulist"
    OLIST = "olist"
    DLIST = "dlist"
    LIST_ITEM = "list_item"
    TABLE = "table"
    THEMATIC_BREAK = "thematic_break"
    FLOATING_TITLE = "floating_title"
    INLINE_ANCHOR = "inline_anchor"
    INLINE_IMAGE = "inline_image"
    INLINE_QUOTED = "inline_quoted"
    INLINE_BREAK = "inline_break"
    TEXT = "text"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Any) -> NodeType:
        """Return the node type matching ``value`` or raise ``ConfigurationError``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        known = ", ".join(member.value for member in cls)
        raise ConfigurationError(f"Unknown node type {value!r}. Known node types: {known}.")

    @classmethod
    def lookup(cls, value: str) -> NodeType | None:
        """Return the node type named ``value`` or ``None``."""
        try:
            return cls(value)
        except ValueError:
            return None


@runtime_checkable
class Node(Protocol):
    """Read-only view of a document node exposed to render functions."""

    @property
    def node_type(self) -> NodeType: ...

    @property
    def roles(self) -> Sequence[str]: ...

    @property
    def title(self) -> str | None: ...

    @property
    def target(self) -> str | None: ...

    @property
    def content(self) -> str: ...

    def has_role(self, name: str) -> bool: ...

    def attr(self, name: str, default: Any = None) -> Any: ...


__all__ = ["Node", "NodeType"]

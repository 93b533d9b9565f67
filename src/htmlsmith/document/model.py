"""Immutable document tree handed to the converter."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from htmlsmith.core.nodes import NodeType


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """One node of a parsed document.

    ``title`` and ``text`` hold markup that is already safe to emit. ``text``
    is only set on leaves (text runs, listings, raw tables); containers carry
    their content in ``children``.
    """

    node_type: NodeType
    children: tuple[DocumentNode, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)
    roles: tuple[str, ...] = ()
    title: str | None = None
    target: str | None = None
    text: str | None = None
    id: str | None = None

    def walk(self) -> Iterator[DocumentNode]:
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, node_type: NodeType | str) -> list[DocumentNode]:
        """Return every descendant (including self) of the given type."""
        selected = NodeType.coerce(node_type)
        return [node for node in self.walk() if node.node_type is selected]


__all__ = ["DocumentNode"]

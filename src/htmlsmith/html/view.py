"""Read-only node views handed to templates and the default renderer."""

from __future__ import annotations

from collections.abc import Mapping
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from htmlsmith.core.nodes import NodeType
from htmlsmith.document.model import DocumentNode


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .converter import HtmlConverter


_ABSOLUTE_URI = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:|/)")


class NodeView:
    """Expose a :class:`DocumentNode` together with its rendering context.

    ``content`` renders the children through the owning converter, so every
    child starts its own template chain.
    """

    __slots__ = ("_converter", "_document_attributes", "_node")

    def __init__(
        self,
        node: DocumentNode,
        converter: HtmlConverter,
        document_attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self._node = node
        self._converter = converter
        self._document_attributes = MappingProxyType(dict(document_attributes or {}))

    def __repr__(self) -> str:
        return f"NodeView({self._node.node_type.value!r}, id={self._node.id!r})"

    @property
    def source(self) -> DocumentNode:
        return self._node

    @property
    def node_type(self) -> NodeType:
        return self._node.node_type

    @property
    def roles(self) -> tuple[str, ...]:
        return self._node.roles

    @property
    def role(self) -> str | None:
        """Return the roles joined by spaces, ``None`` when there are none."""
        return " ".join(self._node.roles) or None

    @property
    def title(self) -> str | None:
        return self._node.title

    @property
    def target(self) -> str | None:
        return self._node.target

    @property
    def text(self) -> str | None:
        return self._node.text

    @property
    def id(self) -> str | None:
        return self._node.id

    @property
    def attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(dict(self._node.attributes))

    @property
    def document_attributes(self) -> Mapping[str, Any]:
        return self._document_attributes

    @property
    def children(self) -> tuple[NodeView, ...]:
        return tuple(self._view(child) for child in self._node.children)

    @property
    def content(self) -> str:
        """Return the rendered children, or the text of a leaf node."""
        if not self._node.children:
            return self._node.text or ""
        separator = "" if all(_is_inline(child) for child in self._node.children) else "\n"
        return separator.join(
            self._converter.render(child, attributes=self._document_attributes)
            for child in self._node.children
        )

    def has_role(self, name: str) -> bool:
        return name in self._node.roles

    def attr(self, name: str, default: Any = None) -> Any:
        """Return the node attribute ``name`` or ``default``."""
        return self._node.attributes.get(name, default)

    def document_attr(self, name: str, default: Any = None) -> Any:
        """Return the document attribute ``name`` or ``default``."""
        return self._document_attributes.get(name, default)

    def image_uri(self, target: str | None = None) -> str:
        """Resolve an image target against the ``imagesdir`` document attribute."""
        reference = self._node.target if target is None else target
        if not reference:
            return ""
        images_dir = self.document_attr("imagesdir")
        if not images_dir or _ABSOLUTE_URI.match(reference):
            return reference
        return f"{str(images_dir).rstrip('/')}/{reference}"

    def _view(self, node: DocumentNode) -> NodeView:
        return NodeView(node, self._converter, self._document_attributes)


def _is_inline(node: DocumentNode) -> bool:
    return node.node_type.value.startswith("inline_") or node.node_type is NodeType.TEXT


__all__ = ["NodeView"]

"""Convert document trees to HTML through template chains."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from htmlsmith.core.chain import TemplateChains
from htmlsmith.core.config import TemplateOptions
from htmlsmith.core.debug import ensure_emitter
from htmlsmith.core.diagnostics import DiagnosticEmitter
from htmlsmith.core.invoker import ChainInvoker
from htmlsmith.document.html import parse_html
from htmlsmith.document.markdown import parse_markdown
from htmlsmith.document.model import DocumentNode

from .base import BaseHtmlRenderer
from .view import NodeView


logger = logging.getLogger(__name__)


class HtmlConverter:
    """Render :class:`DocumentNode` trees with user templates.

    Template sources are loaded and chained once, when the converter is
    created. Each node rendered afterwards starts at the top of the chain for
    its type; nodes without templates go straight to ``default_renderer``.
    """

    def __init__(
        self,
        options: TemplateOptions | None = None,
        *,
        attributes: Mapping[str, Any] | None = None,
        default_renderer: BaseHtmlRenderer | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.options = options or TemplateOptions()
        self.attributes = dict(attributes or {})
        self.default_renderer = default_renderer or BaseHtmlRenderer()
        self.emitter = ensure_emitter(emitter)
        self.chains = TemplateChains.build(self.options.sources(), emitter=self.emitter)
        self._invoker = ChainInvoker(self.chains, self.default_renderer.render)

    @classmethod
    def from_options(
        cls,
        *,
        attributes: Mapping[str, Any] | None = None,
        default_renderer: BaseHtmlRenderer | None = None,
        emitter: DiagnosticEmitter | None = None,
        **options: Any,
    ) -> HtmlConverter:
        """Validate keyword ``options`` and build a converter from them."""
        return cls(
            TemplateOptions.from_mapping(options),
            attributes=attributes,
            default_renderer=default_renderer,
            emitter=emitter,
        )

    def view(
        self, node: DocumentNode, attributes: Mapping[str, Any] | None = None
    ) -> NodeView:
        """Wrap ``node`` for rendering with the given document attributes."""
        return NodeView(node, self, self.attributes if attributes is None else attributes)

    def render(
        self,
        node: DocumentNode | NodeView,
        *,
        attributes: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a single node through its template chain."""
        view = node if isinstance(node, NodeView) else self.view(node, attributes)
        return self._invoker.render(view)

    def convert(
        self, document: DocumentNode, *, attributes: Mapping[str, Any] | None = None
    ) -> str:
        """Render a whole document.

        Document attributes are the root node attributes, overridden by the
        converter attributes, overridden by ``attributes``.
        """
        merged = dict(document.attributes)
        merged.update(self.attributes)
        merged.update(attributes or {})
        logger.debug(
            "Converting %s with %d templated node type(s).",
            document.node_type.value,
            len(self.chains),
        )
        return self.render(document, attributes=merged)


def convert_document(
    document: DocumentNode,
    *,
    attributes: Mapping[str, Any] | None = None,
    emitter: DiagnosticEmitter | None = None,
    **options: Any,
) -> str:
    """Render ``document`` with templates described by keyword ``options``."""
    converter = HtmlConverter.from_options(attributes=attributes, emitter=emitter, **options)
    return converter.convert(document)


def convert_html(
    html: str,
    *,
    attributes: Mapping[str, Any] | None = None,
    emitter: DiagnosticEmitter | None = None,
    **options: Any,
) -> str:
    """Parse an HTML fragment and render it through templates."""
    document = parse_html(html, attributes)
    return convert_document(document, attributes=attributes, emitter=emitter, **options)


def convert_markdown(
    text: str,
    *,
    attributes: Mapping[str, Any] | None = None,
    emitter: DiagnosticEmitter | None = None,
    **options: Any,
) -> str:
    """Parse Markdown (with optional front matter) and render it through templates."""
    document = parse_markdown(text, attributes)
    return convert_document(document, attributes=attributes, emitter=emitter, **options)


__all__ = ["HtmlConverter", "convert_document", "convert_html", "convert_markdown"]

"""HTML output for document trees."""

from __future__ import annotations

from .base import BaseHtmlRenderer, default_alt
from .converter import HtmlConverter, convert_document, convert_html, convert_markdown
from .view import NodeView

__all__ = [
    "BaseHtmlRenderer",
    "HtmlConverter",
    "NodeView",
    "convert_document",
    "convert_html",
    "convert_markdown",
    "default_alt",
]

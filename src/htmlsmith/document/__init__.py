"""Document trees consumed by the converter."""

from __future__ import annotations

from .html import HtmlDocumentBuilder, parse_html
from .markdown import MarkdownConversionError, parse_markdown, render_markdown, split_front_matter
from .model import DocumentNode

__all__ = [
    "DocumentNode",
    "HtmlDocumentBuilder",
    "MarkdownConversionError",
    "parse_html",
    "parse_markdown",
    "render_markdown",
    "split_front_matter",
]

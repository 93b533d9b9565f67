"""Markdown inputs converted to document trees through Python-Markdown."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

import markdown
import yaml

from htmlsmith.core.exceptions import HtmlsmithError

from .html import parse_html
from .model import DocumentNode


DEFAULT_MARKDOWN_EXTENSIONS = [
    "abbr",
    "admonition",
    "attr_list",
    "def_list",
    "fenced_code",
    "tables",
]


class MarkdownConversionError(HtmlsmithError):
    """Raised when Markdown cannot be converted into HTML."""


@dataclass(slots=True)
class MarkdownDocument:
    """Result of converting Markdown into HTML."""

    html: str
    front_matter: dict[str, Any]


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from Markdown content, returning metadata and body."""
    candidate = source.lstrip("\ufeff")
    lines = candidate.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, source

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in {"---", "..."}:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, source

    try:
        metadata = yaml.safe_load("\n".join(front_matter_lines)) or {}
    except yaml.YAMLError:
        return {}, source

    if not isinstance(metadata, dict):
        metadata = {}

    body = "\n".join(lines[closing_index + 1 :])
    if source.endswith("\n"):
        body += "\n"
    return metadata, body


def render_markdown(source: str, extensions: Sequence[str] | None = None) -> MarkdownDocument:
    """Convert Markdown source into HTML while collecting front matter."""
    metadata, body = split_front_matter(source)
    selected = list(extensions) if extensions is not None else list(DEFAULT_MARKDOWN_EXTENSIONS)
    try:
        html = markdown.markdown(body, extensions=selected, output_format="html")
    except (ImportError, ValueError, AttributeError) as exc:
        raise MarkdownConversionError(f"Failed to convert Markdown: {exc}") from exc
    return MarkdownDocument(html=html, front_matter=metadata)


def parse_markdown(
    source: str,
    attributes: Mapping[str, Any] | None = None,
    *,
    extensions: Sequence[str] | None = None,
) -> DocumentNode:
    """Parse Markdown into a document tree.

    Front matter ``attributes`` are merged into the document attributes, with
    explicitly passed ``attributes`` taking precedence. A front matter
    ``title`` becomes the document title.
    """
    document = render_markdown(source, extensions)
    merged: dict[str, Any] = {}
    front_attributes = document.front_matter.get("attributes")
    if isinstance(front_attributes, Mapping):
        merged.update({str(key): value for key, value in front_attributes.items()})
    title = document.front_matter.get("title")
    if isinstance(title, str) and title.strip():
        merged.setdefault("doctitle", title.strip())
    merged.update(attributes or {})

    root = parse_html(document.html, merged)
    doctitle = root.attributes.get("doctitle")
    if root.title is None and isinstance(doctitle, str):
        return replace(root, title=doctitle)
    return root


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownConversionError",
    "MarkdownDocument",
    "parse_markdown",
    "render_markdown",
    "split_front_matter",
]

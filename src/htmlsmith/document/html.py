"""Build document trees from HTML fragments with BeautifulSoup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
from markupsafe import escape
from slugify import slugify

from htmlsmith.core.nodes import NodeType

from .model import DocumentNode


HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

INLINE_QUOTED_TYPES: dict[str, str] = {
    "em": "emphasis",
    "i": "emphasis",
    "strong": "strong",
    "b": "strong",
    "code": "monospaced",
    "kbd": "monospaced",
    "mark": "mark",
    "sup": "superscript",
    "sub": "subscript",
}

INLINE_TAGS = frozenset(
    {"a", "abbr", "br", "cite", "img", "q", "s", "small", "span", "u", "ins", "del"}
    | set(INLINE_QUOTED_TYPES)
)

SKIPPED_TAGS = frozenset({"script", "style", "template", "head", "title", "meta", "link"})

ADMONITION_CLASSES = frozenset({"admonition"})


def gather_classes(value: Any) -> list[str]:
    """Return a list of classes extracted from a BeautifulSoup attribute."""
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return [cast(str, item) for item in value if isinstance(item, str)]
    return []


def coerce_attribute(value: Any) -> str | None:
    """Normalise a BeautifulSoup attribute value to a string when possible."""
    if isinstance(value, str):
        return value
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        items = [item for item in value if isinstance(item, str)]
        return " ".join(items) if items else None
    return None


def section_id(title_text: str) -> str:
    """Return the generated identifier of a section titled ``title_text``."""
    slug = slugify(title_text, separator="_")
    return f"_{slug}" if slug else "_section"


def _is_ignorable(element: PageElement) -> bool:
    if isinstance(element, PreformattedString):
        return True
    if isinstance(element, NavigableString):
        return not str(element).strip()
    return isinstance(element, Tag) and element.name in SKIPPED_TAGS


def _is_inline(element: PageElement) -> bool:
    if isinstance(element, PreformattedString):
        return False
    if isinstance(element, NavigableString):
        return True
    return isinstance(element, Tag) and element.name in INLINE_TAGS


def _has_content(node: DocumentNode) -> bool:
    return node.node_type is not NodeType.TEXT or bool((node.text or "").strip())


def _title_attribute(element: Tag) -> str | None:
    value = coerce_attribute(element.get("title"))
    return str(escape(value)) if value else None


class HtmlDocumentBuilder:
    """Translate a BeautifulSoup tree into :class:`DocumentNode` instances."""

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self.attributes = dict(attributes or {})

    def build(self, html: str) -> DocumentNode:
        """Parse ``html`` and return the document root."""
        soup = BeautifulSoup(html, "html.parser")
        attributes = dict(self._meta_attributes(soup))
        attributes.update(self.attributes)

        title: str | None = None
        if soup.title is not None and soup.title.string:
            title = str(escape(soup.title.string.strip()))
        if title is not None:
            attributes.setdefault("doctitle", title)

        root: Tag = soup.body or soup.html or soup
        return DocumentNode(
            node_type=NodeType.DOCUMENT,
            children=self.blocks(root.contents),
            attributes=attributes,
            title=title,
        )

    def _meta_attributes(self, soup: BeautifulSoup) -> Iterable[tuple[str, str]]:
        for meta in soup.find_all("meta"):
            name = coerce_attribute(meta.get("name"))
            content = coerce_attribute(meta.get("content"))
            if name and content is not None:
                yield name, content

    def blocks(self, elements: Iterable[PageElement]) -> tuple[DocumentNode, ...]:
        """Convert block-level content, grouping stray inline runs into paragraphs."""
        nodes: list[DocumentNode] = []
        pending: list[PageElement] = []

        def _flush() -> None:
            if pending:
                children = self.inlines(pending)
                if any(_has_content(child) for child in children):
                    nodes.append(DocumentNode(node_type=NodeType.PARAGRAPH, children=children))
                pending.clear()

        for element in elements:
            if isinstance(element, PreformattedString):
                continue
            # An image opening an inline run is a block image.
            if isinstance(element, Tag) and element.name == "img" and not pending:
                roles = tuple(gather_classes(element.get("class")))
                nodes.append(self._image(element, NodeType.IMAGE, roles=roles))
                continue
            if _is_inline(element):
                if pending or not _is_ignorable(element):
                    pending.append(element)
                continue
            _flush()
            if _is_ignorable(element) or not isinstance(element, Tag):
                continue
            if element.name in HEADING_TAGS:
                nodes.append(self._floating_title(element))
                continue
            node = self.block(element)
            if node is not None:
                nodes.append(node)
        _flush()
        return tuple(nodes)

    def block(self, element: Tag) -> DocumentNode | None:
        """Convert a single block-level element."""
        name = element.name
        classes = tuple(gather_classes(element.get("class")))
        element_id = coerce_attribute(element.get("id"))

        if name == "p":
            return DocumentNode(
                node_type=NodeType.PARAGRAPH,
                children=self.inlines(element.contents),
                roles=classes,
                title=_title_attribute(element),
                id=element_id,
            )
        if name == "img":
            return self._image(element, NodeType.IMAGE, roles=classes)
        if name == "figure":
            return self._figure(element, classes, element_id)
        if name == "section":
            return self._section(element, classes, element_id)
        if name in {"ul", "ol"}:
            return self._list(element, classes, element_id)
        if name == "dl":
            return self._description_list(element, classes, element_id)
        if name == "pre":
            return self._listing(element, classes, element_id)
        if name == "blockquote":
            return self._quote(element, classes, element_id)
        if name == "hr":
            return DocumentNode(node_type=NodeType.THEMATIC_BREAK, roles=classes)
        if name == "table":
            return DocumentNode(
                node_type=NodeType.TABLE, text=str(element), roles=classes, id=element_id
            )
        if name in {"div", "aside", "article", "main", "header", "footer", "nav"}:
            return self._division(element, classes, element_id)
        return DocumentNode(node_type=NodeType.PASS, text=str(element), roles=classes)

    def inlines(self, elements: Iterable[PageElement]) -> tuple[DocumentNode, ...]:
        """Convert inline content into text and inline nodes."""
        nodes: list[DocumentNode] = []
        for element in elements:
            if isinstance(element, PreformattedString):
                continue
            if isinstance(element, NavigableString):
                text = str(element)
                if text:
                    nodes.append(DocumentNode(node_type=NodeType.TEXT, text=str(escape(text))))
                continue
            if not isinstance(element, Tag) or element.name in SKIPPED_TAGS:
                continue
            nodes.extend(self.inline(element))
        return tuple(nodes)

    def inline(self, element: Tag) -> tuple[DocumentNode, ...]:
        """Convert a single inline element; unknown tags are flattened."""
        name = element.name
        classes = tuple(gather_classes(element.get("class")))
        element_id = coerce_attribute(element.get("id"))

        if name == "a":
            href = coerce_attribute(element.get("href"))
            if href is None:
                anchor_type = "ref"
            elif href.startswith("#"):
                anchor_type = "xref"
            else:
                anchor_type = "link"
            return (
                DocumentNode(
                    node_type=NodeType.INLINE_ANCHOR,
                    children=self.inlines(element.contents),
                    attributes={"type": anchor_type},
                    roles=classes,
                    target=href,
                    title=_title_attribute(element),
                    id=element_id,
                ),
            )
        if name == "img":
            return (self._image(element, NodeType.INLINE_IMAGE, roles=classes),)
        if name == "br":
            return (DocumentNode(node_type=NodeType.INLINE_BREAK),)
        quoted_type = INLINE_QUOTED_TYPES.get(name)
        if quoted_type is None and name == "span" and classes:
            quoted_type = "unquoted"
        if quoted_type is not None:
            return (
                DocumentNode(
                    node_type=NodeType.INLINE_QUOTED,
                    children=self.inlines(element.contents),
                    attributes={"type": quoted_type},
                    roles=classes,
                    id=element_id,
                ),
            )
        return self.inlines(element.contents)

    def _image(self, element: Tag, node_type: NodeType, *, roles: tuple[str, ...]) -> DocumentNode:
        attributes: dict[str, Any] = {}
        for key in ("alt", "width", "height"):
            value = coerce_attribute(element.get(key))
            if value is not None:
                attributes[key] = value
        return DocumentNode(
            node_type=node_type,
            attributes=attributes,
            roles=roles,
            target=coerce_attribute(element.get("src")),
            title=_title_attribute(element),
            id=coerce_attribute(element.get("id")),
        )

    def _figure(
        self, element: Tag, classes: tuple[str, ...], element_id: str | None
    ) -> DocumentNode:
        image = element.find("img")
        caption = element.find("figcaption")
        title = caption.decode_contents().strip() if isinstance(caption, Tag) else None
        if isinstance(image, Tag):
            node = self._image(image, NodeType.IMAGE, roles=classes)
            return DocumentNode(
                node_type=NodeType.IMAGE,
                attributes=node.attributes,
                roles=classes,
                target=node.target,
                title=title or node.title,
                id=element_id or node.id,
            )
        content = [child for child in element.contents if child is not caption]
        return DocumentNode(
            node_type=NodeType.OPEN,
            children=self.blocks(content),
            roles=classes,
            title=title,
            id=element_id,
        )

    def _section(
        self, element: Tag, classes: tuple[str, ...], element_id: str | None
    ) -> DocumentNode:
        heading = element.find(list(HEADING_TAGS), recursive=False)
        title: str | None = None
        level = 1
        content: list[PageElement] = list(element.contents)
        if isinstance(heading, Tag):
            title = heading.decode_contents().strip()
            level = max(int(heading.name[1]) - 1, 0)
            content = [child for child in content if child is not heading]
            if element_id is None:
                element_id = coerce_attribute(heading.get("id")) or section_id(heading.get_text())
        return DocumentNode(
            node_type=NodeType.SECTION,
            children=self.blocks(content),
            attributes={"level": level},
            roles=classes,
            title=title,
            id=element_id,
        )

    def _floating_title(self, element: Tag) -> DocumentNode:
        element_id = coerce_attribute(element.get("id")) or section_id(element.get_text())
        return DocumentNode(
            node_type=NodeType.FLOATING_TITLE,
            attributes={"level": max(int(element.name[1]) - 1, 0)},
            roles=tuple(gather_classes(element.get("class"))),
            title=element.decode_contents().strip(),
            id=element_id,
        )

    def _list(self, element: Tag, classes: tuple[str, ...], element_id: str | None) -> DocumentNode:
        items: list[DocumentNode] = []
        for child in element.find_all("li", recursive=False):
            items.append(self._list_item(child))
        attributes: dict[str, Any] = {}
        start = coerce_attribute(element.get("start"))
        if element.name == "ol" and start is not None:
            attributes["start"] = start
        return DocumentNode(
            node_type=NodeType.ULIST if element.name == "ul" else NodeType.OLIST,
            children=tuple(items),
            attributes=attributes,
            roles=classes,
            title=_title_attribute(element),
            id=element_id,
        )

    def _list_item(self, element: Tag) -> DocumentNode:
        contents = list(element.contents)
        if all(_is_inline(child) or _is_ignorable(child) for child in contents):
            children = self.inlines(contents)
        else:
            children = self.blocks(contents)
        return DocumentNode(
            node_type=NodeType.LIST_ITEM,
            children=children,
            roles=tuple(gather_classes(element.get("class"))),
            id=coerce_attribute(element.get("id")),
        )

    def _description_list(
        self, element: Tag, classes: tuple[str, ...], element_id: str | None
    ) -> DocumentNode:
        items: list[DocumentNode] = []
        term: str | None = None
        for child in element.find_all(["dt", "dd"], recursive=False):
            if child.name == "dt":
                term = child.decode_contents().strip()
                continue
            item = self._list_item(child)
            items.append(
                DocumentNode(
                    node_type=NodeType.LIST_ITEM,
                    children=item.children,
                    roles=item.roles,
                    title=term,
                    id=item.id,
                )
            )
            term = None
        return DocumentNode(
            node_type=NodeType.DLIST, children=tuple(items), roles=classes, id=element_id
        )

    def _listing(
        self, element: Tag, classes: tuple[str, ...], element_id: str | None
    ) -> DocumentNode:
        code = element.find("code")
        source = code if isinstance(code, Tag) else element
        attributes: dict[str, Any] = {}
        for name in gather_classes(source.get("class")):
            if name.startswith("language-"):
                attributes["language"] = name.removeprefix("language-")
                break
        return DocumentNode(
            node_type=NodeType.LISTING,
            attributes=attributes,
            roles=classes,
            title=_title_attribute(element),
            text=str(escape(source.get_text())),
            id=element_id,
        )

    def _quote(self, element: Tag, classes: tuple[str, ...], element_id: str | None) -> DocumentNode:
        attributes: dict[str, Any] = {}
        content: list[PageElement] = list(element.contents)
        footer = element.find("footer", recursive=False)
        if isinstance(footer, Tag):
            attributes["attribution"] = footer.decode_contents().strip()
            content = [child for child in content if child is not footer]
        cite = coerce_attribute(element.get("cite"))
        if cite is not None:
            attributes["citetitle"] = cite
        return DocumentNode(
            node_type=NodeType.QUOTE,
            children=self.blocks(content),
            attributes=attributes,
            roles=classes,
            id=element_id,
        )

    def _division(
        self, element: Tag, classes: tuple[str, ...], element_id: str | None
    ) -> DocumentNode:
        content: list[PageElement] = list(element.contents)
        title: str | None = _title_attribute(element)
        title_node = element.find(class_=["title", "admonition-title"], recursive=False)
        if isinstance(title_node, Tag):
            title = title_node.decode_contents().strip()
            content = [child for child in content if child is not title_node]

        if ADMONITION_CLASSES.intersection(classes):
            kinds = [name for name in classes if name not in ADMONITION_CLASSES]
            return DocumentNode(
                node_type=NodeType.ADMONITION,
                children=self.blocks(content),
                attributes={"name": kinds[0] if kinds else "note"},
                roles=tuple(kinds[1:]),
                title=title,
                id=element_id,
            )
        if element.name == "aside" or "sidebar" in classes:
            node_type = NodeType.SIDEBAR
        elif "example" in classes:
            node_type = NodeType.EXAMPLE
        elif "paragraph" in classes:
            paragraph = element.find("p", recursive=False)
            if isinstance(paragraph, Tag):
                inner = self.block(paragraph)
                if inner is not None:
                    roles = tuple(name for name in classes if name != "paragraph")
                    return DocumentNode(
                        node_type=NodeType.PARAGRAPH,
                        children=inner.children,
                        roles=roles + inner.roles,
                        title=title,
                        id=element_id or inner.id,
                    )
            node_type = NodeType.OPEN
        else:
            node_type = NodeType.OPEN
        return DocumentNode(
            node_type=node_type,
            children=self.blocks(content),
            roles=classes,
            title=title,
            id=element_id,
        )


def parse_html(html: str, attributes: Mapping[str, Any] | None = None) -> DocumentNode:
    """Parse an HTML document or fragment into a document tree."""
    return HtmlDocumentBuilder(attributes).build(html)


__all__ = ["HtmlDocumentBuilder", "coerce_attribute", "gather_classes", "parse_html", "section_id"]

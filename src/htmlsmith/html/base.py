"""Built-in HTML output used when no template claims a node.

:class:`BaseHtmlRenderer` is the bottom of every template chain: a template
calling ``next()`` past the last candidate lands here. Each node type maps to
a ``render_<node_type>`` method; unknown types fall back to their content.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from markupsafe import escape


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .view import NodeView


QUOTED_TAGS: dict[str, str] = {
    "emphasis": "em",
    "strong": "strong",
    "monospaced": "code",
    "mark": "mark",
    "superscript": "sup",
    "subscript": "sub",
}


def _class_attribute(*names: str | None, roles: Iterable[str] = ()) -> str:
    classes = [name for name in names if name]
    classes.extend(roles)
    if not classes:
        return ""
    return f' class="{escape(" ".join(classes))}"'


def _id_attribute(node: NodeView) -> str:
    return f' id="{escape(node.id)}"' if node.id else ""


def _title_block(node: NodeView) -> str:
    return f'<div class="title">{node.title}</div>\n' if node.title else ""


def _heading_level(node: NodeView) -> int:
    try:
        level = int(node.attr("level", 1))
    except (TypeError, ValueError):
        level = 1
    return min(max(level + 1, 1), 6)


def default_alt(target: str | None) -> str:
    """Return the alternative text derived from an image target."""
    if not target:
        return ""
    stem = PurePosixPath(target.split("?", 1)[0]).stem
    return stem.replace("-", " ").replace("_", " ")


class BaseHtmlRenderer:
    """Render nodes as plain HTML5 without templates."""

    def render(self, node: NodeView) -> str:
        """Return the default markup for ``node``."""
        handler = self.handler_for(node.node_type.value)
        return handler(node)

    def handler_for(self, node_type: str) -> Callable[[NodeView], str]:
        """Return the method rendering ``node_type``."""
        handler = getattr(self, f"render_{node_type}", None)
        if handler is None:
            return self.render_fallback
        return handler

    def render_fallback(self, node: NodeView) -> str:
        return node.content

    def render_document(self, node: NodeView) -> str:
        return node.content

    def render_preamble(self, node: NodeView) -> str:
        return f'<div id="preamble">\n<div class="sectionbody">\n{node.content}\n</div>\n</div>'

    def render_section(self, node: NodeView) -> str:
        level = _heading_level(node)
        heading = f"<h{level}{_id_attribute(node)}>{node.title or ''}</h{level}>"
        classes = _class_attribute(f"sect{level - 1}", roles=node.roles)
        return f"<div{classes}>\n{heading}\n{node.content}\n</div>"

    def render_floating_title(self, node: NodeView) -> str:
        level = _heading_level(node)
        classes = _class_attribute("discrete", roles=node.roles)
        return f"<h{level}{_id_attribute(node)}{classes}>{node.title or ''}</h{level}>"

    def render_paragraph(self, node: NodeView) -> str:
        classes = _class_attribute("paragraph", roles=node.roles)
        return f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}<p>{node.content}</p>\n</div>"

    def render_image(self, node: NodeView) -> str:
        classes = _class_attribute("imageblock", roles=node.roles)
        caption = f'\n<div class="title">{node.title}</div>' if node.title else ""
        return (
            f"<div{_id_attribute(node)}{classes}>\n"
            f'<div class="content">\n{self._img(node)}\n</div>{caption}\n</div>'
        )

    def render_inline_image(self, node: NodeView) -> str:
        classes = _class_attribute("image", roles=node.roles)
        return f"<span{classes}>{self._img(node)}</span>"

    def _img(self, node: NodeView) -> str:
        alt = node.attr("alt")
        if alt is None:
            alt = default_alt(node.target)
        attributes = [f'src="{escape(node.image_uri())}"', f'alt="{escape(alt)}"']
        for key in ("width", "height"):
            value = node.attr(key)
            if value is not None:
                attributes.append(f'{key}="{escape(value)}"')
        if node.title:
            attributes.append(f'title="{node.title}"')
        return f"<img {' '.join(attributes)}>"

    def render_listing(self, node: NodeView) -> str:
        language = node.attr("language")
        if language:
            code_open = f'<code class="language-{escape(language)}" data-lang="{escape(language)}">'
        else:
            code_open = "<code>"
        classes = _class_attribute("listingblock", roles=node.roles)
        return (
            f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}"
            f'<div class="content">\n<pre class="highlight">{code_open}{node.text or ""}'
            "</code></pre>\n</div>\n</div>"
        )

    def render_literal(self, node: NodeView) -> str:
        classes = _class_attribute("literalblock", roles=node.roles)
        return (
            f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}"
            f'<div class="content">\n<pre>{node.text or node.content}</pre>\n</div>\n</div>'
        )

    def render_admonition(self, node: NodeView) -> str:
        name = str(node.attr("name", "note"))
        label = node.title or escape(name.capitalize())
        classes = _class_attribute("admonitionblock", name, roles=node.roles)
        return (
            f"<div{_id_attribute(node)}{classes}>\n"
            f'<div class="title">{label}</div>\n'
            f'<div class="content">\n{node.content}\n</div>\n</div>'
        )

    def _compound(self, node: NodeView, block_class: str) -> str:
        classes = _class_attribute(block_class, roles=node.roles)
        return (
            f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}"
            f'<div class="content">\n{node.content}\n</div>\n</div>'
        )

    def render_example(self, node: NodeView) -> str:
        return self._compound(node, "exampleblock")

    def render_sidebar(self, node: NodeView) -> str:
        return self._compound(node, "sidebarblock")

    def render_open(self, node: NodeView) -> str:
        return self._compound(node, "openblock")

    def render_quote(self, node: NodeView) -> str:
        classes = _class_attribute("quoteblock", roles=node.roles)
        attribution = node.attr("attribution")
        footer = (
            f'\n<div class="attribution">\n&#8212; {attribution}\n</div>' if attribution else ""
        )
        return (
            f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}"
            f"<blockquote>\n{node.content}\n</blockquote>{footer}\n</div>"
        )

    def render_pass(self, node: NodeView) -> str:
        return node.text or node.content

    def render_table(self, node: NodeView) -> str:
        return node.text or node.content

    def render_thematic_break(self, node: NodeView) -> str:
        return "<hr>"

    def render_ulist(self, node: NodeView) -> str:
        classes = _class_attribute("ulist", roles=node.roles)
        return f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}<ul>\n{node.content}\n</ul>\n</div>"

    def render_olist(self, node: NodeView) -> str:
        classes = _class_attribute("olist", roles=node.roles)
        start = node.attr("start")
        start_attribute = f' start="{escape(start)}"' if start is not None else ""
        return (
            f"<div{_id_attribute(node)}{classes}>\n{_title_block(node)}"
            f"<ol{start_attribute}>\n{node.content}\n</ol>\n</div>"
        )

    def render_dlist(self, node: NodeView) -> str:
        classes = _class_attribute("dlist", roles=node.roles)
        return f"<div{_id_attribute(node)}{classes}>\n<dl>\n{node.content}\n</dl>\n</div>"

    def render_list_item(self, node: NodeView) -> str:
        if node.title is not None:
            return f"<dt>{node.title}</dt>\n<dd>{node.content}</dd>"
        return f"<li{_class_attribute(roles=node.roles)}>{node.content}</li>"

    def render_inline_anchor(self, node: NodeView) -> str:
        anchor_type = node.attr("type", "link")
        if anchor_type == "ref" or node.target is None:
            return f'<a id="{escape(node.id or "")}"></a>{node.content}'
        classes = _class_attribute(roles=node.roles)
        return f'<a href="{escape(node.target)}"{classes}>{node.content}</a>'

    def render_inline_quoted(self, node: NodeView) -> str:
        tag = QUOTED_TAGS.get(str(node.attr("type", "")))
        if tag is None:
            return f"<span{_id_attribute(node)}{_class_attribute(roles=node.roles)}>{node.content}</span>"
        return f"<{tag}{_id_attribute(node)}{_class_attribute(roles=node.roles)}>{node.content}</{tag}>"

    def render_inline_break(self, node: NodeView) -> str:
        return "<br>"

    def render_text(self, node: NodeView) -> str:
        return node.text or ""


__all__ = ["BaseHtmlRenderer", "QUOTED_TAGS", "default_alt"]

from __future__ import annotations

from htmlsmith.core.nodes import NodeType
from htmlsmith.document import DocumentNode, parse_html
from htmlsmith.document.html import section_id


def _types(nodes: tuple[DocumentNode, ...]) -> list[NodeType]:
    return [node.node_type for node in nodes]


def test_paragraph_text_is_escaped() -> None:
    document = parse_html("<p>Fish &amp; chips &lt;3</p>")

    (paragraph,) = document.children
    assert paragraph.node_type is NodeType.PARAGRAPH
    (text,) = paragraph.children
    assert text.node_type is NodeType.TEXT
    assert text.text == "Fish &amp; chips &lt;3"


def test_whitespace_between_blocks_is_ignored() -> None:
    document = parse_html("\n<p>One</p>\n\n<p>Two</p>\n")

    assert _types(document.children) == [NodeType.PARAGRAPH, NodeType.PARAGRAPH]


def test_stray_inline_content_becomes_a_paragraph() -> None:
    document = parse_html("Loose <em>text</em><p>Block</p>")

    first, second = document.children
    assert first.node_type is NodeType.PARAGRAPH
    assert _types(first.children) == [NodeType.TEXT, NodeType.INLINE_QUOTED]
    assert first.children[1].attributes == {"type": "emphasis"}
    assert second.node_type is NodeType.PARAGRAPH


def test_roles_come_from_classes() -> None:
    (paragraph,) = parse_html('<p class="Role1 Role2" id="intro">Hi</p>').children

    assert paragraph.roles == ("Role1", "Role2")
    assert paragraph.id == "intro"


def test_meta_and_title_become_document_attributes() -> None:
    document = parse_html(
        "<html><head><title>Guide</title>"
        '<meta name="imagesdir" content="https://image.dir"></head>'
        "<body><p>Body</p></body></html>",
        {"author": "Ada"},
    )

    assert document.node_type is NodeType.DOCUMENT
    assert document.title == "Guide"
    assert document.attributes == {
        "imagesdir": "https://image.dir",
        "author": "Ada",
        "doctitle": "Guide",
    }
    assert _types(document.children) == [NodeType.PARAGRAPH]


def test_explicit_attributes_override_meta() -> None:
    document = parse_html('<meta name="imagesdir" content="a">', {"imagesdir": "b"})

    assert document.attributes["imagesdir"] == "b"


def test_sections_carry_level_title_and_id() -> None:
    document = parse_html("<section><h2>Getting <em>started</em></h2><p>Text</p></section>")

    (section,) = document.children
    assert section.node_type is NodeType.SECTION
    assert section.title == "Getting <em>started</em>"
    assert section.attributes == {"level": 1}
    assert section.id == "_getting_started"
    assert _types(section.children) == [NodeType.PARAGRAPH]


def test_loose_headings_are_floating_titles() -> None:
    (heading,) = parse_html('<h3 id="custom">Aside</h3>').children

    assert heading.node_type is NodeType.FLOATING_TITLE
    assert heading.attributes == {"level": 2}
    assert heading.id == "custom"
    assert section_id("Hello, World!") == "_hello_world"


def test_images_keep_target_and_attributes() -> None:
    (image,) = parse_html('<img src="source.png" alt="Alt Text Here" width="20">').children

    assert image.node_type is NodeType.IMAGE
    assert image.target == "source.png"
    assert image.attributes == {"alt": "Alt Text Here", "width": "20"}


def test_figure_caption_becomes_image_title() -> None:
    (image,) = parse_html(
        '<figure><img src="chart.png" alt="Chart"><figcaption>Sales</figcaption></figure>'
    ).children

    assert image.node_type is NodeType.IMAGE
    assert image.title == "Sales"
    assert image.target == "chart.png"


def test_lists_and_items() -> None:
    ulist, olist, dlist = parse_html(
        "<ul><li>One</li><li>Two</li></ul>"
        '<ol start="3"><li><p>Three</p></li></ol>'
        "<dl><dt>Term</dt><dd>Definition</dd></dl>"
    ).children

    assert ulist.node_type is NodeType.ULIST
    assert _types(ulist.children) == [NodeType.LIST_ITEM, NodeType.LIST_ITEM]
    assert _types(ulist.children[0].children) == [NodeType.TEXT]
    assert olist.node_type is NodeType.OLIST
    assert olist.attributes == {"start": "3"}
    assert _types(olist.children[0].children) == [NodeType.PARAGRAPH]
    assert dlist.node_type is NodeType.DLIST
    assert dlist.children[0].title == "Term"


def test_preformatted_code_is_a_listing() -> None:
    (listing,) = parse_html(
        '<pre><code class="language-python">x = "&lt;a&gt;"</code></pre>'
    ).children

    assert listing.node_type is NodeType.LISTING
    assert listing.attributes == {"language": "python"}
    assert listing.text == "x = &#34;&lt;a&gt;&#34;"


def test_blockquote_attribution() -> None:
    (quote,) = parse_html("<blockquote><p>Quoted</p><footer>Someone</footer></blockquote>").children

    assert quote.node_type is NodeType.QUOTE
    assert quote.attributes == {"attribution": "Someone"}
    assert _types(quote.children) == [NodeType.PARAGRAPH]


def test_divisions_map_to_compound_blocks() -> None:
    admonition, sidebar, example, open_block = parse_html(
        '<div class="admonition warning"><p class="admonition-title">Careful</p><p>Hot</p></div>'
        "<aside><p>Side</p></aside>"
        '<div class="example"><p>Example</p></div>'
        "<div><p>Plain</p></div>"
    ).children

    assert admonition.node_type is NodeType.ADMONITION
    assert admonition.attributes == {"name": "warning"}
    assert admonition.title == "Careful"
    assert _types(admonition.children) == [NodeType.PARAGRAPH]
    assert sidebar.node_type is NodeType.SIDEBAR
    assert example.node_type is NodeType.EXAMPLE
    assert open_block.node_type is NodeType.OPEN


def test_titled_paragraph_division() -> None:
    (paragraph,) = parse_html(
        '<div class="paragraph lead"><div class="title">Heads up</div><p>Body</p></div>'
    ).children

    assert paragraph.node_type is NodeType.PARAGRAPH
    assert paragraph.title == "Heads up"
    assert paragraph.roles == ("lead",)


def test_anchor_types() -> None:
    (paragraph,) = parse_html(
        '<p><a href="http://example.org">ext</a><a href="#intro">int</a><a id="here"></a></p>'
    ).children

    link, xref, ref = paragraph.children
    assert link.target == "http://example.org"
    assert [node.attributes["type"] for node in (link, xref, ref)] == ["link", "xref", "ref"]
    assert ref.id == "here"


def test_unknown_blocks_pass_through() -> None:
    (passthrough, table) = parse_html(
        "<video src='a.mp4'></video><table><tr><td>1</td></tr></table>"
    ).children

    assert passthrough.node_type is NodeType.PASS
    assert passthrough.text == '<video src="a.mp4"></video>'
    assert table.node_type is NodeType.TABLE


def test_find_all_walks_descendants() -> None:
    document = parse_html("<section><h2>A</h2><p>One <em>x</em></p></section><p>Two</p>")

    assert len(document.find_all("paragraph")) == 2
    assert len(document.find_all(NodeType.INLINE_QUOTED)) == 1
    assert document.find_all(NodeType.DOCUMENT) == [document]

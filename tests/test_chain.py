from __future__ import annotations

from htmlsmith.core.chain import TemplateCandidate, TemplateChains, build_candidates
from htmlsmith.core.nodes import NodeType
from htmlsmith.core.sources import MappingSource


def _render(label: str):
    def render(ctx) -> str:
        return label

    render.__name__ = label
    return render


def _source(name: str, **templates) -> MappingSource:
    return MappingSource.from_mapping(templates, name=name)


class CountingSource:
    def __init__(self, label: str) -> None:
        self.label = label
        self.loads = 0

    def load(self, emitter=None):
        self.loads += 1
        return {NodeType.IMAGE: _render(self.label)}


def test_candidates_follow_source_declaration_order() -> None:
    chains = TemplateChains.build(
        [
            _source("first", image=_render("IMAGE1")),
            _source("second", image=_render("IMAGE2"), paragraph=_render("P")),
            _source("third", image=_render("IMAGE3")),
        ]
    )

    assert [candidate.origin for candidate in chains.candidates(NodeType.IMAGE)] == [
        "first",
        "second",
        "third",
    ]
    assert [candidate.origin for candidate in chains.candidates(NodeType.PARAGRAPH)] == ["second"]


def test_sources_without_a_template_are_skipped() -> None:
    chains = TemplateChains.build(
        [
            _source("first", image=_render("IMAGE1")),
            _source("empty"),
            _source("third", image=_render("IMAGE3")),
        ]
    )

    assert [candidate.origin for candidate in chains.candidates(NodeType.IMAGE)] == [
        "first",
        "third",
    ]


def test_node_types_without_templates_have_empty_chains() -> None:
    chains = TemplateChains.build([_source("only", image=_render("IMAGE"))])

    assert chains.candidates(NodeType.SECTION) == ()
    assert NodeType.SECTION not in chains
    assert NodeType.IMAGE in chains
    assert chains.node_types() == (NodeType.IMAGE,)
    assert list(chains) == [NodeType.IMAGE]
    assert len(chains) == 1


def test_empty_source_list_builds_empty_chains() -> None:
    chains = TemplateChains.build([])

    assert len(chains) == 0
    assert chains.describe() == []


def test_each_source_is_loaded_once() -> None:
    source = CountingSource("counted")

    chains = TemplateChains.build([source])

    assert source.loads == 1
    assert chains.candidates(NodeType.IMAGE)[0].origin == "counted"


def test_build_reports_chains_built_event(emitter) -> None:
    TemplateChains.build(
        [_source("a", image=_render("I")), _source("b", paragraph=_render("P"))],
        emitter=emitter,
    )

    assert emitter.named("chains_built") == [{"sources": 2, "node_types": ["paragraph", "image"]}]


def test_build_candidates_for_single_node_type() -> None:
    image = _render("IMAGE")
    candidates = build_candidates(
        NodeType.IMAGE, [("a", {NodeType.IMAGE: image}), ("b", {NodeType.PARAGRAPH: image})]
    )

    assert candidates == (TemplateCandidate(node_type=NodeType.IMAGE, render=image, origin="a"),)


def test_describe_lists_highest_priority_first() -> None:
    chains = TemplateChains.build(
        [
            _source("low", image=_render("IMAGE1")),
            _source("high", image=_render("IMAGE2")),
        ]
    )

    assert chains.describe() == [
        {"node_type": "image", "priority": 0, "origin": "high", "render": "IMAGE2"},
        {"node_type": "image", "priority": 1, "origin": "low", "render": "IMAGE1"},
    ]


def test_empty_candidate_lists_are_dropped() -> None:
    chains = TemplateChains({NodeType.IMAGE: (), NodeType.TEXT: ()})

    assert len(chains) == 0

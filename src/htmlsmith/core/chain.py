"""Assemble per-node-type candidate lists from template sources.

Candidates keep the declaration order of their sources. The last element has
the highest priority: the invoker starts there and each ``next()`` walks one
step towards the front of the list, then falls back to the default renderer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from .debug import record_event
from .diagnostics import DiagnosticEmitter
from .engines.base import RenderFunction
from .nodes import NodeType
from .sources import TemplateMapping, TemplateSource


@dataclass(frozen=True, slots=True)
class TemplateCandidate:
    """Render function contributed by one source for one node type."""

    node_type: NodeType
    render: RenderFunction
    origin: str


CandidateList = tuple[TemplateCandidate, ...]


def build_candidates(
    node_type: NodeType,
    loaded_sources: Sequence[tuple[str, TemplateMapping]],
) -> CandidateList:
    """Return the candidates for ``node_type`` in source declaration order."""
    candidates: list[TemplateCandidate] = []
    for origin, templates in loaded_sources:
        render = templates.get(node_type)
        if render is not None:
            candidates.append(TemplateCandidate(node_type=node_type, render=render, origin=origin))
    return tuple(candidates)


class TemplateChains:
    """Immutable mapping from node type to candidate list."""

    def __init__(self, chains: Mapping[NodeType, CandidateList] | None = None) -> None:
        populated = {
            node_type: tuple(candidates)
            for node_type, candidates in (chains or {}).items()
            if candidates
        }
        self._chains: Mapping[NodeType, CandidateList] = MappingProxyType(populated)

    @classmethod
    def build(
        cls,
        sources: Iterable[TemplateSource],
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> TemplateChains:
        """Load every source once and derive the candidate list of each node type."""
        loaded = [(source.label, source.load(emitter)) for source in sources]
        chains = {node_type: build_candidates(node_type, loaded) for node_type in NodeType}
        result = cls(chains)
        record_event(
            emitter,
            "chains_built",
            {"sources": len(loaded), "node_types": [item.value for item in result.node_types()]},
        )
        return result

    def candidates(self, node_type: NodeType) -> CandidateList:
        """Return the candidates registered for ``node_type`` (possibly empty)."""
        return self._chains.get(node_type, ())

    def node_types(self) -> tuple[NodeType, ...]:
        """Return the node types with at least one candidate."""
        return tuple(self._chains)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._chains

    def __iter__(self) -> Iterator[NodeType]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot, highest priority first per node type."""
        entries: list[dict[str, object]] = []
        for node_type in sorted(self._chains, key=lambda item: item.value):
            candidates = self._chains[node_type]
            for priority, candidate in enumerate(reversed(candidates)):
                entries.append(
                    {
                        "node_type": node_type.value,
                        "priority": priority,
                        "origin": candidate.origin,
                        "render": getattr(candidate.render, "__name__", repr(candidate.render)),
                    }
                )
        return entries


__all__ = ["CandidateList", "TemplateCandidate", "TemplateChains", "build_candidates"]

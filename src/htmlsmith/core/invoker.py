"""Drive candidate lists for a node, exposing ``next()`` to render functions.

Every call to :meth:`ChainInvoker.render` starts from a fresh
:class:`ChainCursor` pointing at the last (highest priority) candidate. A
render function receives a :class:`TemplateContext`; calling
``ctx.next()`` runs the candidate just below the cursor with a new context,
and once the cursor would drop below the first candidate the default renderer
takes over.

Cursors are immutable values, so ``next()`` can be called any number of
times from the same render function and always reaches the same lower
candidate, and rendering a child node from within a template never disturbs
the chain of its parent.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .chain import CandidateList, TemplateCandidate, TemplateChains
from .nodes import NodeType


DefaultRenderer = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class ChainCursor:
    """Position inside a candidate list."""

    candidates: CandidateList
    index: int

    @classmethod
    def top(cls, candidates: CandidateList) -> ChainCursor | None:
        """Return a cursor on the highest priority candidate, if any."""
        if not candidates:
            return None
        return cls(candidates=candidates, index=len(candidates) - 1)

    @property
    def candidate(self) -> TemplateCandidate:
        return self.candidates[self.index]

    def lower(self) -> ChainCursor | None:
        """Return the cursor one step down the chain, or ``None`` at the bottom."""
        if self.index <= 0:
            return None
        return ChainCursor(candidates=self.candidates, index=self.index - 1)


@dataclass(frozen=True, slots=True)
class TemplateContext:
    """Invocation context handed to a render function."""

    node: Any
    cursor: ChainCursor
    default: DefaultRenderer

    @property
    def origin(self) -> str:
        """Return the label of the source that contributed the running template."""
        return self.cursor.candidate.origin

    def next(self) -> str:
        """Render the node with the next lower-priority candidate or the default renderer."""
        lower = self.cursor.lower()
        if lower is None:
            return self.default(self.node)
        return invoke(lower, self.node, self.default)


def invoke(cursor: ChainCursor, node: Any, default: DefaultRenderer) -> str:
    """Run the candidate under ``cursor`` for ``node``."""
    context = TemplateContext(node=node, cursor=cursor, default=default)
    result = cursor.candidate.render(context)
    if not isinstance(result, str):
        raise TypeError(
            f"Template for '{cursor.candidate.node_type}' from {cursor.candidate.origin} "
            f"returned {type(result).__name__}, expected str."
        )
    return result


class ChainInvoker:
    """Render nodes through their template chain."""

    def __init__(self, chains: TemplateChains, default: DefaultRenderer) -> None:
        self.chains = chains
        self.default = default

    def render(self, node: Any) -> str:
        """Return the markup produced for ``node``."""
        node_type = NodeType.coerce(node.node_type)
        cursor = ChainCursor.top(self.chains.candidates(node_type))
        if cursor is None:
            return self.default(node)
        return invoke(cursor, node, self.default)


__all__ = ["ChainCursor", "ChainInvoker", "DefaultRenderer", "TemplateContext", "invoke"]

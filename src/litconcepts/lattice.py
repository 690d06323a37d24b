"""Enumerate the formal concepts of a context with Ganter's NextClosure."""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterator, List

from .models import Concept, Context

logger = logging.getLogger(__name__)


def next_closure(
    context: Context,
    current: FrozenSet[int],
    closed: FrozenSet[int],
) -> FrozenSet[int] | None:
    """Return the lectically next closed intent after ``closed``, or ``None``.

    ``closed`` is the closure of ``current``. The scan runs over ``closed`` so
    that attributes shared by every document (already implied by the empty
    set) take part in the canonicity test. Attributes are visited from the
    highest index down; an attribute already present is stripped together with
    everything after it, otherwise it is added and the candidate's closure is
    accepted when it introduces no earlier attribute.
    """

    working = set(current | closed)
    for index in reversed(range(len(context.attributes))):
        if index in working:
            working = {position for position in working if position < index}
            continue
        candidate = frozenset(working | {index})
        candidate_closed = context.closure(candidate)
        if all(position >= index or position in candidate for position in candidate_closed):
            return candidate_closed
    return None


def iter_closed_intents(context: Context) -> Iterator[tuple[FrozenSet[int], FrozenSet[int]]]:
    """Yield ``(extent, intent)`` index sets in lectic order of intents."""

    if not context.attributes:
        return
    current: FrozenSet[int] | None = frozenset()
    while current is not None:
        extent = context.extent_of(current)
        closed = context.intent_of(extent)
        yield extent, closed
        current = next_closure(context, current, closed)


def extract_concepts(context: Context) -> List[Concept]:
    """Return every formal concept of ``context`` exactly once.

    Concepts are ordered by increasing lectic order of their intents with
    respect to the context's attribute order. An empty attribute set yields
    no concepts.
    """

    concepts = [
        Concept(
            extent=context.document_ids(extent),
            intent=context.attribute_values(intent),
        )
        for extent, intent in iter_closed_intents(context)
    ]
    logger.debug(
        "Extracted %d concepts from %d documents x %d attributes",
        len(concepts),
        len(context.documents),
        len(context.attributes),
    )
    return concepts


def lectic_precedes(left: FrozenSet[int], right: FrozenSet[int]) -> bool:
    """True if ``left`` comes strictly before ``right`` in lectic order."""

    difference = left ^ right
    if not difference:
        return False
    return min(difference) in right


__all__ = [
    "extract_concepts",
    "iter_closed_intents",
    "lectic_precedes",
    "next_closure",
]

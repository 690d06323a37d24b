"""Greedy maximum-coverage ranking of formal concepts."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Sequence

from .models import Concept, ScoredConcept

logger = logging.getLogger(__name__)


def concept_importance(concept: Concept) -> int:
    return len(concept.extent) * len(concept.intent)


def _best_position(candidates: Sequence[ScoredConcept], value: Callable[[ScoredConcept], int]) -> int:
    # max() keeps the first of equal values, i.e. the earliest in lattice order
    return max(range(len(candidates)), key=lambda position: value(candidates[position]))


def rank_concepts(
    concepts: Sequence[Concept],
    *,
    min_extent_size: int = 3,
    min_remaining_importance: int = 3,
) -> List[ScoredConcept]:
    """Order concepts so the most informative, least redundant ones come first.

    Concepts with fewer than ``min_extent_size`` documents are dropped. The
    most important concept is taken first; afterwards each step takes the
    concept whose still-uncovered documents weigh the most
    (``|extent \\ covered| * |intent|``). Selection stops as soon as the best
    remaining value is ``<= min_remaining_importance``. Ties keep the input
    (lattice) order.
    """

    candidates = [
        ScoredConcept(concept=concept, importance=concept_importance(concept))
        for concept in concepts
        if len(concept.extent) >= min_extent_size
    ]
    if not candidates:
        return []

    first = candidates.pop(_best_position(candidates, lambda scored: scored.importance))
    first.remaining_importance = first.importance
    covered: set[str] = set(first.extent)
    ranked = [first]

    while candidates:
        for scored in candidates:
            uncovered = sum(1 for doi in scored.extent if doi not in covered)
            scored.remaining_importance = uncovered * len(scored.intent)
        best = candidates.pop(_best_position(candidates, lambda scored: scored.remaining_importance))
        if best.remaining_importance <= min_remaining_importance:
            break
        covered.update(best.extent)
        ranked.append(best)

    logger.debug("Ranked %d of %d concepts", len(ranked), len(concepts))
    return ranked


def covered_documents(ranked: Iterable[ScoredConcept]) -> set[str]:
    covered: set[str] = set()
    for scored in ranked:
        covered.update(scored.extent)
    return covered


__all__ = [
    "concept_importance",
    "covered_documents",
    "rank_concepts",
]

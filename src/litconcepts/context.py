"""Build the binary document × attribute context for concept analysis."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence

from .keywords import KeywordMatcher, find_keyword_matches, matched_expressions
from .models import Attribute, Context, Document

logger = logging.getLogger(__name__)


def count_internal_citations(documents: Sequence[Document]) -> dict[str, int]:
    """Count how often each working-set document is cited or referenced by another one.

    The returned mapping follows document order so ties keep arrival order.
    """

    counts: dict[str, int] = {document.doi: 0 for document in documents}
    for document in documents:
        for doi in (*document.citations, *document.references):
            if doi in counts and doi != document.doi:
                counts[doi] += 1
    return counts


def select_citation_attributes(documents: Sequence[Document], *, limit: int = 10) -> List[Attribute]:
    """Return citation attributes for the most-linked documents, most-linked first."""

    counts = count_internal_citations(documents)
    ranked = sorted(
        (item for item in counts.items() if item[1] > 0),
        key=lambda item: -item[1],
    )
    selected = [Attribute.citation(doi) for doi, _ in ranked[: max(0, limit)]]
    if selected:
        logger.debug(
            "Selected %d citation attributes (of %d linked documents)",
            len(selected),
            len(ranked),
        )
    return selected


def _keyword_attributes(boost_keywords: Sequence[str]) -> List[Attribute]:
    expressions = dict.fromkeys(keyword for keyword in boost_keywords if keyword and keyword.strip())
    return [Attribute.keyword(expression) for expression in expressions]


def build_context(
    documents: Sequence[Document],
    boost_keywords: Sequence[str],
    *,
    matcher: KeywordMatcher = find_keyword_matches,
    max_citation_attributes: int = 10,
) -> Context:
    """Build the incidence table of ``documents`` against keyword and citation attributes.

    Attributes are ordered keywords first (in caller order) followed by citation
    attributes by descending in-set citation count. That order is the fixed
    total order used for lattice enumeration.
    """

    duplicates = [doi for doi, count in Counter(doc.doi for doc in documents).items() if count > 1]
    if duplicates:
        logger.warning("Duplicate document identities in working set: %s", ", ".join(duplicates))

    keyword_attributes = _keyword_attributes(boost_keywords)
    attributes = tuple(
        keyword_attributes
        + select_citation_attributes(documents, limit=max_citation_attributes)
    )
    expressions = [attribute.value for attribute in keyword_attributes]

    matrix: list[tuple[bool, ...]] = []
    for document in documents:
        matched = matched_expressions(document.title, expressions, matcher) if expressions else set()
        matrix.append(
            tuple(
                attribute.value in matched if attribute.is_keyword else document.is_linked_to(attribute.value)
                for attribute in attributes
            )
        )

    return Context(
        documents=tuple(document.doi for document in documents),
        attributes=attributes,
        matrix=tuple(matrix),
    )


__all__ = [
    "build_context",
    "count_internal_citations",
    "select_citation_attributes",
]

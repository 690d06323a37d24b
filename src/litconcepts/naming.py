"""TF-IDF term extraction and naming of ranked concepts."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Sequence

from .keywords import split_alternatives
from .models import Attribute, Document, NamedConcept, ScoredConcept, ScoredTerm
from .text import TextNormalizer

logger = logging.getLogger(__name__)

_DEFAULT_NORMALIZER = TextNormalizer()


def _common_prefix_length(left: str, right: str) -> int:
    length = 0
    for a, b in zip(left, right):
        if a != b:
            break
        length += 1
    return length


def merge_term_frequencies(
    frequencies: Mapping[str, int],
    *,
    min_prefix_length: int = 5,
) -> Dict[str, int]:
    """Fold near-duplicate stems into their shortest form.

    Stems are visited by descending frequency. Each unmerged stem absorbs every
    other unmerged stem sharing a prefix of at least ``min_prefix_length``
    characters with it; the shortest member of the group carries the summed
    frequency.
    """

    ordered = sorted(frequencies, key=lambda term: -frequencies[term])
    merged: Dict[str, int] = {}
    processed: set[str] = set()
    for term in ordered:
        if term in processed:
            continue
        group = [term] + [
            other
            for other in ordered
            if other != term
            and other not in processed
            and _common_prefix_length(term, other) >= min_prefix_length
        ]
        representative = min(group, key=len)
        merged[representative] = sum(frequencies[member] for member in group)
        processed.update(group)
    return merged


def _keyword_alternatives(intent: Iterable[Attribute]) -> List[str]:
    return [
        alternative.upper()
        for attribute in intent
        if attribute.is_keyword
        for alternative in split_alternatives(attribute.value)
    ]


def _matches_keyword(term: str, alternatives: Sequence[str], short_keyword_length: int) -> bool:
    upper_term = term.upper()
    for alternative in alternatives:
        if len(alternative) <= short_keyword_length:
            if upper_term.startswith(alternative):
                return True
        elif alternative in upper_term:
            return True
    return False


def document_frequencies(
    documents: Sequence[Document],
    *,
    normalizer: TextNormalizer = _DEFAULT_NORMALIZER,
    min_prefix_length: int = 5,
) -> Dict[str, int]:
    """Count, per merged stem, how many document titles contain it."""

    raw: Dict[str, int] = {}
    for document in documents:
        for term in dict.fromkeys(normalizer.tokenize(document.title)):
            raw[term] = raw.get(term, 0) + 1
    return merge_term_frequencies(raw, min_prefix_length=min_prefix_length)


def compute_concept_terms(
    extent: Sequence[str],
    documents: Sequence[Document],
    intent: Sequence[Attribute] = (),
    *,
    normalizer: TextNormalizer = _DEFAULT_NORMALIZER,
    short_keyword_length: int = 3,
    min_prefix_length: int = 5,
    doc_frequencies: Mapping[str, int] | None = None,
) -> List[ScoredTerm]:
    """Score the stems of a concept's titles by TF-IDF against all ``documents``.

    Titles of documents named by citation attributes join the extent titles.
    Stems matching one of the concept's keywords count twice. Scores are
    ``tf * ln(N / df)`` with ``df`` defaulting to 1; the result is sorted by
    descending score.
    """

    by_doi = {document.doi: document for document in documents}
    extent_titles = [by_doi[doi].title for doi in extent if doi in by_doi and by_doi[doi].title]
    if not extent_titles:
        return []
    citation_titles = [
        by_doi[attribute.value].title
        for attribute in intent
        if attribute.is_citation and attribute.value in by_doi and by_doi[attribute.value].title
    ]

    alternatives = _keyword_alternatives(intent)
    term_frequencies: Dict[str, int] = {}
    for title in (*extent_titles, *citation_titles):
        for term in normalizer.tokenize(title):
            weight = 2 if _matches_keyword(term, alternatives, short_keyword_length) else 1
            term_frequencies[term] = term_frequencies.get(term, 0) + weight

    merged = merge_term_frequencies(term_frequencies, min_prefix_length=min_prefix_length)
    if doc_frequencies is None:
        doc_frequencies = document_frequencies(
            documents, normalizer=normalizer, min_prefix_length=min_prefix_length
        )

    total = len(documents)
    scored = [
        ScoredTerm(term=term, score=tf * math.log(total / (doc_frequencies.get(term) or 1)))
        for term, tf in merged.items()
    ]
    scored.sort(key=lambda item: -item.score)
    return scored


def name_concept(rank: int, terms: Sequence[ScoredTerm], *, tie_tolerance: float = 0.0001) -> str:
    """Return ``C{rank}``, suffixed with the top term when it is a clear winner."""

    if not terms:
        return f"C{rank}"
    top_score = terms[0].score
    tied = sum(1 for term in terms if abs(term.score - top_score) < tie_tolerance)
    if tied > 1:
        return f"C{rank}"
    return f"C{rank} - {terms[0].term.upper()}"


def name_concepts(
    ranked: Sequence[ScoredConcept],
    documents: Sequence[Document],
    *,
    normalizer: TextNormalizer = _DEFAULT_NORMALIZER,
    max_top_terms: int = 10,
    short_keyword_length: int = 3,
    min_prefix_length: int = 5,
    tie_tolerance: float = 0.0001,
) -> List[NamedConcept]:
    """Attach display names and top terms to ranked concepts.

    Without a document corpus the concepts only receive their rank-based
    names.
    """

    if not documents:
        return [
            NamedConcept(scored=scored, rank=rank, name=f"C{rank}")
            for rank, scored in enumerate(ranked, start=1)
        ]

    doc_frequencies = document_frequencies(
        documents, normalizer=normalizer, min_prefix_length=min_prefix_length
    )
    named: list[NamedConcept] = []
    for rank, scored in enumerate(ranked, start=1):
        terms = compute_concept_terms(
            scored.extent,
            documents,
            scored.intent,
            normalizer=normalizer,
            short_keyword_length=short_keyword_length,
            min_prefix_length=min_prefix_length,
            doc_frequencies=doc_frequencies,
        )
        named.append(
            NamedConcept(
                scored=scored,
                rank=rank,
                name=name_concept(rank, terms, tie_tolerance=tie_tolerance),
                top_terms=tuple(terms[:max_top_terms]),
            )
        )
    logger.debug("Named %d concepts", len(named))
    return named


__all__ = [
    "compute_concept_terms",
    "document_frequencies",
    "merge_term_frequencies",
    "name_concept",
    "name_concepts",
]

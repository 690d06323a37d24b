"""Annotate documents with the names of the concepts they belong to."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .keywords import KeywordMatcher, find_keyword_matches, matched_expressions
from .models import ConceptMetadata, Document, NamedConcept

logger = logging.getLogger(__name__)


def _annotate(
    documents: Sequence[Document],
    tags: Dict[str, List[str]],
    metadata: Dict[str, Dict[str, ConceptMetadata]],
) -> None:
    for document in documents:
        names = tags.get(document.doi)
        if names:
            document.concepts = list(names)
            document.concept_metadata = dict(metadata.get(document.doi, {}))
        else:
            document.concepts = None
            document.concept_metadata = None


def apply_concept_tags(
    documents: Sequence[Document],
    named_concepts: Sequence[NamedConcept],
) -> Dict[str, List[str]]:
    """Tag each document with the concepts whose extent contains it.

    Concepts are applied in rank order. Documents belonging to no concept get
    ``None`` for both annotation fields. Returns the DOI to names mapping for
    tagged documents.
    """

    tags: Dict[str, List[str]] = {}
    metadata: Dict[str, Dict[str, ConceptMetadata]] = {}
    for named in named_concepts:
        details = named.metadata()
        for doi in named.extent:
            tags.setdefault(doi, []).append(named.name)
            metadata.setdefault(doi, {})[named.name] = details

    _annotate(documents, tags, metadata)
    return tags


def document_satisfies_intent(
    document: Document,
    named: NamedConcept,
    *,
    matcher: KeywordMatcher = find_keyword_matches,
) -> bool:
    """True if ``document`` has every keyword and citation attribute of the concept."""

    keywords = named.concept.keywords
    if keywords:
        matched = matched_expressions(document.title, keywords, matcher)
        if not all(keyword in matched for keyword in keywords):
            return False
    return all(document.is_linked_to(doi) for doi in named.concept.cited_dois)


def tag_matching_documents(
    documents: Sequence[Document],
    named_concepts: Sequence[NamedConcept],
    *,
    matcher: KeywordMatcher = find_keyword_matches,
) -> Dict[str, List[str]]:
    """Tag arbitrary documents by testing them against each concept's intent.

    Unlike :func:`apply_concept_tags` this does not require the documents to be
    part of the analysed working set, so it can label suggestions with the
    concepts discovered among the selected publications.
    """

    tags: Dict[str, List[str]] = {}
    metadata: Dict[str, Dict[str, ConceptMetadata]] = {}
    for document in documents:
        for named in named_concepts:
            if document_satisfies_intent(document, named, matcher=matcher):
                tags.setdefault(document.doi, []).append(named.name)
                metadata.setdefault(document.doi, {})[named.name] = named.metadata()

    _annotate(documents, tags, metadata)
    logger.debug("Tagged %d of %d documents by attribute match", len(tags), len(documents))
    return tags


__all__ = [
    "apply_concept_tags",
    "document_satisfies_intent",
    "tag_matching_documents",
]

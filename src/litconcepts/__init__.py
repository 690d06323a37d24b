"""Formal concept analysis for a working set of publications."""

from __future__ import annotations

from .config import Settings
from .keywords import KeywordMatch, find_keyword_matches, parse_unique_boost_keywords
from .models import (
    Attribute,
    Concept,
    ConceptAnalysis,
    ConceptMetadata,
    Context,
    Document,
    NamedConcept,
    ScoredConcept,
    ScoredTerm,
)
from .service import (
    ConceptService,
    analyze_concepts,
    assign_concept_tags,
    compute_concepts,
    format_concept_report,
)
from .text import TextNormalizer

__all__ = [
    "Attribute",
    "Concept",
    "ConceptAnalysis",
    "ConceptMetadata",
    "ConceptService",
    "Context",
    "Document",
    "KeywordMatch",
    "NamedConcept",
    "ScoredConcept",
    "ScoredTerm",
    "Settings",
    "TextNormalizer",
    "analyze_concepts",
    "assign_concept_tags",
    "compute_concepts",
    "find_keyword_matches",
    "format_concept_report",
    "parse_unique_boost_keywords",
]

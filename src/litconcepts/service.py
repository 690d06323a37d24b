"""Entry points tying context building, lattice extraction, ranking, naming and tagging."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .config import Settings
from .context import build_context
from .keywords import KeywordMatcher, find_keyword_matches
from .lattice import extract_concepts
from .models import Concept, ConceptAnalysis, Document, NamedConcept, ScoredConcept
from .naming import name_concepts
from .observability import MetricsRecorder
from .ranking import rank_concepts
from .tagging import apply_concept_tags, tag_matching_documents
from .text import TextNormalizer

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_EMPTY_MARK = "∅"


def _ensure_logging(level_name: str | None) -> None:
    """Give the package logger a console handler at ``level_name`` when one is configured."""

    if not level_name:
        return
    package_logger = logging.getLogger("litconcepts")
    level_value = getattr(logging, level_name.strip().upper(), None)
    if not isinstance(level_value, int):
        logger.warning("Ignoring unknown log level %r", level_name)
        return
    package_logger.setLevel(level_value)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)


class ConceptService:
    """Discover, rank, name and apply concepts for a working set of publications.

    Every call recomputes from the given snapshot; nothing is cached between
    calls. Configuration objects (settings, keyword matcher, tokenizer) are
    fixed at construction.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        matcher: KeywordMatcher = find_keyword_matches,
        normalizer: TextNormalizer | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._settings = settings or Settings.from_env()
        _ensure_logging(self._settings.log_level)
        self._matcher = matcher
        self._normalizer = normalizer or self._settings.build_text_normalizer()
        self._metrics = metrics or self._settings.build_metrics_recorder()

    @property
    def settings(self) -> Settings:
        return self._settings

    def compute_concepts(
        self,
        documents: Sequence[Document],
        boost_keywords: Sequence[str] | None = None,
    ) -> List[Concept]:
        """Return every formal concept of the documents' keyword/citation context.

        ``boost_keywords=None`` falls back to the configured keyword file; pass an
        empty sequence to analyse citations only.
        """

        if not documents:
            return []
        if boost_keywords is None:
            boost_keywords = self._settings.load_boost_keywords()
        context = build_context(
            documents,
            boost_keywords,
            matcher=self._matcher,
            max_citation_attributes=self._settings.max_citation_attributes,
        )
        if not context.attributes:
            logger.debug("No keyword or citation attributes; skipping concept extraction")
            return []

        with self._metrics.track_timing("concepts.lattice", documents=len(documents)):
            concepts = extract_concepts(context)
        self._metrics.set_gauge("concepts.attributes", len(context.attributes))
        self._metrics.set_gauge("concepts.count", len(concepts))
        return concepts

    def rank_concepts(self, concepts: Sequence[Concept]) -> List[ScoredConcept]:
        with self._metrics.track_timing("concepts.ranking"):
            return rank_concepts(
                concepts,
                min_extent_size=self._settings.min_concept_size,
                min_remaining_importance=self._settings.min_remaining_importance,
            )

    def name_concepts(
        self,
        ranked: Sequence[ScoredConcept],
        documents: Sequence[Document],
    ) -> List[NamedConcept]:
        with self._metrics.track_timing("concepts.naming"):
            return name_concepts(
                ranked,
                documents,
                normalizer=self._normalizer,
                max_top_terms=self._settings.max_top_terms,
                short_keyword_length=self._settings.short_keyword_length,
                min_prefix_length=self._settings.term_merge_prefix_length,
                tie_tolerance=self._settings.term_tie_tolerance,
            )

    def analyze(
        self,
        documents: Sequence[Document],
        boost_keywords: Sequence[str] | None = None,
    ) -> ConceptAnalysis:
        """Compute, rank and name concepts in one pass."""

        concepts = self.compute_concepts(documents, boost_keywords)
        ranked = self.rank_concepts(concepts)
        named = self.name_concepts(ranked, documents)
        return ConceptAnalysis(concepts=concepts, ranked=ranked, named=named)

    def assign_concept_tags(
        self,
        documents: Sequence[Document],
        concepts: Sequence[Concept],
    ) -> Dict[str, List[str]]:
        """Rank and name ``concepts``, then annotate ``documents`` with them."""

        named = self.name_concepts(self.rank_concepts(concepts), documents)
        tags = apply_concept_tags(documents, named)
        self._metrics.increment("concepts.tagged_documents", value=len(tags))
        return tags

    def tag_matching_documents(
        self,
        documents: Sequence[Document],
        named_concepts: Sequence[NamedConcept],
    ) -> Dict[str, List[str]]:
        """Annotate documents outside the working set by attribute match."""

        return tag_matching_documents(documents, named_concepts, matcher=self._matcher)

    def report(self, analysis: ConceptAnalysis, *, limit: int = 10) -> str:
        """Log a summary of the analysis and return it."""

        summary = format_concept_report(analysis, limit=limit)
        logger.info("%s", summary)
        return summary


def _join_or_empty(values: Sequence[str]) -> str:
    return ", ".join(values) if values else _EMPTY_MARK


def format_concept_report(analysis: ConceptAnalysis, *, limit: int = 10) -> str:
    """Render the top ranked concepts as a multi-line text report.

    Each block is headed ``Concept N:`` by rank and carries the display name on
    its own ``Name:`` line.
    """

    if not analysis.concepts:
        return "No concepts found."

    total = len(analysis.concepts)
    shown = analysis.named[: max(0, limit)]
    if total > limit:
        header = f"Concept Analysis Results: Top {limit} concepts ({total} total)"
    else:
        header = f"Concept Analysis Results: {total} concepts found"
    rule = "═" * 80
    lines = [header, rule]

    for named in shown:
        documents = list(named.extent)
        keywords = named.concept.keywords
        citations = named.concept.cited_dois
        lines.append("")
        lines.append(f"Concept {named.rank}:")
        lines.append(f"  Name: {named.name}")
        lines.append(
            f"  Importance: {named.importance} "
            f"({len(documents)} publications × {len(named.intent)} attributes)"
        )
        lines.append(f"  Remaining Importance: {named.remaining_importance}")
        lines.append(f"  Publications ({len(documents)}): {_join_or_empty(documents)}")
        lines.append(f"  Keywords ({len(keywords)}): {_join_or_empty(keywords)}")
        lines.append(f"  Citations ({len(citations)}): {_join_or_empty(citations)}")
        if named.top_terms:
            terms = ", ".join(f"{term.term} ({term.score:.2f})" for term in named.top_terms)
            lines.append(f"  Top Terms: {terms}")

    lines.append("")
    lines.append(rule)
    return "\n".join(lines)


_default_service: ConceptService | None = None


def _service() -> ConceptService:
    global _default_service
    if _default_service is None:
        _default_service = ConceptService()
    return _default_service


def compute_concepts(documents: Sequence[Document], boost_keywords: Sequence[str] | None = None) -> List[Concept]:
    """Return every formal concept of the working set, or ``[]`` when there is nothing to analyse."""

    return _service().compute_concepts(documents, boost_keywords)


def assign_concept_tags(documents: Sequence[Document], concepts: Sequence[Concept]) -> Dict[str, List[str]]:
    """Rank, name and apply ``concepts`` to ``documents``; return DOI to concept names."""

    return _service().assign_concept_tags(documents, concepts)


def analyze_concepts(documents: Sequence[Document], boost_keywords: Sequence[str] | None = None) -> ConceptAnalysis:
    return _service().analyze(documents, boost_keywords)


__all__ = [
    "ConceptService",
    "analyze_concepts",
    "assign_concept_tags",
    "compute_concepts",
    "format_concept_report",
]

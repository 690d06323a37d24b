"""Data model for publications, formal contexts and concepts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Literal, Mapping, Sequence, Tuple

AttributeKind = Literal["keyword", "citation"]


@dataclass(slots=True)
class Document:
    """A publication in the working set.

    ``citations`` holds the DOIs of publications citing this one and
    ``references`` the DOIs this one cites. The two annotation fields are
    written by the tagging step and stay ``None`` for untagged documents.
    """

    doi: str
    title: str = ""
    citations: Sequence[str] = field(default_factory=tuple)
    references: Sequence[str] = field(default_factory=tuple)
    concepts: List[str] | None = None
    concept_metadata: Dict[str, "ConceptMetadata"] | None = None

    def is_linked_to(self, doi: str) -> bool:
        """True if this document is, cites, or is cited by ``doi``."""

        return self.doi == doi or doi in self.citations or doi in self.references


@dataclass(frozen=True, slots=True)
class Attribute:
    """Keyword group or citation relationship used as a formal attribute."""

    kind: AttributeKind
    value: str

    @classmethod
    def keyword(cls, expression: str) -> "Attribute":
        return cls("keyword", expression)

    @classmethod
    def citation(cls, doi: str) -> "Attribute":
        return cls("citation", doi)

    @property
    def is_keyword(self) -> bool:
        return self.kind == "keyword"

    @property
    def is_citation(self) -> bool:
        return self.kind == "citation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Context:
    """Binary incidence table of documents (rows) and attributes (columns).

    The attribute tuple fixes the total order used by the lattice traversal.
    Derivation operators work on index sets; ``intent_of`` of the empty set
    is the full attribute set.
    """

    documents: Tuple[str, ...]
    attributes: Tuple[Attribute, ...]
    matrix: Tuple[Tuple[bool, ...], ...]
    document_index: Mapping[str, int] = field(init=False, repr=False, compare=False)
    attribute_index: Mapping[Attribute, int] = field(init=False, repr=False, compare=False)
    _rows: Tuple[FrozenSet[int], ...] = field(init=False, repr=False, compare=False)
    _columns: Tuple[FrozenSet[int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.matrix) != len(self.documents):
            raise ValueError("Context matrix must have one row per document")
        width = len(self.attributes)
        for row in self.matrix:
            if len(row) != width:
                raise ValueError("Context matrix rows must have one cell per attribute")

        document_index: dict[str, int] = {}
        for position, doi in enumerate(self.documents):
            document_index.setdefault(doi, position)
        object.__setattr__(self, "document_index", document_index)
        object.__setattr__(
            self,
            "attribute_index",
            {attribute: position for position, attribute in enumerate(self.attributes)},
        )
        object.__setattr__(
            self,
            "_rows",
            tuple(frozenset(j for j, cell in enumerate(row) if cell) for row in self.matrix),
        )
        object.__setattr__(
            self,
            "_columns",
            tuple(
                frozenset(i for i, row in enumerate(self.matrix) if row[j])
                for j in range(width)
            ),
        )

    @property
    def all_documents(self) -> FrozenSet[int]:
        return frozenset(range(len(self.documents)))

    @property
    def all_attributes(self) -> FrozenSet[int]:
        return frozenset(range(len(self.attributes)))

    def extent_of(self, attribute_indices: Iterable[int]) -> FrozenSet[int]:
        """Indices of documents possessing every given attribute."""

        extent = self.all_documents
        for index in attribute_indices:
            extent = extent & self._columns[index]
            if not extent:
                break
        return extent

    def intent_of(self, document_indices: Iterable[int]) -> FrozenSet[int]:
        """Indices of attributes shared by every given document."""

        intent = self.all_attributes
        for index in document_indices:
            intent = intent & self._rows[index]
            if not intent:
                break
        return intent

    def closure(self, attribute_indices: Iterable[int]) -> FrozenSet[int]:
        return self.intent_of(self.extent_of(attribute_indices))

    def document_ids(self, document_indices: Iterable[int]) -> Tuple[str, ...]:
        return tuple(self.documents[index] for index in sorted(document_indices))

    def attribute_values(self, attribute_indices: Iterable[int]) -> Tuple[Attribute, ...]:
        return tuple(self.attributes[index] for index in sorted(attribute_indices))


@dataclass(frozen=True, slots=True)
class Concept:
    """A closed (extent, intent) pair of a context."""

    extent: Tuple[str, ...]
    intent: Tuple[Attribute, ...]

    @property
    def keywords(self) -> List[str]:
        return [attribute.value for attribute in self.intent if attribute.is_keyword]

    @property
    def cited_dois(self) -> List[str]:
        return [attribute.value for attribute in self.intent if attribute.is_citation]


@dataclass(slots=True)
class ScoredConcept:
    """Concept annotated with coverage values computed during ranking."""

    concept: Concept
    importance: int
    remaining_importance: int = 0

    @property
    def extent(self) -> Tuple[str, ...]:
        return self.concept.extent

    @property
    def intent(self) -> Tuple[Attribute, ...]:
        return self.concept.intent


@dataclass(frozen=True, slots=True)
class ScoredTerm:
    term: str
    score: float


@dataclass(frozen=True, slots=True)
class ConceptMetadata:
    """Per-concept details attached to tagged documents."""

    top_terms: Tuple[ScoredTerm, ...]
    attributes: Tuple[Attribute, ...]


@dataclass(slots=True)
class NamedConcept:
    """Ranked concept with its display name and descriptive terms."""

    scored: ScoredConcept
    rank: int
    name: str
    top_terms: Tuple[ScoredTerm, ...] = ()

    @property
    def concept(self) -> Concept:
        return self.scored.concept

    @property
    def extent(self) -> Tuple[str, ...]:
        return self.scored.extent

    @property
    def intent(self) -> Tuple[Attribute, ...]:
        return self.scored.intent

    @property
    def importance(self) -> int:
        return self.scored.importance

    @property
    def remaining_importance(self) -> int:
        return self.scored.remaining_importance

    def metadata(self) -> ConceptMetadata:
        return ConceptMetadata(top_terms=self.top_terms, attributes=self.intent)


@dataclass(slots=True)
class ConceptAnalysis:
    """Concepts, ranking and names computed for one snapshot of documents."""

    concepts: List[Concept]
    ranked: List[ScoredConcept]
    named: List[NamedConcept]

    @property
    def has_concepts(self) -> bool:
        return bool(self.concepts)


__all__ = [
    "Attribute",
    "AttributeKind",
    "Concept",
    "ConceptAnalysis",
    "ConceptMetadata",
    "Context",
    "Document",
    "NamedConcept",
    "ScoredConcept",
    "ScoredTerm",
]

from __future__ import annotations

import logging

import pytest

from litconcepts.context import build_context, count_internal_citations, select_citation_attributes
from litconcepts.keywords import KeywordMatch
from litconcepts.models import Attribute, Context, Document


def _column(context: Context, attribute: Attribute) -> list[bool]:
    index = context.attribute_index[attribute]
    return [row[index] for row in context.matrix]


def test_build_context_orders_keywords_before_citations() -> None:
    documents = [
        Document("10.1/a", "Visual Analytics", citations=["10.1/b"]),
        Document("10.1/b", "Data Methods", references=["10.1/a"]),
    ]

    context = build_context(documents, ["VISUAL"])

    assert context.documents == ("10.1/a", "10.1/b")
    assert context.attributes[0] == Attribute.keyword("VISUAL")
    assert set(context.attributes[1:]) == {Attribute.citation("10.1/a"), Attribute.citation("10.1/b")}
    assert _column(context, Attribute.keyword("VISUAL")) == [True, False]


def test_keyword_cells_follow_title_matches() -> None:
    documents = [
        Document("10.1/a", "Visual Analytics"),
        Document("10.1/b", "Machine Learning"),
    ]

    context = build_context(documents, ["VISUAL", "ANALYT"])

    assert context.matrix == ((True, True), (False, False))


def test_citation_cells_include_self_citing_and_cited() -> None:
    documents = [
        Document("10.1/a", "Paper A", citations=["10.1/b", "10.1/external"], references=["10.1/c"]),
        Document("10.1/b", "Paper B", citations=["10.1/a"]),
        Document("10.1/c", "Paper C", references=["10.1/a"]),
    ]

    context = build_context(documents, [])

    values = [attribute.value for attribute in context.attributes]
    assert values == ["10.1/a", "10.1/b", "10.1/c"]
    assert "10.1/external" not in values
    assert _column(context, Attribute.citation("10.1/b")) == [True, True, False]
    assert _column(context, Attribute.citation("10.1/a")) == [True, True, True]


def test_citation_attributes_appear_once_when_both_cited_and_referenced() -> None:
    documents = [
        Document("10.1/a", "Paper A", citations=["10.1/b"], references=["10.1/b"]),
        Document("10.1/b", "Paper B", citations=["10.1/a"], references=["10.1/a"]),
    ]

    context = build_context(documents, [])

    assert [attribute.value for attribute in context.attributes] == ["10.1/a", "10.1/b"]


def test_citation_attributes_limited_to_most_cited() -> None:
    documents = []
    for i in range(15):
        count = 15 - i if i < 10 else 5 - (i - 10)
        citations = [f"10.1/{j}" for j in range(min(count, 15)) if j != i]
        documents.append(Document(f"10.1/{i}", f"Paper {i}", citations=citations))

    context = build_context(documents, [])

    citation_attributes = [attribute for attribute in context.attributes if attribute.is_citation]
    assert len(citation_attributes) == 10
    assert citation_attributes[0] == Attribute.citation("10.1/0")
    assert Attribute.citation("10.1/1") in citation_attributes


def test_citation_counts_ignore_outside_and_self_mentions() -> None:
    documents = [
        Document("a", citations=["a", "b", "zzz"]),
        Document("b", references=["a"]),
        Document("c"),
    ]

    assert count_internal_citations(documents) == {"a": 1, "b": 1, "c": 0}


def test_citation_ties_keep_arrival_order() -> None:
    documents = [
        Document("a"),
        Document("b", citations=["c"]),
        Document("c", citations=["b"]),
        Document("d", citations=["a", "a"]),
    ]

    selected = select_citation_attributes(documents, limit=2)

    assert selected == [Attribute.citation("a"), Attribute.citation("b")]


def test_empty_inputs_give_empty_attribute_sequence() -> None:
    documents = [Document("10.1/a", "Paper A"), Document("10.1/b", "Paper B")]

    context = build_context(documents, [])

    assert context.attributes == ()
    assert context.matrix == ((), ())


def test_blank_and_duplicate_keywords_are_dropped() -> None:
    context = build_context([Document("a", "Visual")], ["VISUAL", "", "  ", "VISUAL"])
    assert context.attributes == (Attribute.keyword("VISUAL"),)


def test_custom_matcher_is_used_for_keyword_cells() -> None:
    calls: list[str] = []

    def matcher(title: str, keywords):
        calls.append(title)
        return [KeywordMatch(keyword=keywords[-1], position=0, length=1, text="x")]

    context = build_context([Document("a", "One"), Document("b", "Two")], ["FIRST", "LAST"])

    custom = build_context([Document("a", "One"), Document("b", "Two")], ["FIRST", "LAST"], matcher=matcher)

    assert context.matrix == ((False, False), (False, False))
    assert custom.matrix == ((False, True), (False, True))
    assert calls == ["One", "Two"]


def test_duplicate_identities_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="litconcepts.context"):
        build_context([Document("a", "Visual"), Document("a", "Visual")], ["VISUAL"])
    assert "Duplicate document identities" in caplog.text


def test_context_rejects_ragged_matrix() -> None:
    with pytest.raises(ValueError):
        Context(documents=("a",), attributes=(Attribute.keyword("X"),), matrix=((True, False),))

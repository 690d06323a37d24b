from __future__ import annotations

from pathlib import Path

import pytest

from litconcepts.keywords import (
    KeywordConfigError,
    find_keyword_matches,
    load_boost_keywords,
    normalize_boost_keyword_string,
    parse_unique_boost_keywords,
)


def test_find_keyword_matches_is_case_insensitive_and_ordered_by_position() -> None:
    matches = find_keyword_matches("Visual Analytics of Networks", ["NETWORK", "visual"])
    assert [match.keyword for match in matches] == ["visual", "NETWORK"]
    assert matches[0].position == 0
    assert matches[1].position == len("Visual Analytics of ")
    assert matches[1].length == len("NETWORK")


def test_find_keyword_matches_uses_first_matching_alternative() -> None:
    matches = find_keyword_matches("Citation Networks", ["LITERAT|CITATION|NETWORK"])
    assert len(matches) == 1
    assert matches[0].keyword == "LITERAT|CITATION|NETWORK"
    assert matches[0].text == "CITATION"


def test_find_keyword_matches_suppresses_overlapping_hits() -> None:
    matches = find_keyword_matches("Visualization", ["VISUAL", "VISUALIZATION"])
    assert [match.keyword for match in matches] == ["VISUAL"]


def test_find_keyword_matches_falls_back_to_non_overlapping_alternative() -> None:
    matches = find_keyword_matches("Visual Graph", ["VISUAL", "VIS|GRAPH"])
    assert [match.keyword for match in matches] == ["VISUAL", "VIS|GRAPH"]
    assert matches[1].text == "GRAPH"


def test_find_keyword_matches_ignores_empty_expressions() -> None:
    assert find_keyword_matches("Anything", ["", "|"]) == []
    assert find_keyword_matches("", ["VISUAL"]) == []


def test_normalize_boost_keyword_string() -> None:
    assert normalize_boost_keyword_string("visual ,graph | network,  data") == "VISUAL, GRAPH|NETWORK, DATA"


def test_parse_unique_boost_keywords_deduplicates_in_order() -> None:
    assert parse_unique_boost_keywords("visual, data,Visual, vis | graph,, ") == [
        "VISUAL",
        "DATA",
        "VIS|GRAPH",
    ]


def test_load_boost_keywords_from_yaml_list(tmp_path: Path) -> None:
    path = tmp_path / "keywords.yaml"
    path.write_text(
        """
        - visual
        - "vis | graph"
        - visual
        """
    )
    assert load_boost_keywords(path) == ["VISUAL", "VIS|GRAPH"]


def test_load_boost_keywords_from_mapping_and_string(tmp_path: Path) -> None:
    path = tmp_path / "keywords.yaml"
    path.write_text("keywords: 'citation, literat|review'\n")
    assert load_boost_keywords(path) == ["CITATION", "LITERAT|REVIEW"]


def test_load_boost_keywords_missing_file_returns_empty(tmp_path: Path) -> None:
    assert load_boost_keywords(tmp_path / "missing.yaml") == []


def test_load_boost_keywords_rejects_nested_entries(tmp_path: Path) -> None:
    path = tmp_path / "keywords.yaml"
    path.write_text("- term: visual\n")
    with pytest.raises(KeywordConfigError):
        load_boost_keywords(path)


def test_load_boost_keywords_rejects_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "keywords.yaml"
    path.write_text("keywords: [visual\n")
    with pytest.raises(KeywordConfigError):
        load_boost_keywords(path)

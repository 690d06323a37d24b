from __future__ import annotations

import pytest

from litconcepts.text import DEFAULT_STOPWORDS, TextNormalizer, stem


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("studies", "study"),
        ("ties", "ti"),
        ("classes", "class"),
        ("graphs", "graph"),
        ("gas", "ga"),
        ("visualized", "visualiz"),
        ("red", "red"),
        ("mining", "min"),
        ("king", "king"),
        ("Networks", "network"),
        ("analytic", "analytic"),
    ],
)
def test_stem_applies_first_matching_rule(word: str, expected: str) -> None:
    assert stem(word) == expected


def test_stem_does_not_cascade_rules() -> None:
    # "ings" only loses the trailing "s"; the "ing" rule is not applied afterwards
    assert stem("drawings") == "drawing"


def test_tokenize_filters_short_words_and_stopwords() -> None:
    normalizer = TextNormalizer()
    tokens = list(normalizer.tokenize("The Visual Analytics of Graphs, in 3D!"))
    assert tokens == ["visual", "analytic", "graph"]


def test_tokenize_replaces_punctuation_with_whitespace() -> None:
    normalizer = TextNormalizer()
    assert list(normalizer.tokenize("human-computer interaction:design")) == [
        "human",
        "computer",
        "interaction",
        "design",
    ]


def test_token_stream_is_restartable() -> None:
    stream = TextNormalizer().tokenize("Exploring citation networks")
    first = list(stream)
    second = list(stream)
    assert first == second == ["explor", "citation", "network"]


def test_tokenize_empty_text() -> None:
    normalizer = TextNormalizer()
    assert list(normalizer.tokenize("")) == []
    assert list(normalizer.tokenize(None)) == []


def test_extra_stopwords_are_added_to_defaults() -> None:
    normalizer = TextNormalizer.with_extra_stopwords(["Towards", " "])
    assert "towards" in normalizer.stopwords
    assert DEFAULT_STOPWORDS <= normalizer.stopwords
    assert list(normalizer.tokenize("Towards better graph layouts")) == ["better", "graph", "layout"]


def test_default_stopwords_cover_common_words() -> None:
    assert {"the", "and", "with", "will"} <= DEFAULT_STOPWORDS
    assert len(DEFAULT_STOPWORDS) == 24


def test_tokenize_treats_accented_letters_as_separators() -> None:
    normalizer = TextNormalizer()
    assert list(normalizer.tokenize("Schrödinger Análisis")) == ["schr", "dinger", "lisi"]

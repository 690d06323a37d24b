"""Tokenization and stemming of publication titles."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final, Iterable, Iterator

# Common English words that never describe a concept.
DEFAULT_STOPWORDS: Final[frozenset[str]] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "has",
        "he",
        "in",
        "is",
        "it",
        "its",
        "of",
        "on",
        "that",
        "the",
        "to",
        "was",
        "will",
        "with",
    }
)

# ASCII word characters only; accented letters act as separators
_NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


def stem(word: str) -> str:
    """Strip a common English suffix; only the first matching rule applies."""

    word = word.lower()
    if word.endswith("ies") and len(word) > 4:
        return f"{word[:-3]}y"
    if word.endswith("es") and len(word) > 3:
        return word[:-2]
    if word.endswith("s") and len(word) > 2:
        return word[:-1]
    if word.endswith("ed") and len(word) > 3:
        return word[:-2]
    if word.endswith("ing") and len(word) > 4:
        return word[:-3]
    return word


class TokenStream:
    """Lazy, restartable sequence of stems for a single text."""

    __slots__ = ("_text", "_normalizer")

    def __init__(self, text: str, normalizer: "TextNormalizer") -> None:
        self._text = text
        self._normalizer = normalizer

    def __iter__(self) -> Iterator[str]:
        if not self._text:
            return
        cleaned = _NON_WORD_RE.sub(" ", self._text.lower())
        for word in _WHITESPACE_RE.split(cleaned):
            if self._normalizer.keeps(word):
                yield stem(word)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"TokenStream({self._text!r})"


@dataclass(frozen=True, slots=True)
class TextNormalizer:
    """Immutable tokenizer configuration shared by the naming pipeline."""

    stopwords: frozenset[str] = field(default=DEFAULT_STOPWORDS)
    min_token_length: int = 3

    @classmethod
    def with_extra_stopwords(cls, words: Iterable[str], *, min_token_length: int = 3) -> "TextNormalizer":
        extra = {word.strip().lower() for word in words if word and word.strip()}
        return cls(stopwords=DEFAULT_STOPWORDS | extra, min_token_length=min_token_length)

    def keeps(self, word: str) -> bool:
        return len(word) >= self.min_token_length and word not in self.stopwords

    def tokenize(self, text: str | None) -> TokenStream:
        return TokenStream(text or "", self)


__all__ = [
    "DEFAULT_STOPWORDS",
    "TextNormalizer",
    "TokenStream",
    "stem",
]

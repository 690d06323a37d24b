"""Boost keyword parsing, matching and loading."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence

import yaml


@dataclass(frozen=True, slots=True)
class KeywordMatch:
    """A boost keyword expression found in a title."""

    keyword: str
    position: int
    length: int
    text: str

    @property
    def end(self) -> int:
        return self.position + self.length

    def overlaps(self, position: int, length: int) -> bool:
        return position < self.end and position + length > self.position


KeywordMatcher = Callable[[str, Sequence[str]], Sequence[KeywordMatch]]


def split_alternatives(expression: str) -> List[str]:
    """Return the non-blank pipe-separated alternatives of a keyword expression."""

    return [alternative for alternative in expression.split("|") if alternative.strip()]


def find_keyword_matches(title: str, boost_keywords: Sequence[str]) -> List[KeywordMatch]:
    """Find boost keyword expressions in ``title``.

    Each expression contributes at most one match: its alternatives are tried in
    order and the first one whose first case-insensitive occurrence does not
    overlap an earlier match wins. Matches are returned ordered by position.
    """

    upper_title = (title or "").upper()
    matches: list[KeywordMatch] = []
    for expression in boost_keywords:
        if not expression:
            continue
        for alternative in split_alternatives(expression):
            needle = alternative.upper()
            index = upper_title.find(needle)
            if index < 0:
                continue
            if any(match.overlaps(index, len(needle)) for match in matches):
                continue
            matches.append(
                KeywordMatch(
                    keyword=expression,
                    position=index,
                    length=len(needle),
                    text=alternative,
                )
            )
            break
    matches.sort(key=lambda match: match.position)
    return matches


def matched_expressions(title: str, boost_keywords: Sequence[str], matcher: KeywordMatcher) -> set[str]:
    return {match.keyword for match in matcher(title or "", boost_keywords)}


def normalize_boost_keyword_string(raw: str) -> str:
    """Canonicalise spacing around separators and upper-case the expression list."""

    value = re.sub(r"\s*,\s*", ", ", raw)
    value = re.sub(r"\s*\|\s*", "|", value)
    return value.upper()


def parse_unique_boost_keywords(raw: str) -> List[str]:
    """Split a comma-separated keyword string into unique upper-case expressions."""

    keywords = (keyword.strip() for keyword in re.split(r",\s*", normalize_boost_keyword_string(raw)))
    return list(dict.fromkeys(keyword for keyword in keywords if keyword))


class KeywordConfigError(RuntimeError):
    """Raised when a boost keyword configuration cannot be loaded."""


def _coerce_keyword_items(data: Any) -> Iterable[str]:
    if isinstance(data, str):
        return [data]
    if isinstance(data, list):
        items: list[str] = []
        for item in data:
            if isinstance(item, (dict, list)):
                raise KeywordConfigError(f"Unsupported keyword entry: {item!r}")
            if item is not None:
                items.append(str(item))
        return items
    raise KeywordConfigError(f"Unsupported keyword configuration of type {type(data).__name__}")


def load_boost_keywords(path: str | Path) -> List[str]:
    """Load boost keywords from a YAML file; return an empty list if missing.

    The file may hold a list of expressions, a single comma-separated string, or
    a mapping with a ``keywords`` key holding either of those.
    """

    keyword_path = Path(path)
    if not keyword_path.exists():
        return []

    try:
        data = yaml.safe_load(keyword_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise KeywordConfigError(f"Invalid keyword file {keyword_path}: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("keywords") or []

    keywords: list[str] = []
    for item in _coerce_keyword_items(data):
        keywords.extend(parse_unique_boost_keywords(item))
    return list(dict.fromkeys(keywords))


__all__ = [
    "KeywordConfigError",
    "KeywordMatch",
    "KeywordMatcher",
    "find_keyword_matches",
    "load_boost_keywords",
    "matched_expressions",
    "normalize_boost_keyword_string",
    "parse_unique_boost_keywords",
    "split_alternatives",
]

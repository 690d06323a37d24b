"""Configuration helpers for the concept analysis engine."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry

    from .observability import MetricsRecorder
    from .text import TextNormalizer

_DEFAULT_MAX_CITATION_ATTRIBUTES: Final[int] = 10
_DEFAULT_MIN_CONCEPT_SIZE: Final[int] = 3
_DEFAULT_MIN_REMAINING_IMPORTANCE: Final[int] = 3
_DEFAULT_MAX_TOP_TERMS: Final[int] = 10
_DEFAULT_TERM_MERGE_PREFIX_LENGTH: Final[int] = 5
_DEFAULT_TERM_TIE_TOLERANCE: Final[float] = 0.0001
_DEFAULT_SHORT_KEYWORD_LENGTH: Final[int] = 3
_DEFAULT_MIN_TOKEN_LENGTH: Final[int] = 3
_DEFAULT_BOOST_KEYWORDS_PATH: Final[str] = "config/boost_keywords.yaml"
_DEFAULT_METRICS_NAMESPACE: Final[str] = "litconcepts"


def _env_optional_bool(name: str) -> bool | None:
    """Read an optional boolean environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    msg = f"Environment variable {name} must be a boolean value (true/false)."
    raise ValueError(msg)


def _env_optional_int(name: str) -> int | None:
    """Read an optional integer environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _env_optional_float(name: str) -> float | None:
    """Read an optional float environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float") from exc


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    """Read an integer environment variable with a fallback, clamped to ``minimum``."""

    value = _env_optional_int(name)
    return default if value is None else max(minimum, value)


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable with a fallback (preserving zero)."""

    value = _env_optional_float(name)
    return default if value is None else value


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable with a fallback."""

    value = _env_optional_bool(name)
    if value is None:
        return default
    return value


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(slots=True)
class Settings:
    """Runtime settings for concept computation, loaded from environment variables."""

    max_citation_attributes: int = _DEFAULT_MAX_CITATION_ATTRIBUTES
    min_concept_size: int = _DEFAULT_MIN_CONCEPT_SIZE
    min_remaining_importance: int = _DEFAULT_MIN_REMAINING_IMPORTANCE
    max_top_terms: int = _DEFAULT_MAX_TOP_TERMS
    term_merge_prefix_length: int = _DEFAULT_TERM_MERGE_PREFIX_LENGTH
    term_tie_tolerance: float = _DEFAULT_TERM_TIE_TOLERANCE
    short_keyword_length: int = _DEFAULT_SHORT_KEYWORD_LENGTH
    min_token_length: int = _DEFAULT_MIN_TOKEN_LENGTH
    extra_stopwords: tuple[str, ...] = field(default_factory=tuple)
    boost_keywords_path: str | None = _DEFAULT_BOOST_KEYWORDS_PATH
    log_level: str | None = None
    metrics_enabled: bool = True
    metrics_namespace: str = _DEFAULT_METRICS_NAMESPACE
    prometheus_enabled: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings by reading environment variables (and a ``.env`` file)."""

        load_dotenv()
        return cls(
            max_citation_attributes=_env_int(
                "CONCEPT_MAX_CITATION_ATTRIBUTES", _DEFAULT_MAX_CITATION_ATTRIBUTES
            ),
            min_concept_size=_env_int("CONCEPT_MIN_SIZE", _DEFAULT_MIN_CONCEPT_SIZE, minimum=1),
            min_remaining_importance=_env_int(
                "CONCEPT_MIN_REMAINING_IMPORTANCE", _DEFAULT_MIN_REMAINING_IMPORTANCE
            ),
            max_top_terms=_env_int("CONCEPT_MAX_TOP_TERMS", _DEFAULT_MAX_TOP_TERMS, minimum=1),
            term_merge_prefix_length=_env_int(
                "CONCEPT_TERM_MERGE_PREFIX_LENGTH", _DEFAULT_TERM_MERGE_PREFIX_LENGTH, minimum=1
            ),
            term_tie_tolerance=_env_float("CONCEPT_TERM_TIE_TOLERANCE", _DEFAULT_TERM_TIE_TOLERANCE),
            short_keyword_length=_env_int(
                "CONCEPT_SHORT_KEYWORD_LENGTH", _DEFAULT_SHORT_KEYWORD_LENGTH
            ),
            min_token_length=_env_int(
                "CONCEPT_MIN_TOKEN_LENGTH", _DEFAULT_MIN_TOKEN_LENGTH, minimum=1
            ),
            extra_stopwords=_env_list("CONCEPT_EXTRA_STOPWORDS"),
            boost_keywords_path=os.getenv("CONCEPT_BOOST_KEYWORDS_PATH", _DEFAULT_BOOST_KEYWORDS_PATH),
            log_level=os.getenv("CONCEPT_LOG_LEVEL"),
            metrics_enabled=_env_bool("CONCEPT_METRICS_ENABLED", True),
            metrics_namespace=os.getenv("CONCEPT_METRICS_NAMESPACE", _DEFAULT_METRICS_NAMESPACE),
            prometheus_enabled=_env_bool("CONCEPT_PROMETHEUS_ENABLED", False),
        )

    def build_text_normalizer(self) -> "TextNormalizer":
        """Instantiate the tokenizer configuration for term extraction."""

        from .text import TextNormalizer

        return TextNormalizer.with_extra_stopwords(
            self.extra_stopwords, min_token_length=self.min_token_length
        )

    def build_metrics_recorder(self, registry: "CollectorRegistry | None" = None) -> "MetricsRecorder":
        """Instantiate the configured metrics recorder, exporting into ``registry`` when enabled."""

        from .observability import MetricsRecorder

        return MetricsRecorder(
            enabled=self.metrics_enabled,
            namespace=self.metrics_namespace,
            prometheus_enabled=self.prometheus_enabled,
            registry=registry if self.prometheus_enabled else None,
        )

    def boost_keywords_file(self) -> Path | None:
        if not self.boost_keywords_path:
            return None
        return Path(self.boost_keywords_path).expanduser()

    def load_boost_keywords(self) -> list[str]:
        """Return the configured boost keywords, or an empty list when none are set."""

        from .keywords import load_boost_keywords

        path = self.boost_keywords_file()
        if path is None:
            return []
        return load_boost_keywords(path)


__all__ = ["Settings"]

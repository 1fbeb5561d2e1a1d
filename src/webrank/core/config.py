"""
Ranking Configuration

Environment-driven settings plus the typed config records consumed by the
query expander, the scorer and the search engine.
"""

import os
from dataclasses import dataclass, field
from enum import Enum


class Algorithm(str, Enum):
    """Relevance scoring algorithm"""

    BM25 = "bm25"
    TFIDF = "tfidf"


def _parse_algorithm(value: str) -> Algorithm:
    try:
        return Algorithm(value.strip().lower())
    except ValueError:
        raise RuntimeError(
            f"Invalid SEARCH_ALGORITHM value: '{value}'. "
            "Must be 'bm25' or 'tfidf'."
        )


class Settings:
    """Ranking configuration read from the environment"""

    # Scoring
    SEARCH_ALGORITHM: str = os.getenv("SEARCH_ALGORITHM", "bm25")
    BM25_K1: float = float(os.getenv("BM25_K1", "1.2"))
    BM25_B: float = float(os.getenv("BM25_B", "0.75"))
    RESULTS_LIMIT: int = int(os.getenv("RESULTS_LIMIT", "10"))

    # Query Expansion
    QUERY_EXPANSION_MAX_SYNONYMS: int = int(
        os.getenv("QUERY_EXPANSION_MAX_SYNONYMS", "3")
    )
    QUERY_EXPANSION_MAX_CONCEPTS: int = int(
        os.getenv("QUERY_EXPANSION_MAX_CONCEPTS", "5")
    )
    QUERY_EXPANSION_ALT_PHRASES: bool = (
        os.getenv("QUERY_EXPANSION_ALT_PHRASES", "true").lower() == "true"
    )
    QUERY_EXPANSION_MODEL: str = os.getenv("QUERY_EXPANSION_MODEL", "gpt-4o-mini")
    QUERY_EXPANSION_TEMPERATURE: float = float(
        os.getenv("QUERY_EXPANSION_TEMPERATURE", "0.2")
    )
    QUERY_EXPANSION_TIMEOUT_SEC: float = float(
        os.getenv("QUERY_EXPANSION_TIMEOUT_SEC", "15")
    )

    # OpenAI (remote query expansion, optional)
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None


settings = Settings()


@dataclass
class BM25Config:
    """BM25 hyperparameters."""

    k1: float = 1.2  # Term frequency saturation
    b: float = 0.75  # Length normalization


@dataclass
class QueryExpansionConfig:
    """Query expansion limits and language-model options."""

    max_synonyms_per_term: int = 3
    max_related_concepts: int = 5
    max_alternative_phrases: int = 3
    include_alternative_phrases: bool = True
    api_key: str | None = None  # None disables the remote path
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    timeout_sec: float = 15.0
    max_output_tokens: int = 1024


@dataclass
class SearchConfig:
    algorithm: Algorithm = Algorithm.BM25
    bm25: BM25Config = field(default_factory=BM25Config)
    max_results: int = 10
    query_expansion: QueryExpansionConfig = field(default_factory=QueryExpansionConfig)

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "SearchConfig":
        s = source or settings
        return cls(
            algorithm=_parse_algorithm(s.SEARCH_ALGORITHM),
            bm25=BM25Config(k1=s.BM25_K1, b=s.BM25_B),
            max_results=s.RESULTS_LIMIT,
            query_expansion=QueryExpansionConfig(
                max_synonyms_per_term=s.QUERY_EXPANSION_MAX_SYNONYMS,
                max_related_concepts=s.QUERY_EXPANSION_MAX_CONCEPTS,
                include_alternative_phrases=s.QUERY_EXPANSION_ALT_PHRASES,
                api_key=s.OPENAI_API_KEY,
                model=s.QUERY_EXPANSION_MODEL,
                temperature=s.QUERY_EXPANSION_TEMPERATURE,
                timeout_sec=s.QUERY_EXPANSION_TIMEOUT_SEC,
            ),
        )

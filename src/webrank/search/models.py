"""
Ranking Records

Shapes exchanged between the content processor, the query expander and
the ranking pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProcessedDocument(BaseModel):
    """Plain-text document produced by the content processor."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str = Field(..., min_length=1)
    title: str = ""
    text: str = ""


class ExpansionSource(str, Enum):
    """Which expansion path produced an ExpandedQuery."""

    REMOTE = "remote"
    LOCAL = "local"
    BASIC = "basic"


@dataclass(frozen=True)
class ExpandedQuery:
    """A raw query plus the synonyms, concepts and entities derived from it."""

    original: str
    synonym_groups: tuple[tuple[str, ...], ...] = ()
    related_concepts: tuple[str, ...] = ()
    alternative_phrases: tuple[str, ...] = ()
    entities: tuple[str, ...] = ()
    expanded_query_text: str = ""
    source: ExpansionSource = ExpansionSource.BASIC

    def __post_init__(self):
        # expanded_query_text always starts with the original query
        text = self.expanded_query_text
        if not text:
            object.__setattr__(self, "expanded_query_text", self.original)
        elif not text.startswith(self.original):
            object.__setattr__(self, "expanded_query_text", f"{self.original} OR {text}")


@dataclass(frozen=True)
class CorpusStatistics:
    """Corpus-wide aggregates for one batch of documents."""

    document_frequency: dict[str, int]
    document_count: int = 0
    average_document_length: float = 0.0


@dataclass(frozen=True)
class UrlBoosts:
    hostname_boost: float = 0.0
    path_boost: float = 0.0


@dataclass(frozen=True)
class RankedResult:
    """A single ranked search result."""

    url: str
    title: str
    snippet: str
    score: float  # Raw relevance score
    final_score: float  # score * (1 + hostname_boost + path_boost)
    hostname_boost: float = 0.0
    path_boost: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "snippet": self.snippet,
            "score": self.score,
            "finalScore": self.final_score,
            "hostnameBoost": self.hostname_boost,
            "pathBoost": self.path_boost,
        }

"""Relevance Ranking Pipeline."""

from webrank.core.config import Algorithm, BM25Config, QueryExpansionConfig, SearchConfig
from webrank.search.boost import url_boosts
from webrank.search.expansion import QueryExpander
from webrank.search.models import (
    CorpusStatistics,
    ExpandedQuery,
    ProcessedDocument,
    RankedResult,
    UrlBoosts,
)
from webrank.search.ranker import rank
from webrank.search.scoring import RelevanceScorer, query_terms
from webrank.search.searcher import DocumentSource, SearchEngine
from webrank.search.snippet import generate_snippet
from webrank.search.statistics import aggregate

__all__ = [
    "Algorithm",
    "BM25Config",
    "QueryExpansionConfig",
    "SearchConfig",
    "QueryExpander",
    "ExpandedQuery",
    "ProcessedDocument",
    "CorpusStatistics",
    "RankedResult",
    "UrlBoosts",
    "aggregate",
    "RelevanceScorer",
    "query_terms",
    "url_boosts",
    "generate_snippet",
    "rank",
    "DocumentSource",
    "SearchEngine",
]

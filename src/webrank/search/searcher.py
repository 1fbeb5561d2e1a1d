"""
Search Engine

Runs the full search flow around the ranking core: expand the query,
fetch documents from a crawler-backed source, de-duplicate, rank and
truncate.
"""

import logging
from typing import Iterable, Protocol

from webrank.core.config import SearchConfig
from webrank.core.utils import normalize_url
from webrank.search.expansion import QueryExpander
from webrank.search.models import ExpandedQuery, ProcessedDocument, RankedResult
from webrank.search.ranker import rank

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    """Crawler + content processor, producing plain-text documents."""

    def search(self, query_text: str, limit: int) -> Iterable[ProcessedDocument]: ...

    def crawl(self, url: str, depth: int) -> Iterable[ProcessedDocument]: ...


def dedupe_documents(documents: Iterable[ProcessedDocument]) -> list[ProcessedDocument]:
    """Drop documents whose normalized URL was already seen (first wins)."""
    out: list[ProcessedDocument] = []
    seen: set[str] = set()
    for doc in documents:
        key = normalize_url(doc.url) or doc.url
        if key in seen:
            continue
        seen.add(key)
        out.append(doc)
    return out


class SearchEngine:
    """
    Search flow over a pluggable document source.

    Supports two modes:
    - search: rank the documents the source returns for the expanded query
    - deep_search: also crawl outward from each of those documents
    """

    def __init__(
        self,
        source: DocumentSource,
        config: SearchConfig | None = None,
        expander: QueryExpander | None = None,
    ):
        self.source = source
        self.config = config or SearchConfig()
        self.expander = expander or QueryExpander(self.config.query_expansion)

    def search(self, query: str, max_results: int | None = None) -> list[RankedResult]:
        limit = self.config.max_results if max_results is None else max_results
        expanded = self.expander.expand(query)
        logger.info(f"Expanded query: {expanded.expanded_query_text}")

        documents = dedupe_documents(self.source.search(expanded.expanded_query_text, limit))
        logger.info(f"Fetched {len(documents)} documents for {query!r}")

        return self._rank(documents, expanded, limit)

    def deep_search(
        self,
        query: str,
        max_results: int | None = None,
        seed_limit: int = 5,
        depth: int = 2,
    ) -> list[RankedResult]:
        """
        Crawl outward from the top documents for the expanded query.

        A seed whose crawl fails is logged and skipped; the remaining
        documents are still ranked.
        """
        limit = self.config.max_results if max_results is None else max_results
        expanded = self.expander.expand(query)
        logger.info(f"Expanded query: {expanded.expanded_query_text}")

        seeds = list(self.source.search(expanded.expanded_query_text, seed_limit))
        documents = list(seeds)
        logger.info(f"Starting deep crawl from {len(seeds)} URLs")

        for seed in seeds:
            try:
                documents.extend(self.source.crawl(seed.url, depth))
            except Exception as e:
                logger.error(f"Deep crawl failed for {seed.url}: {e}")

        documents = dedupe_documents(documents)
        logger.info(f"Found {len(documents)} unique documents from deep crawl")

        return self._rank(documents, expanded, limit)

    def _rank(
        self,
        documents: list[ProcessedDocument],
        expanded: ExpandedQuery,
        limit: int,
    ) -> list[RankedResult]:
        results = rank(documents, expanded, self.config)
        logger.info(f"Ranked {len(results)} results")
        return results[:limit]

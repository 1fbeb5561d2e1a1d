"""
Ranking

Turns a batch of processed documents and an expanded query into ranked
results: aggregate corpus statistics, score, boost, snippet, sort.
"""

import logging
from typing import Iterable

from webrank.core.config import SearchConfig
from webrank.search.boost import url_boosts
from webrank.search.models import ExpandedQuery, ProcessedDocument, RankedResult
from webrank.search.scoring import RelevanceScorer, query_terms
from webrank.search.snippet import generate_snippet
from webrank.search.statistics import aggregate

logger = logging.getLogger(__name__)


def rank(
    documents: Iterable[ProcessedDocument],
    query: ExpandedQuery,
    config: SearchConfig | None = None,
) -> list[RankedResult]:
    """
    Rank documents by final score, descending.

    Statistics are aggregated over the whole batch before any document is
    scored. The sort is stable, so equal scores keep input order. Results
    are not truncated here; callers apply max_results.
    """
    config = config or SearchConfig()
    docs = list(documents)
    if not docs:
        return []

    # Phase 1: corpus-wide aggregates
    stats = aggregate(docs)

    # Phase 2: per-document scoring (read-only stats)
    scorer = RelevanceScorer(config.algorithm, config.bm25)
    terms = query_terms(query)

    results: list[RankedResult] = []
    for doc in docs:
        score = scorer.score(doc, query, stats, terms=terms)
        boosts = url_boosts(doc.url, query, terms=terms)
        final_score = score * (1 + boosts.hostname_boost + boosts.path_boost)
        results.append(
            RankedResult(
                url=doc.url,
                title=doc.title,
                snippet=generate_snippet(doc.text, terms),
                score=score,
                final_score=final_score,
                hostname_boost=boosts.hostname_boost,
                path_boost=boosts.path_boost,
            )
        )

    results.sort(key=lambda r: r.final_score, reverse=True)
    logger.debug(
        f"Ranked {len(results)} documents with {config.algorithm.value} "
        f"over {len(terms)} query terms"
    )
    return results

"""
Corpus Statistics

Aggregates document frequency and length statistics over one batch of
documents. Statistics are rebuilt from scratch for every batch; nothing
is carried over between searches.
"""

import logging
from collections import Counter
from typing import Iterable

from webrank.analyzer import analyzer
from webrank.search.models import CorpusStatistics, ProcessedDocument

logger = logging.getLogger(__name__)


def aggregate(documents: Iterable[ProcessedDocument]) -> CorpusStatistics:
    """
    Compute document frequency, document count and average length.

    document_frequency[term] counts documents whose token set contains
    the term, so repeats inside one document count once.
    """
    document_frequency: Counter[str] = Counter()
    document_count = 0
    total_length = 0

    for doc in documents:
        tokens = analyzer.tokenize(doc.text)
        document_count += 1
        total_length += len(tokens)
        document_frequency.update(set(tokens))

    stats = CorpusStatistics(
        document_frequency=dict(document_frequency),
        document_count=document_count,
        average_document_length=total_length / max(1, document_count),
    )
    logger.debug(
        f"Aggregated corpus: {document_count} docs, "
        f"{len(stats.document_frequency)} unique terms, "
        f"avgdl={stats.average_document_length:.1f}"
    )
    return stats

"""
Relevance Scoring

Scores a document against an expanded query with either TF-IDF or
Okapi BM25, using statistics aggregated over the current batch.
"""

import math
from collections import Counter
from typing import Sequence

from webrank.analyzer import analyzer
from webrank.core.config import Algorithm, BM25Config
from webrank.search.models import CorpusStatistics, ExpandedQuery, ProcessedDocument


def query_terms(query: ExpandedQuery) -> list[str]:
    """
    Terms matched against documents: the tokenized original query, every
    synonym and every entity, lower-cased, de-duplicated in first-seen
    order, keeping only terms longer than two characters.
    """
    candidates = list(analyzer.tokenize(query.original))
    for group in query.synonym_groups:
        candidates.extend(group)
    candidates.extend(query.entities)

    out: list[str] = []
    seen: set[str] = set()
    for term in candidates:
        term = term.lower()
        if len(term) <= 2 or term in seen:
            continue
        seen.add(term)
        out.append(term)
    return out


def idf(term: str, stats: CorpusStatistics) -> float:
    """
    Smoothed inverse document frequency.

    IDF = ln(1 + N / (df + 1))

    Always positive, and defined for terms that appear in no document.
    """
    df = stats.document_frequency.get(term.lower(), 0)
    return math.log(1 + stats.document_count / (df + 1))


class RelevanceScorer:
    """
    TF-IDF / BM25 scoring implementation.

    TF-IDF:
    score(q, d) = Σ tf * IDF(t) / sqrt(|d|)

    BM25:
    score(q, d) = Σ IDF(t) * (tf * (k1 + 1)) / (tf + k1 * (1 - b + b * |d| / avgdl))

    Where:
    - tf = exact (case-insensitive) occurrences of the term in the document
    - |d| = document length (token count)
    - avgdl = average document length, floored at 1
    """

    def __init__(
        self,
        algorithm: Algorithm = Algorithm.BM25,
        config: BM25Config | None = None,
    ):
        self.algorithm = Algorithm(algorithm)
        self.config = config or BM25Config()

    def score(
        self,
        document: ProcessedDocument,
        query: ExpandedQuery,
        stats: CorpusStatistics,
        terms: Sequence[str] | None = None,
    ) -> float:
        """
        Calculate the relevance score of a document.

        Args:
            document: Document to score
            query: Expanded query
            stats: Statistics of the batch the document belongs to
            terms: Precomputed query_terms(query), to avoid recomputing per document

        Returns:
            Relevance score (higher is better, 0.0 for empty documents)
        """
        tokens = analyzer.tokenize(document.text)
        if not tokens:
            return 0.0

        if terms is None:
            terms = query_terms(query)
        tf_map = Counter(tokens)
        doc_length = len(tokens)

        if self.algorithm is Algorithm.TFIDF:
            total = sum(tf_map.get(t, 0) * idf(t, stats) for t in terms)
            return total / math.sqrt(doc_length)

        return sum(
            self.term_score(tf_map.get(t, 0), idf(t, stats), doc_length, stats)
            for t in terms
        )

    def term_score(
        self,
        tf: int,
        term_idf: float,
        doc_length: int,
        stats: CorpusStatistics,
    ) -> float:
        """BM25 contribution of a single term."""
        if tf == 0:
            return 0.0
        k1 = self.config.k1
        b = self.config.b
        avg_doc_length = max(1.0, stats.average_document_length)

        length_norm = 1 - b + b * (doc_length / avg_doc_length)
        tf_saturated = (tf * (k1 + 1)) / (tf + k1 * length_norm)
        return term_idf * tf_saturated

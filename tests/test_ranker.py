"""Test the ranking orchestrator."""

import pytest

from webrank.core.config import Algorithm, SearchConfig
from webrank.search.models import ExpandedQuery, ProcessedDocument
from webrank.search.ranker import rank


class TestRank:
    """Tests for rank()."""

    def test_empty_input(self):
        assert rank([], ExpandedQuery(original="anything"), SearchConfig()) == []

    def test_healthtech_scenario(self):
        doc = ProcessedDocument(
            url="https://healthtech.com/about",
            title="HealthTech",
            text="HealthTech is a healthcare startup founded in 2018 in Boston.",
        )
        [result] = rank([doc], ExpandedQuery(original="healthcare startup"))

        assert result.score > 0
        assert result.hostname_boost == 0
        assert result.path_boost == 0
        assert result.final_score == result.score
        assert result.snippet == "HealthTech is a healthcare startup founded in 2018 in Boston"

    def test_sorted_descending(self, funding_docs):
        results = rank(funding_docs, ExpandedQuery(original="startup funding"))

        assert len(results) == 3
        for current, following in zip(results, results[1:]):
            assert current.final_score >= following.final_score
        assert results[0].url == "https://startupfunding.io/guide"
        assert results[-1].url == "https://recipes.example.org/pasta"

    def test_final_score_applies_boosts(self, funding_docs):
        results = rank(funding_docs, ExpandedQuery(original="startup funding"))
        top = results[0]

        assert top.hostname_boost == pytest.approx(0.4)
        assert top.final_score == pytest.approx(
            top.score * (1 + top.hostname_boost + top.path_boost)
        )

    def test_boost_breaks_equal_scores(self):
        text = "Funding for founders."
        docs = [
            ProcessedDocument(url="https://example.com/a", title="A", text=text),
            ProcessedDocument(url="https://funding.example.com/b", title="B", text=text),
        ]
        results = rank(docs, ExpandedQuery(original="funding"))
        assert [r.url for r in results] == ["https://funding.example.com/b", "https://example.com/a"]
        assert results[0].final_score == pytest.approx(results[1].final_score * 1.2)

    def test_ties_keep_input_order(self):
        docs = [
            ProcessedDocument(url=f"https://example.com/{i}", title=str(i), text="Nothing relevant.")
            for i in range(4)
        ]
        results = rank(docs, ExpandedQuery(original="funding"))
        assert [r.url for r in results] == [d.url for d in docs]

    def test_idempotent(self, funding_docs):
        query = ExpandedQuery(original="startup funding", entities=("startup", "funding"))
        config = SearchConfig()
        assert rank(funding_docs, query, config) == rank(funding_docs, query, config)

    def test_snippet_length_bound(self):
        docs = [
            ProcessedDocument(url="https://a.com", title="", text="funding " * 60),
            ProcessedDocument(url="https://b.com", title="", text="z" * 500),
        ]
        for result in rank(docs, ExpandedQuery(original="funding")):
            assert len(result.snippet) <= 203

    @pytest.mark.parametrize("algorithm", [Algorithm.BM25, Algorithm.TFIDF])
    def test_algorithms(self, funding_docs, algorithm):
        config = SearchConfig(algorithm=algorithm)
        results = rank(funding_docs, ExpandedQuery(original="startup funding"), config)
        assert results[0].url == "https://startupfunding.io/guide"

    def test_accepts_generators(self, funding_docs):
        results = rank((d for d in funding_docs), ExpandedQuery(original="funding"))
        assert len(results) == 3

    def test_malformed_url_and_empty_text(self):
        docs = [ProcessedDocument(url="not a url", title="Broken", text="")]
        [result] = rank(docs, ExpandedQuery(original="funding"))
        assert result.score == 0.0
        assert result.final_score == 0.0
        assert result.snippet == ""

    def test_to_dict(self, funding_docs):
        data = rank(funding_docs, ExpandedQuery(original="funding"))[0].to_dict()
        assert set(data) == {
            "url",
            "title",
            "snippet",
            "score",
            "finalScore",
            "hostnameBoost",
            "pathBoost",
        }

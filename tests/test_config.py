"""Test ranking configuration."""

import importlib

import pytest

from webrank.core import config
from webrank.core.config import Algorithm, SearchConfig, Settings


class TestSearchConfig:
    def test_defaults(self):
        cfg = SearchConfig()
        assert cfg.algorithm is Algorithm.BM25
        assert cfg.bm25.k1 == 1.2
        assert cfg.bm25.b == 0.75
        assert cfg.max_results == 10
        assert cfg.query_expansion.max_synonyms_per_term == 3
        assert cfg.query_expansion.max_related_concepts == 5
        assert cfg.query_expansion.temperature == 0.2

    def test_from_settings(self):
        s = Settings()
        s.SEARCH_ALGORITHM = "TFIDF"
        s.BM25_K1 = 2.0
        s.RESULTS_LIMIT = 25
        s.OPENAI_API_KEY = "sk-test"

        cfg = SearchConfig.from_settings(s)

        assert cfg.algorithm is Algorithm.TFIDF
        assert cfg.bm25.k1 == 2.0
        assert cfg.max_results == 25
        assert cfg.query_expansion.api_key == "sk-test"

    def test_invalid_algorithm(self):
        s = Settings()
        s.SEARCH_ALGORITHM = "pagerank"
        with pytest.raises(RuntimeError, match="SEARCH_ALGORITHM"):
            SearchConfig.from_settings(s)


class TestSettings:
    def test_reads_environment(self, monkeypatch):
        """Settings should be loaded from environment."""
        with monkeypatch.context() as m:
            m.setenv("SEARCH_ALGORITHM", "tfidf")
            m.setenv("BM25_K1", "1.6")
            m.setenv("QUERY_EXPANSION_MAX_SYNONYMS", "5")
            m.delenv("OPENAI_API_KEY", raising=False)

            # Need to reload the module to pick up env vars
            importlib.reload(config)

            assert config.settings.SEARCH_ALGORITHM == "tfidf"
            assert config.settings.BM25_K1 == 1.6
            assert config.settings.QUERY_EXPANSION_MAX_SYNONYMS == 5
            assert config.settings.OPENAI_API_KEY is None

        importlib.reload(config)

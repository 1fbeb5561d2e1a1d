"""Test fixtures for webrank tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from webrank.core.config import QueryExpansionConfig
from webrank.search.expansion import QueryExpander
from webrank.search.models import ProcessedDocument


@pytest.fixture
def local_expander():
    """Expander with no API key (local rules only)."""
    return QueryExpander(QueryExpansionConfig(api_key=None))


@pytest.fixture
def make_llm_client():
    """Build a fake OpenAI client whose chat completion returns the given text."""

    def _make(content: str | None = None, error: Exception | None = None) -> MagicMock:
        client = MagicMock()
        if error is not None:
            client.chat.completions.create.side_effect = error
        else:
            message = SimpleNamespace(content=content)
            client.chat.completions.create.return_value = SimpleNamespace(
                choices=[SimpleNamespace(message=message)]
            )
        return client

    return _make


@pytest.fixture
def funding_docs():
    """Small batch of startup/funding documents."""
    return [
        ProcessedDocument(
            url="https://example.com/news/funding",
            title="Funding News",
            text="Startup funding rose this year. Investors backed many funding rounds.",
        ),
        ProcessedDocument(
            url="https://recipes.example.org/pasta",
            title="Pasta",
            text="Boil water. Add salt and pasta. Serve with sauce.",
        ),
        ProcessedDocument(
            url="https://startupfunding.io/guide",
            title="Startup Funding Guide",
            text="A startup needs funding. This guide covers seed funding and venture capital.",
        ),
    ]

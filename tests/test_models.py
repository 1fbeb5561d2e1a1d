"""Test the ranking records."""

from webrank.search.models import ExpandedQuery


class TestExpandedQuery:
    """The expanded query text always starts with the original query."""

    def test_defaults_to_original(self):
        """A bare record echoes the original query."""
        expanded = ExpandedQuery(original="startup funding")
        assert expanded.expanded_query_text == "startup funding"

    def test_keeps_prefixed_text(self):
        expanded = ExpandedQuery(
            original="fast cars", expanded_query_text="fast cars OR quick OR rapid"
        )
        assert expanded.expanded_query_text == "fast cars OR quick OR rapid"

    def test_prepends_missing_original(self):
        """Text without the original in front gets it prepended."""
        expanded = ExpandedQuery(original="fast cars", expanded_query_text="quick OR rapid")
        assert expanded.expanded_query_text == "fast cars OR quick OR rapid"

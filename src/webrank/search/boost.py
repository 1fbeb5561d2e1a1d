"""
URL Boosts

Rewards documents whose hostname or path contains query terms. Matching
is raw substring containment, so a query term like "health" matches the
hostname "healthtech.com" while "healthcare" does not.
"""

import logging
from typing import Sequence

from webrank.core.utils import url_parts
from webrank.search.models import ExpandedQuery, UrlBoosts
from webrank.search.scoring import query_terms

logger = logging.getLogger(__name__)

HOSTNAME_BOOST = 0.2  # Per query term found in the hostname
PATH_BOOST = 0.1  # Per query term found in the path


def url_boosts(
    url: str,
    query: ExpandedQuery,
    terms: Sequence[str] | None = None,
) -> UrlBoosts:
    """
    Calculate additive hostname/path boosts for a URL.

    Boosts stack per matching term and are unbounded. URLs that cannot be
    parsed get zero boosts.
    """
    try:
        parts = url_parts(url)
    except ValueError as e:
        logger.debug(f"Unparseable URL {url!r}: {e}")
        parts = None
    if parts is None:
        return UrlBoosts()

    hostname, path = parts
    if terms is None:
        terms = query_terms(query)

    hostname_boost = 0.0
    path_boost = 0.0
    for term in terms:
        if term in hostname:
            hostname_boost += HOSTNAME_BOOST
        if term in path:
            path_boost += PATH_BOOST

    return UrlBoosts(hostname_boost=hostname_boost, path_boost=path_boost)

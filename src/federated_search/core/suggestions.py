"""Autocomplete derived from federated search results."""

from typing import Iterable, List

from ..models.result import SearchResult

# Shorter prefixes match too broadly to be useful
MIN_SUGGESTION_QUERY_LENGTH = 2


def collect_suggestions(results: Iterable[SearchResult], partial_query: str, limit: int) -> List[str]:
    """
    Pick distinct result titles that contain the partial query.

    The containment check is a plain case-insensitive substring test, not
    a fuzzy one. Titles keep the order of the results they came from.

    Args:
        results: Results in relevance order
        partial_query: What the user has typed so far
        limit: Maximum suggestions

    Returns:
        Up to `limit` titles
    """
    needle = partial_query.strip().lower()
    if len(needle) < MIN_SUGGESTION_QUERY_LENGTH or limit < 1:
        return []

    suggestions: List[str] = []
    for result in results:
        if needle in result.title.lower() and result.title not in suggestions:
            suggestions.append(result.title)
            if len(suggestions) >= limit:
                break
    return suggestions

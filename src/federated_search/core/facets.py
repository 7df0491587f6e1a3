"""Facet aggregation over the filtered result list."""

from datetime import datetime
from typing import Any, Iterable, Optional

from ..models.result import SearchFacets, SearchResult
from ..utils.dates import days_between, parse_date

# Upper bounds (exclusive, in days) of the date range buckets
DATE_BUCKETS = (
    (7, "this_week"),
    (30, "this_month"),
    (90, "this_quarter"),
    (365, "this_year"),
)
OLDER_BUCKET = "older"


def date_bucket(value, now: Optional[datetime] = None) -> Optional[str]:
    """
    Classify a metadata date into a recency bucket.

    Future dates count as this_week. Unparseable values have no bucket.
    """
    parsed = parse_date(value)
    if parsed is None:
        return None

    if now is not None:
        now = parse_date(now)
    days = days_between(parsed, now)
    for limit, label in DATE_BUCKETS:
        if days < limit:
            return label
    return OLDER_BUCKET


def calculate_facets(results: Iterable[SearchResult], now: Optional[datetime] = None) -> SearchFacets:
    """
    Tally results by type, category, tag and date range.

    Reads its input only. Every result counts once toward its type; the
    other tables count only results whose metadata carries the key.

    Args:
        results: Complete filtered result list (not a single page)
        now: Reference time for date buckets (defaults to the call time)

    Returns:
        Frequency tables
    """
    facets = SearchFacets()

    for result in results:
        type_key = result.type.value
        facets.types[type_key] = facets.types.get(type_key, 0) + 1

        metadata = result.metadata or {}

        category = _label(metadata.get("category"))
        if category:
            facets.categories[category] = facets.categories.get(category, 0) + 1

        tags = metadata.get("tags")
        if isinstance(tags, (list, tuple)):
            for tag in tags:
                tag = _label(tag)
                if tag:
                    facets.tags[tag] = facets.tags.get(tag, 0) + 1

        bucket = date_bucket(metadata.get("date"), now)
        if bucket:
            facets.date_ranges[bucket] = facets.date_ranges.get(bucket, 0) + 1

    return facets


def _label(value: Any) -> Optional[str]:
    """Facet label for a scalar metadata value; containers have none."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    label = str(value).strip()
    return label or None

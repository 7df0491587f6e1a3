"""Test facet aggregation."""

from datetime import datetime, timezone

import pytest

from federated_search.core.facets import calculate_facets, date_bucket
from federated_search.models.entity import EntityType
from federated_search.models.result import SearchResult

NOW = datetime(2024, 6, 30, tzinfo=timezone.utc)


def make_result(record_id: str, entity_type: EntityType, **metadata) -> SearchResult:
    return SearchResult(
        id=record_id,
        type=entity_type,
        title=f"Result {record_id}",
        description="",
        url=f"/{record_id}",
        relevance_score=0.5,
        metadata=metadata
    )


class TestDateBucket:
    """Test recency buckets."""

    @pytest.mark.parametrize("value, expected", [
        ("2024-06-28", "this_week"),
        ("2024-06-10", "this_month"),
        ("2024-04-15", "this_quarter"),
        ("2023-12-01", "this_year"),
        ("2022-01-01", "older"),
        ("2024-07-05", "this_week"),
        ("2024-06-29T18:30:00Z", "this_week"),
    ])
    def test_buckets(self, value, expected):
        assert date_bucket(value, NOW) == expected

    @pytest.mark.parametrize("value", [None, "", "not a date", 20240101])
    def test_unparseable(self, value):
        assert date_bucket(value, NOW) is None


class TestCalculateFacets:
    """Test calculate_facets."""

    def test_counts(self):
        results = [
            make_result("1", EntityType.BLOG, tags=["climate", "events"], date="2024-06-28"),
            make_result("2", EntityType.BLOG, tags=["climate"], date="2022-01-01"),
            make_result("3", EntityType.FAQ, category="volunteering"),
            make_result("4", EntityType.RESOURCE, category="volunteering", tags="not-a-list"),
        ]

        facets = calculate_facets(results, now=NOW)

        assert facets.types == {"blog": 2, "faq": 1, "resource": 1}
        assert facets.categories == {"volunteering": 2}
        assert facets.tags == {"climate": 2, "events": 1}
        assert facets.date_ranges == {"this_week": 1, "older": 1}

    def test_type_counts_sum_to_results(self):
        results = [make_result(str(i), list(EntityType)[i % 9]) for i in range(20)]

        facets = calculate_facets(results, now=NOW)

        assert sum(facets.types.values()) == len(results)

    def test_empty_input(self):
        assert calculate_facets([]).is_empty()

    def test_input_not_mutated(self):
        results = [make_result("1", EntityType.BLOG, tags=["climate"])]
        snapshot = [r.to_dict() for r in results]

        calculate_facets(results, now=NOW)

        assert [r.to_dict() for r in results] == snapshot

    def test_non_scalar_labels_skipped(self):
        results = [
            make_result("1", EntityType.FAQ, category=["science", "kids"], tags=[{"name": "stem"}, "climate"]),
            make_result("2", EntityType.RESOURCE, category={"name": "science"}, tags=[["nested"], 2024]),
            make_result("3", EntityType.RESOURCE, category="science", tags=[True, " "]),
        ]

        facets = calculate_facets(results, now=NOW)

        assert facets.types == {"faq": 1, "resource": 2}
        assert facets.categories == {"science": 1}
        assert facets.tags == {"climate": 1, "2024": 1}

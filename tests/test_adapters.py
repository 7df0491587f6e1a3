"""Test per-type adapters, the registry and record providers."""

import logging
from datetime import datetime, timezone

import pytest

from federated_search.core.adapters import (
    ADAPTER_CLASSES,
    AdapterRegistry,
    BlogAdapter,
    EventAdapter,
    FAQAdapter,
    PresentationAdapter,
    VolunteerAdapter,
    build_registry,
)
from federated_search.core.contracts import RecordProvider
from federated_search.core.exceptions import ProviderError
from federated_search.core.providers import InMemoryRecordProvider
from federated_search.models.entity import EntityType

from .conftest import AsyncRecordProvider, FailingProvider


class GreedyProvider:
    """Ignores the requested limit."""

    def __init__(self, count: int):
        self.count = count

    def fetch(self, limit, filters=None):
        return [{"id": f"evt_{i}", "title": f"Workshop {i}"} for i in range(self.count)]


class StaticProvider:
    def __init__(self, value):
        self.value = value

    def fetch(self, limit, filters=None):
        return self.value


class TestInMemoryRecordProvider:
    """Test the bundled in-memory provider."""

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryRecordProvider([]), RecordProvider)

    def test_equality_filter(self, volunteer_records):
        provider = InMemoryRecordProvider(volunteer_records)

        rows = provider.fetch(10, {"role": "volunteer"})

        assert [r["id"] for r in rows] == ["vol_001"]

    def test_filter_on_missing_key_matches_nothing(self, volunteer_records):
        provider = InMemoryRecordProvider(volunteer_records)
        assert provider.fetch(10, {"nickname": None}) == []

    def test_order_by_most_recent_first(self, presentation_records):
        provider = InMemoryRecordProvider(
            presentation_records + [{"id": "pres_undated"}],
            order_by="date"
        )

        rows = provider.fetch(10)

        assert [r["id"] for r in rows] == ["pres_002", "pres_001", "pres_003", "pres_undated"]

    def test_order_by_mixed_values(self):
        rows = [
            {"id": "text", "created_at": "soon"},
            {"id": "naive", "created_at": datetime(2024, 3, 1)},
            {"id": "number", "created_at": 7},
            {"id": "aware", "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc)},
            {"id": "iso", "created_at": "2024-01-01"},
        ]
        provider = InMemoryRecordProvider(rows, order_by="created_at")

        rows = provider.fetch(10)

        assert [r["id"] for r in rows] == ["aware", "naive", "iso", "number", "text"]

    def test_limit_and_copies(self, event_records):
        provider = InMemoryRecordProvider(event_records)

        rows = provider.fetch(1)
        rows[0]["title"] = "changed"

        assert len(rows) == 1
        assert event_records[0]["title"] == "Climate Change Workshop"


class TestSearchAdapter:
    """Test SearchAdapter behaviour shared by every type."""

    async def test_search_maps_results(self, event_records):
        adapter = EventAdapter(InMemoryRecordProvider(event_records))

        results = await adapter.search("climate", threshold=0.0)

        assert len(results) == 1
        result = results[0]
        assert result.id == "evt_001"
        assert result.type is EntityType.EVENT
        assert result.url == "/events/evt_001"
        assert result.metadata == {"date": "2024-06-01", "type": "workshop", "location": "Austin"}
        assert result.highlights[0] == "Climate Change Workshop"
        assert len(result.highlights) <= 3

    async def test_none_metadata_dropped(self):
        adapter = BlogAdapter(InMemoryRecordProvider([{"id": "b1", "title": "Climate notes"}]))

        results = await adapter.search("climate")

        assert results[0].metadata == {}
        assert results[0].url == "/interns/blog/b1"

    async def test_provider_failure_contained(self, caplog):
        adapter = EventAdapter(FailingProvider())

        with caplog.at_level(logging.ERROR):
            results = await adapter.search("climate")

        assert results == []
        assert any("entity_type=event" in r.getMessage() for r in caplog.records)

    async def test_candidate_cap_is_hard_ceiling(self):
        adapter = EventAdapter(GreedyProvider(50), candidate_limit=10)

        rows = await adapter.fetch_candidates()
        results = await adapter.search("workshop", threshold=0.0)

        assert len(rows) == 10
        assert len(results) == 10

    async def test_async_provider(self, event_records):
        provider = AsyncRecordProvider(event_records)
        adapter = EventAdapter(provider, candidate_limit=25)

        results = await adapter.search("ocean", threshold=0.0)

        assert [r.id for r in results] == ["evt_002"]
        assert provider.calls == [(25, None)]

    async def test_blocking_provider_uses_executor(self, event_records, executor):
        adapter = EventAdapter(InMemoryRecordProvider(event_records), executor=executor)

        results = await adapter.search("ocean", threshold=0.0)

        assert [r.id for r in results] == ["evt_002"]

    async def test_none_rows_mean_no_candidates(self):
        adapter = EventAdapter(StaticProvider(None))
        assert await adapter.fetch_candidates() == []

    @pytest.mark.parametrize("value", [{"id": "x"}, "rows", 42, RuntimeError("boom")])
    async def test_garbage_rows_rejected(self, value):
        adapter = EventAdapter(StaticProvider(value))

        with pytest.raises(ProviderError):
            await adapter.fetch_candidates()
        assert await adapter.search("anything") == []

    def test_invalid_candidate_limit(self):
        with pytest.raises(ValueError):
            EventAdapter(InMemoryRecordProvider([]), candidate_limit=0)


class TestProviderFilters:
    """Test static pre-filters and filter push-down."""

    def test_static_filters(self):
        provider = InMemoryRecordProvider([])

        assert VolunteerAdapter(provider).provider_filters() == {"role": "volunteer"}
        assert FAQAdapter(provider).provider_filters() == {"is_published": True}
        assert EventAdapter(provider).provider_filters() is None

    def test_pushdown_only_mapped_keys(self):
        adapter = VolunteerAdapter(InMemoryRecordProvider([]))

        filters = adapter.provider_filters({"status": "active", "team": "Green Team"})

        assert filters == {"role": "volunteer", "status": "active"}

    async def test_unpublished_faqs_excluded(self, faq_records):
        adapter = FAQAdapter(InMemoryRecordProvider(faq_records))

        results = await adapter.search("volunteer")

        assert [r.id for r in results] == ["faq_001"]
        assert results[0].url == "/faq#faq_001"
        assert results[0].metadata == {"category": "volunteering"}

    async def test_admins_are_not_volunteers(self, volunteer_records):
        adapter = VolunteerAdapter(InMemoryRecordProvider(volunteer_records))

        results = await adapter.search("climate")

        assert [r.id for r in results] == ["vol_001"]
        assert results[0].metadata == {
            "email": "alice@example.org",
            "status": "active",
            "team": "Green Team"
        }

    async def test_presentation_metadata(self, presentation_records):
        adapter = PresentationAdapter(InMemoryRecordProvider(presentation_records))

        results = await adapter.search("lincoln", threshold=0.0)

        assert results[0].metadata == {
            "date": "2024-03-01",
            "school": "Lincoln Elementary",
            "team": "Green Team",
            "status": "completed"
        }


class TestAdapterRegistry:
    """Test AdapterRegistry and build_registry."""

    def test_every_type_has_an_adapter(self):
        assert set(ADAPTER_CLASSES) == set(EntityType)

    def test_build_registry_accepts_names(self, event_records):
        registry = build_registry({"event": InMemoryRecordProvider(event_records)})

        assert registry.types() == [EntityType.EVENT]
        assert EntityType.EVENT in registry
        assert EntityType.BLOG not in registry
        assert isinstance(registry.get(EntityType.EVENT), EventAdapter)
        assert registry.get(EntityType.BLOG) is None

    def test_build_registry_unknown_type(self):
        with pytest.raises(ValueError):
            build_registry({"spaceship": InMemoryRecordProvider([])})

    def test_register_replaces(self):
        first = EventAdapter(InMemoryRecordProvider([]))
        second = EventAdapter(InMemoryRecordProvider([]))

        registry = AdapterRegistry([first])
        registry.register(second)

        assert len(registry) == 1
        assert registry.get(EntityType.EVENT) is second
        assert list(registry) == [second]

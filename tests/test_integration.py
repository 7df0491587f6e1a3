"""Integration tests for the complete federated search service."""

import pytest

from federated_search import FederatedSearchService, SearchRequest
from federated_search.core.exceptions import (
    ConfigurationError,
    FederatedSearchError,
    UnsupportedOptionError,
)
from federated_search.core.providers import InMemoryRecordProvider
from federated_search.models.entity import EntityType
from federated_search.models.query import SearchOptions

from .conftest import AsyncRecordProvider, FailingProvider


class TestFederatedSearchServiceIntegration:
    """Integration tests for the complete service."""

    async def test_full_workflow(self, providers):
        """Test complete workflow from service creation to search."""
        async with FederatedSearchService.create(providers, log_level="WARNING") as service:

            response = await service.search_text("climate")
            assert response.total >= 4
            assert response.results[0].relevance_score >= response.results[-1].relevance_score

            events = await service.search_text("climate", types=["event"], sort_by="title")
            assert {r.type for r in events.results} == {EntityType.EVENT}

            page = await service.search_text("climate", limit=2, offset=1)
            assert len(page.results) <= 2
            assert page.total == response.total

            suggestions = await service.suggest("clim")
            assert "Climate Change Workshop" in suggestions

            assert await service.trending(2) == ["volunteer application", "presentation request"]

    async def test_response_serialization(self, providers):
        async with FederatedSearchService.create(providers, log_level="WARNING") as service:
            request = SearchRequest(**{"query": "ocean", "types": ["event"], "fuzzyThreshold": 0.0})

            data = (await service.search(request.to_options())).to_dict()

            assert set(data) == {"results", "facets", "total", "queryTime"}
            assert data["total"] == 1
            result = data["results"][0]
            assert result["id"] == "evt_002"
            assert result["type"] == "event"
            assert result["url"] == "/events/evt_002"
            assert 0.0 <= result["relevanceScore"] <= 1.0
            assert data["facets"]["types"] == {"event": 1}
            assert data["facets"]["dateRanges"]

    async def test_mixed_provider_styles(self, event_records, blog_records):
        providers = {
            "event": InMemoryRecordProvider(event_records),
            "blog": AsyncRecordProvider(blog_records),
            "volunteer": FailingProvider(),
        }

        async with FederatedSearchService.create(providers, log_level="WARNING", max_workers=1) as service:
            response = await service.search_text("workshop", fuzzy_threshold=0.0)

        assert {r.id for r in response.results} == {"evt_001", "blog_001"}

    async def test_unknown_sort_propagates(self, providers):
        async with FederatedSearchService.create(providers, log_level="WARNING") as service:
            with pytest.raises(UnsupportedOptionError):
                await service.search_text("climate", sort_by="popularity")

    async def test_empty_query(self, providers):
        async with FederatedSearchService.create(providers, log_level="WARNING") as service:
            response = await service.search(SearchOptions(query=""))

        assert response.to_dict()["total"] == 0

    async def test_not_initialized(self, providers):
        service = FederatedSearchService(providers, log_level="WARNING")

        with pytest.raises(FederatedSearchError, match="not initialized"):
            await service.search_text("climate")

        health = await service.health_check()
        assert health['status'] == 'not_initialized'
        await service.close()

    async def test_unknown_provider_type(self):
        with pytest.raises(ConfigurationError):
            FederatedSearchService({"spaceship": InMemoryRecordProvider([])}, log_level="WARNING")

    async def test_stats_and_health(self, providers):
        async with FederatedSearchService.create(providers, log_level="WARNING") as service:
            await service.search_text("climate")

            stats = await service.get_stats()
            health = await service.health_check()

        assert stats['service']['initialized'] is True
        assert stats['engine']['total_searches'] == 1
        assert health['status'] == 'healthy'

    async def test_default_types_setting(self, providers):
        async with FederatedSearchService.create(
            providers,
            log_level="WARNING",
            default_types=["event"]
        ) as service:
            response = await service.search_text("climate")

        assert set(response.facets.types) == {"event"}

"""Pytest configuration and shared fixtures."""

import pytest
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

from federated_search.config import Settings
from federated_search.core.adapters import build_registry
from federated_search.core.engine import FederatedSearchEngine
from federated_search.core.providers import InMemoryRecordProvider
from federated_search.models.entity import EntityType


class FailingProvider:
    """Record provider whose backend is down."""

    def fetch(self, limit: int, filters=None):
        raise ConnectionError("database unavailable")


class AsyncRecordProvider:
    """Coroutine-based provider, as an async database driver would expose."""

    def __init__(self, records: List[Dict[str, Any]]):
        self.records = records
        self.calls = []

    async def fetch(self, limit: int, filters=None):
        self.calls.append((limit, filters))
        return [dict(r) for r in self.records[:limit]]


@pytest.fixture
def presentation_records() -> List[Dict[str, Any]]:
    """Presentations joined with their school and team."""
    return [
        {
            "id": "pres_001",
            "date": "2024-03-01",
            "status": "completed",
            "grade_level": "5th",
            "notes": "Climate change and recycling talk",
            "schools": {"name": "Lincoln Elementary", "city": "Austin", "state": "TX"},
            "teams": {"name": "Green Team"},
        },
        {
            "id": "pres_002",
            "date": "2024-04-10",
            "status": "scheduled",
            "grade_level": "7th",
            "notes": "Ocean pollution workshop",
            "schools": {"name": "Roosevelt Middle School", "city": "Dallas", "state": "TX"},
            "teams": {"name": "Blue Team"},
        },
        {
            "id": "pres_003",
            "date": "2024-02-15",
            "status": "completed",
            "grade_level": "3rd",
            "notes": "Composting basics",
            "schools": {"name": "Jefferson School", "city": "Houston", "state": "TX"},
            "teams": {"name": "Green Team"},
        },
    ]


@pytest.fixture
def volunteer_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "vol_001",
            "name": "Alice Johnson",
            "email": "alice@example.org",
            "bio": "Loves teaching climate science to kids",
            "status": "active",
            "role": "volunteer",
            "teams": {"name": "Green Team"},
        },
        {
            "id": "vol_002",
            "name": "Bob Admin",
            "email": "bob@example.org",
            "bio": "Climate program administrator",
            "status": "active",
            "role": "admin",
        },
    ]


@pytest.fixture
def event_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "evt_001",
            "title": "Climate Change Workshop",
            "description": "Hands-on lessons for teachers",
            "date": "2024-06-01",
            "type": "workshop",
            "location": "Austin",
        },
        {
            "id": "evt_002",
            "title": "Ocean Cleanup Event",
            "description": "Beach cleanup with local families",
            "date": "2024-05-20",
            "type": "outreach",
            "location": "Galveston",
        },
    ]


@pytest.fixture
def faq_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "faq_001",
            "question": "How do I become a volunteer?",
            "answer": "Fill out the volunteer application form.",
            "category": "volunteering",
            "is_published": True,
        },
        {
            "id": "faq_002",
            "question": "Draft volunteer question",
            "answer": "Not ready yet.",
            "category": "volunteering",
            "is_published": False,
        },
    ]


@pytest.fixture
def blog_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "blog_001",
            "title": "Our Climate Workshop Recap",
            "content": "Last week our interns ran a climate workshop for forty students.",
            "author_name": "Dana Lee",
            "published_at": "2024-05-01T10:00:00Z",
            "tags": ["climate", "events"],
        },
    ]


@pytest.fixture
def providers(
    presentation_records,
    volunteer_records,
    event_records,
    faq_records,
    blog_records
) -> Dict[EntityType, InMemoryRecordProvider]:
    """In-memory providers for a subset of the entity types."""
    return {
        EntityType.PRESENTATION: InMemoryRecordProvider(presentation_records, order_by="date"),
        EntityType.VOLUNTEER: InMemoryRecordProvider(volunteer_records),
        EntityType.EVENT: InMemoryRecordProvider(event_records, order_by="date"),
        EntityType.FAQ: InMemoryRecordProvider(faq_records),
        EntityType.BLOG: InMemoryRecordProvider(blog_records, order_by="published_at"),
    }


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment running the tests."""
    return Settings(log_level="WARNING", max_workers=2)


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
async def engine(providers, settings):
    """Create an engine over the in-memory providers."""
    pool = ThreadPoolExecutor(max_workers=settings.max_workers)
    registry = build_registry(
        providers,
        matcher_config=settings.matcher_config(),
        candidate_limit=settings.candidate_limit,
        executor=pool
    )
    engine = FederatedSearchEngine(registry, settings=settings, executor=pool)
    yield engine
    await engine.close()

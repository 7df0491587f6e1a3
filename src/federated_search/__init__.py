"""
Federated Search Engine

Fans one free-text query out to every searchable entity type (presentations,
volunteers, schools, events, FAQs, blog posts and more), matches each type
with a typo-tolerant weighted matcher and merges the answers into a single
filtered, sorted, faceted and paginated response.
"""

from .core import (
    FederatedSearchEngine,
    FuzzyMatcher,
    MatcherConfig,
    InMemoryRecordProvider,
    RecordProvider,
    FederatedSearchError,
    SearchError,
    UnsupportedOptionError,
    ProviderError,
    ValidationError,
    ConfigurationError
)
from .models.entity import EntityType, SortOrder
from .models.query import SearchOptions, SearchRequest
from .models.result import SearchResult, SearchFacets, SearchResponse
from .config import Settings, get_settings, load_settings
from .api.service import FederatedSearchService

__version__ = "1.0.0"

__all__ = [
    "FederatedSearchService",
    "FederatedSearchEngine",
    "FuzzyMatcher",
    "MatcherConfig",
    "InMemoryRecordProvider",
    "RecordProvider",
    "EntityType",
    "SortOrder",
    "SearchOptions",
    "SearchRequest",
    "SearchResult",
    "SearchFacets",
    "SearchResponse",
    "Settings",
    "get_settings",
    "load_settings",
    "FederatedSearchError",
    "SearchError",
    "UnsupportedOptionError",
    "ProviderError",
    "ValidationError",
    "ConfigurationError"
]

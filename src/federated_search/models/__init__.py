"""Data models for the federated search engine."""

from .entity import EntityType, SortOrder
from .record import SearchableRecord
from .query import SearchOptions, SearchRequest
from .result import SearchFacets, SearchResponse, SearchResult

__all__ = [
    "EntityType",
    "SortOrder",
    "SearchableRecord",
    "SearchOptions",
    "SearchRequest",
    "SearchFacets",
    "SearchResponse",
    "SearchResult",
]

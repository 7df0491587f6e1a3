"""Search request models."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entity import EntityType, SortOrder


@dataclass
class SearchOptions:
    """
    Federated search request.
    
    Values are taken as given; the engine coerces enum names, clamps
    pagination and threshold, and rejects unknown sort orders.
    
    Attributes:
        query: Free-text query; an empty string yields no results
        types: Entity types to search (None = configured default fan-out)
        filters: Equality filters over result metadata, ANDed together
        limit: Page size
        offset: Number of results to skip
        sort_by: relevance, date or title
        fuzzy_threshold: 0.0 = exact substring only, 1.0 = match almost anything
    """
    query: str
    types: Optional[List[Union[EntityType, str]]] = None
    filters: Optional[Dict[str, Any]] = None
    limit: int = 20
    offset: int = 0
    sort_by: Union[SortOrder, str] = SortOrder.RELEVANCE
    fuzzy_threshold: float = 0.3


class SearchRequest(BaseModel):
    """Pydantic model for request validation at API boundaries."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    query: str = Field("", description="Free-text search query")
    types: Optional[List[EntityType]] = Field(None, description="Entity types to search")
    filters: Dict[str, Any] = Field(default_factory=dict, description="Metadata equality filters")
    limit: int = Field(20, description="Page size")
    offset: int = Field(0, description="Results to skip")
    sort_by: SortOrder = Field(SortOrder.RELEVANCE, alias="sortBy", description="Result ordering")
    fuzzy_threshold: float = Field(0.3, alias="fuzzyThreshold", description="Match tolerance")
    
    @field_validator('query')
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Surrounding whitespace never contributes to a match."""
        return v.strip()
    
    @field_validator('fuzzy_threshold')
    @classmethod
    def clamp_threshold(cls, v: float) -> float:
        """Out-of-range tolerances are clamped, as the engine does."""
        return min(max(v, 0.0), 1.0)
    
    def to_options(self) -> SearchOptions:
        """Convert to SearchOptions dataclass."""
        return SearchOptions(
            query=self.query,
            types=list(self.types) if self.types else None,
            filters=dict(self.filters) or None,
            limit=self.limit,
            offset=self.offset,
            sort_by=self.sort_by,
            fuzzy_threshold=self.fuzzy_threshold
        )

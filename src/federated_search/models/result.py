"""Search result, facet and response models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .entity import EntityType


@dataclass
class SearchResult:
    """
    Single federated search hit.
    
    Attributes:
        id: Record identifier within its entity type
        type: Entity kind the record belongs to
        title: Display title
        description: Short description
        url: Caller-navigable path to the record
        relevance_score: 0.0-1.0, higher is better; comparable within one query only
        metadata: Type-specific projection (dates, status, names)
        highlights: Up to three text snippets around matched terms
    """
    id: str
    type: EntityType
    title: str
    description: str
    url: str
    relevance_score: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    highlights: List[str] = field(default_factory=list)
    
    def __post_init__(self) -> None:
        """Validate search result."""
        if not 0.0 <= self.relevance_score <= 1.0:
            raise ValueError("Relevance score must be between 0.0 and 1.0")
        if len(self.highlights) > 3:
            raise ValueError("A result carries at most 3 highlights")
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "relevanceScore": round(self.relevance_score, 4),
            "metadata": self.metadata,
            "highlights": self.highlights
        }


@dataclass
class SearchFacets:
    """Frequency tables over the complete filtered result set."""
    types: Dict[str, int] = field(default_factory=dict)
    categories: Dict[str, int] = field(default_factory=dict)
    tags: Dict[str, int] = field(default_factory=dict)
    date_ranges: Dict[str, int] = field(default_factory=dict)
    
    def is_empty(self) -> bool:
        return not (self.types or self.categories or self.tags or self.date_ranges)
    
    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            "types": dict(self.types),
            "categories": dict(self.categories),
            "tags": dict(self.tags),
            "dateRanges": dict(self.date_ranges)
        }


@dataclass
class SearchResponse:
    """
    One page of federated results.
    
    Attributes:
        results: The requested page
        facets: Facets over the full filtered set, not just this page
        total: Filtered result count before pagination
        query_time: Elapsed wall time in milliseconds
    """
    results: List[SearchResult]
    facets: SearchFacets
    total: int
    query_time: float
    
    @classmethod
    def empty(cls, query_time: float = 0.0) -> 'SearchResponse':
        return cls(results=[], facets=SearchFacets(), total=0, query_time=query_time)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "facets": self.facets.to_dict(),
            "total": self.total,
            "queryTime": round(self.query_time, 2)
        }

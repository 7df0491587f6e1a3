"""Searchable record model shared by the normalizers and the matcher."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .entity import EntityType


@dataclass
class SearchableRecord:
    """
    Common projection of a raw, type-specific record.
    
    Built fresh for every query and discarded with the response.
    
    Attributes:
        id: Identifier, unique within its entity type
        entity_type: Kind of entity the record was projected from
        title: Primary matched field
        description: Secondary matched field
        content: Flattened full-text blob of the raw record
        tags: Short labels, matched element by element
        extra: The raw record, carried through for metadata projection
    """
    id: str
    entity_type: EntityType
    title: str
    description: str = ""
    content: str = ""
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    
    def __post_init__(self) -> None:
        """Validate record after initialization."""
        if not self.title or not self.title.strip():
            raise ValueError("Searchable record title cannot be empty")
    
    def field_values(self, name: str) -> List[str]:
        """Return the matchable values of a field; tags yield one value per tag."""
        if name == "tags":
            return [tag for tag in self.tags if tag]
        value = getattr(self, name, "")
        return [value] if value else []

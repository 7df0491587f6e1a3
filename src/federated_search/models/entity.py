"""Entity type and sort order enumerations."""

from enum import Enum


class EntityType(str, Enum):
    """Searchable entity kinds. Closed set: each member needs its own adapter."""
    PRESENTATION = "presentation"
    VOLUNTEER = "volunteer"
    TEACHER = "teacher"
    SCHOOL = "school"
    EVENT = "event"
    FAQ = "faq"
    BLOG = "blog"
    RESOURCE = "resource"
    TEAM = "team"
    
    @property
    def label(self) -> str:
        """Human readable name, used when a title has to be synthesized."""
        if self is EntityType.FAQ:
            return "FAQ"
        return self.value.capitalize()


class SortOrder(str, Enum):
    """Supported orderings of the merged result list."""
    RELEVANCE = "relevance"
    DATE = "date"
    TITLE = "title"

"""Per-type search adapters and the registry the orchestrator iterates."""

import asyncio
import inspect
import logging
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Type, Union

from ..models.entity import EntityType
from ..models.record import SearchableRecord
from ..models.result import SearchResult
from ..utils.logging_config import StructuredLogger
from .contracts import MatchStrategy, RawRecord, RecordProvider
from .exceptions import ProviderError
from .highlights import HighlightExtractor
from .matcher import FuzzyMatcher, MatcherConfig, RecordMatch
from .normalizers import normalize

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_LIMIT = 100

MatcherFactory = Callable[[MatcherConfig], MatchStrategy]


class SearchAdapter:
    """
    Searches one entity type.

    Fetches a bounded candidate set from the type's record provider,
    normalizes it, runs the matcher and maps matches to SearchResults.
    Subclasses declare the URL template, the provider pre-filter, the
    metadata projection and which metadata keys map 1:1 onto raw fields
    (those filters are pushed down to the provider).
    """

    entity_type: EntityType
    url_template: str = ""
    provider_filter: Dict[str, Any] = {}
    pushdown_fields: Dict[str, str] = {}

    def __init__(
        self,
        provider: RecordProvider,
        matcher_config: Optional[MatcherConfig] = None,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        executor: Optional[Executor] = None,
        matcher_factory: MatcherFactory = FuzzyMatcher,
        highlighter: Optional[HighlightExtractor] = None
    ):
        """
        Initialize adapter.

        Args:
            provider: Source of raw records for this type
            matcher_config: Matching configuration; the per-query threshold
                overrides its threshold
            candidate_limit: Hard cap on records handed to the matcher
            executor: Thread pool for blocking providers (loop default if None)
            matcher_factory: Builds the match strategy from a config
            highlighter: Snippet extractor
        """
        if candidate_limit < 1:
            raise ValueError("Candidate limit must be positive")

        self.provider = provider
        self.matcher_config = matcher_config or MatcherConfig()
        self.candidate_limit = candidate_limit
        self.matcher_factory = matcher_factory
        self.highlighter = highlighter or HighlightExtractor()
        self._executor = executor
        self._log = StructuredLogger(__name__).with_context(entity_type=self.entity_type.value)

    async def search(
        self,
        query: str,
        filters: Optional[Dict[str, Any]] = None,
        threshold: float = 0.3
    ) -> List[SearchResult]:
        """
        Search this entity type.

        Never raises: a failing provider contributes no results and is
        logged, so one broken type cannot abort a federated search.

        Args:
            query: Free-text query
            filters: Caller metadata filters; those this adapter can map to
                raw fields narrow the provider fetch
            threshold: Fuzzy threshold for this query

        Returns:
            Results in matcher order
        """
        try:
            rows = await self.fetch_candidates(filters)
        except Exception as e:
            self._log.error(f"Provider fetch failed: {str(e)}")
            return []

        records = [self.normalize(row) for row in rows]

        try:
            matcher = self.matcher_factory(self.matcher_config.with_threshold(threshold))
            results = [self.to_result(match, query) for match in matcher.search(records, query)]
        except Exception as e:
            self._log.error(f"Matching failed: {str(e)}", exc_info=True)
            return []

        self._log.debug(f"{len(results)} of {len(records)} candidates matched")
        return results

    async def fetch_candidates(self, filters: Optional[Dict[str, Any]] = None) -> List[RawRecord]:
        """
        Fetch at most `candidate_limit` raw records from the provider.

        Raises:
            ProviderError: If the provider signals failure or returns
                something other than a sequence of records
        """
        provider_filters = self.provider_filters(filters)
        fetch = self.provider.fetch

        if inspect.iscoroutinefunction(fetch):
            rows = await fetch(self.candidate_limit, provider_filters)
        else:
            loop = asyncio.get_running_loop()
            rows = await loop.run_in_executor(
                self._executor, fetch, self.candidate_limit, provider_filters
            )
            if inspect.isawaitable(rows):
                rows = await rows

        if rows is None:
            return []
        if isinstance(rows, Exception):
            raise ProviderError(f"Provider for {self.entity_type.value} failed: {str(rows)}") from rows
        if isinstance(rows, (str, bytes, Mapping)) or not hasattr(rows, "__iter__"):
            raise ProviderError(f"Provider for {self.entity_type.value} returned {type(rows).__name__}")

        # The cap is a ceiling, even for providers that ignore `limit`
        return list(rows)[:self.candidate_limit]

    def provider_filters(self, filters: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Merge the static pre-filter with caller filters this type can push down."""
        merged = dict(self.provider_filter)
        for key, value in (filters or {}).items():
            raw_key = self.pushdown_fields.get(key)
            if raw_key is not None:
                merged[raw_key] = value
        return merged or None

    def normalize(self, raw: RawRecord) -> SearchableRecord:
        return normalize(raw, self.entity_type)

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Curated, type-specific subset of the raw record."""
        raise NotImplementedError

    def build_url(self, record: SearchableRecord) -> str:
        return self.url_template.format(id=record.id)

    def to_result(self, match: RecordMatch, query: str) -> SearchResult:
        """Map a matcher hit to a SearchResult."""
        record = match.record
        metadata = {
            key: value
            for key, value in self.project_metadata(record.extra).items()
            if value is not None
        }
        return SearchResult(
            id=record.id,
            type=self.entity_type,
            title=record.title,
            description=record.description,
            url=self.build_url(record),
            relevance_score=match.score,
            metadata=metadata,
            highlights=self.highlighter.extract(match.matches, query)
        )


def _related(raw: Mapping[str, Any], key: str, field: str = "name") -> Any:
    value = raw.get(key)
    return value.get(field) if isinstance(value, Mapping) else None


class PresentationAdapter(SearchAdapter):
    entity_type = EntityType.PRESENTATION
    url_template = "/dashboard/founder/presentations/{id}"
    pushdown_fields = {"status": "status", "date": "date"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "date": raw.get("date"),
            "school": _related(raw, "schools"),
            "team": _related(raw, "teams"),
            "status": raw.get("status"),
        }


class VolunteerAdapter(SearchAdapter):
    entity_type = EntityType.VOLUNTEER
    url_template = "/dashboard/founder/volunteers/{id}"
    provider_filter = {"role": "volunteer"}
    pushdown_fields = {"status": "status", "email": "email"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "email": raw.get("email"),
            "status": raw.get("status"),
            "team": _related(raw, "teams"),
        }


class TeacherAdapter(SearchAdapter):
    entity_type = EntityType.TEACHER
    url_template = "/dashboard/founder/applications/{id}"
    pushdown_fields = {
        "school": "school_name",
        "email": "contact_email",
        "status": "status",
        "gradeLevel": "grade_level",
    }

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "school": raw.get("school_name"),
            "email": raw.get("contact_email"),
            "status": raw.get("status"),
            "gradeLevel": raw.get("grade_level"),
        }


class SchoolAdapter(SearchAdapter):
    entity_type = EntityType.SCHOOL
    url_template = "/schools/{id}"
    pushdown_fields = {"city": "city", "state": "state", "district": "district"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "city": raw.get("city"),
            "state": raw.get("state"),
            "district": raw.get("district"),
        }


class EventAdapter(SearchAdapter):
    entity_type = EntityType.EVENT
    url_template = "/events/{id}"
    pushdown_fields = {"date": "date", "type": "type", "location": "location"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "date": raw.get("date"),
            "type": raw.get("type"),
            "location": raw.get("location"),
        }


class FAQAdapter(SearchAdapter):
    entity_type = EntityType.FAQ
    url_template = "/faq#{id}"
    provider_filter = {"is_published": True}
    pushdown_fields = {"category": "category"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {"category": raw.get("category")}


class BlogAdapter(SearchAdapter):
    entity_type = EntityType.BLOG
    url_template = "/interns/blog/{id}"
    pushdown_fields = {"author": "author_name"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "author": raw.get("author_name"),
            "publishedAt": raw.get("published_at"),
            "date": raw.get("published_at"),
            "tags": raw.get("tags"),
        }


class ResourceAdapter(SearchAdapter):
    entity_type = EntityType.RESOURCE
    url_template = "/resources/{id}"
    pushdown_fields = {"category": "category", "audience": "audience"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "category": raw.get("category"),
            "audience": raw.get("audience"),
            "tags": raw.get("tags"),
        }


class TeamAdapter(SearchAdapter):
    entity_type = EntityType.TEAM
    url_template = "/dashboard/founder/volunteers/teams/{id}"
    pushdown_fields = {"status": "status", "location": "location", "memberCount": "member_count"}

    def project_metadata(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "status": raw.get("status"),
            "location": raw.get("location"),
            "memberCount": raw.get("member_count"),
        }


ADAPTER_CLASSES: Dict[EntityType, Type[SearchAdapter]] = {
    adapter.entity_type: adapter
    for adapter in (
        PresentationAdapter,
        VolunteerAdapter,
        TeacherAdapter,
        SchoolAdapter,
        EventAdapter,
        FAQAdapter,
        BlogAdapter,
        ResourceAdapter,
        TeamAdapter,
    )
}


class AdapterRegistry:
    """Mapping of entity type to its search adapter."""

    def __init__(self, adapters: Optional[List[SearchAdapter]] = None):
        self._adapters: Dict[EntityType, SearchAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    def register(self, adapter: SearchAdapter) -> None:
        """Add an adapter, replacing any adapter registered for the same type."""
        if adapter.entity_type in self._adapters:
            logger.info(f"Replacing adapter for {adapter.entity_type.value}")
        self._adapters[adapter.entity_type] = adapter

    def get(self, entity_type: EntityType) -> Optional[SearchAdapter]:
        return self._adapters.get(entity_type)

    def types(self) -> List[EntityType]:
        return list(self._adapters)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._adapters

    def __iter__(self) -> Iterator[SearchAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)


def build_registry(
    providers: Mapping[Union[EntityType, str], RecordProvider],
    matcher_config: Optional[MatcherConfig] = None,
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
    executor: Optional[Executor] = None
) -> AdapterRegistry:
    """
    Wire the built-in adapters to their record providers.

    Args:
        providers: Record provider per entity type (members or names)
        matcher_config: Shared matching configuration
        candidate_limit: Per-type candidate cap
        executor: Thread pool for blocking providers

    Returns:
        Registry with one adapter per provided type

    Raises:
        ValueError: If a key is not a known entity type
    """
    registry = AdapterRegistry()
    for key, provider in providers.items():
        entity_type = EntityType(key)
        adapter_class = ADAPTER_CLASSES[entity_type]
        registry.register(
            adapter_class(
                provider,
                matcher_config=matcher_config,
                candidate_limit=candidate_limit,
                executor=executor
            )
        )
    return registry

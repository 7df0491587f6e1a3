"""Federated search orchestrator."""

import asyncio
import logging
import time
from concurrent.futures import Executor
from typing import Any, Dict, List, Optional

from ..config import Settings, get_settings
from ..models.entity import EntityType, SortOrder
from ..models.query import SearchOptions
from ..models.result import SearchResponse, SearchResult
from ..utils.dates import parse_date
from ..utils.validators import validate_options
from .adapters import AdapterRegistry
from .exceptions import FederatedSearchError, SearchError, UnsupportedOptionError
from .facets import calculate_facets
from .suggestions import MIN_SUGGESTION_QUERY_LENGTH, collect_suggestions

logger = logging.getLogger(__name__)

_MISSING = object()


def apply_filters(results: List[SearchResult], filters: Dict[str, Any]) -> List[SearchResult]:
    """
    Keep results whose metadata equals every filter value.

    Filters are ANDed; a key absent from a result's metadata never matches.
    """
    return [
        result for result in results
        if all(result.metadata.get(key, _MISSING) == value for key, value in filters.items())
    ]


def _date_key(result: SearchResult):
    parsed = parse_date(result.metadata.get("date"))
    if parsed is None:
        return (1, 0.0)
    return (0, -parsed.timestamp())


def sort_results(results: List[SearchResult], sort_by: SortOrder) -> List[SearchResult]:
    """
    Order results; every ordering is stable so ties keep merge order.

    relevance: descending score. date: newest first, undated last.
    title: case-insensitive ascending.

    Raises:
        UnsupportedOptionError: For any other ordering
    """
    if sort_by is SortOrder.RELEVANCE:
        return sorted(results, key=lambda r: -r.relevance_score)
    if sort_by is SortOrder.DATE:
        return sorted(results, key=_date_key)
    if sort_by is SortOrder.TITLE:
        return sorted(results, key=lambda r: r.title.casefold())
    raise UnsupportedOptionError(f"Unrecognized sort option: {sort_by!r}")


class FederatedSearchEngine:
    """
    Fans a query out to every requested entity type and merges the answers.

    Per call: concurrent adapter searches, then a sequential
    merge -> filter -> sort -> facet -> paginate pipeline. Nothing is
    cached between calls.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        settings: Optional[Settings] = None,
        executor: Optional[Executor] = None
    ):
        """
        Initialize the engine.

        Args:
            registry: Adapters to fan out to
            settings: Engine settings (environment defaults if omitted)
            executor: Thread pool shared with blocking providers; shut down
                by close()
        """
        self.registry = registry
        self.settings = settings or get_settings()
        self.default_types: List[EntityType] = list(self.settings.default_types)
        self.trending_searches = tuple(self.settings.trending_searches)
        self._executor = executor

        self._stats = {
            'total_searches': 0,
            'avg_search_time': 0.0
        }

        logger.info(f"Federated search engine initialized with {len(registry)} entity types")

    async def search(self, options: SearchOptions) -> SearchResponse:
        """
        Run a federated search.

        Args:
            options: Query, type subset, filters, pagination and ordering

        Returns:
            One page of results plus facets and total over the full
            filtered set

        Raises:
            UnsupportedOptionError: If sort_by is not recognized
            ValidationError: If types or filters cannot be interpreted
            SearchError: If the pipeline fails unexpectedly
        """
        start_time = time.perf_counter()
        options = validate_options(options)

        if not options.query:
            return SearchResponse.empty(self._elapsed_ms(start_time))

        try:
            adapters = [self.registry.get(t) for t in self._resolve_types(options.types)]

            result_lists = await asyncio.gather(*(
                adapter.search(options.query, options.filters, options.fuzzy_threshold)
                for adapter in adapters
            ))
            results = [result for results in result_lists for result in results]

            if options.filters:
                results = apply_filters(results, options.filters)

            results = sort_results(results, options.sort_by)
            facets = calculate_facets(results)
            page = results[options.offset:options.offset + options.limit]

        except FederatedSearchError:
            raise
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search failed: {str(e)}") from e

        query_time = self._elapsed_ms(start_time)
        self._update_search_stats(query_time)

        logger.info(
            f"Search '{options.query[:50]}' across {len(adapters)} types: "
            f"{len(results)} results in {query_time:.1f}ms"
        )
        return SearchResponse(
            results=page,
            facets=facets,
            total=len(results),
            query_time=query_time
        )

    async def suggest(self, partial_query: str, limit: Optional[int] = None) -> List[str]:
        """
        Autocomplete titles for a partial query.

        Args:
            partial_query: What the user has typed so far
            limit: Maximum suggestions (configured default if omitted)

        Returns:
            Distinct matching titles in relevance order; empty for
            queries shorter than two characters
        """
        partial_query = (partial_query or "").strip()
        if len(partial_query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        limit = self.settings.suggestion_limit if limit is None else limit
        response = await self.search(
            SearchOptions(query=partial_query, limit=self.settings.suggestion_pool_size)
        )
        return collect_suggestions(response.results, partial_query, limit)

    def trending(self, limit: int = 10) -> List[str]:
        """Return the first `limit` configured trending searches."""
        return list(self.trending_searches[:max(0, limit)])

    def _resolve_types(self, requested: Optional[List[EntityType]]) -> List[EntityType]:
        # Default fan-out silently covers whatever is registered
        if requested is None:
            return [t for t in self.default_types if t in self.registry]

        resolved = []
        for entity_type in requested:
            if entity_type in self.registry:
                resolved.append(entity_type)
            else:
                logger.warning(f"No adapter registered for {entity_type.value}, skipping")
        return resolved

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    def _update_search_stats(self, search_time: float) -> None:
        self._stats['total_searches'] += 1

        total_searches = self._stats['total_searches']
        current_avg = self._stats['avg_search_time']
        self._stats['avg_search_time'] = (
            (current_avg * (total_searches - 1) + search_time) / total_searches
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        return {
            **self._stats,
            'registered_types': [t.value for t in self.registry.types()],
            'default_types': [t.value for t in self.default_types],
            'candidate_limit': self.settings.candidate_limit
        }

    async def health_check(self) -> Dict[str, Any]:
        """Report whether any entity type is searchable."""
        is_ready = len(self.registry) > 0
        return {
            'status': 'healthy' if is_ready else 'not_ready',
            'is_ready': is_ready,
            'stats': self.get_stats(),
            'timestamp': time.time()
        }

    async def close(self) -> None:
        """Release the provider thread pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        logger.info("Federated search engine closed")

"""High-level API service for federated search."""

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, Dict, List, Mapping, Optional, Union

from ..config import Settings, load_settings
from ..core.adapters import build_registry
from ..core.contracts import RecordProvider
from ..core.engine import FederatedSearchEngine
from ..core.exceptions import ConfigurationError, FederatedSearchError, SearchError
from ..models.entity import EntityType, SortOrder
from ..models.query import SearchOptions
from ..models.result import SearchResponse
from ..utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class FederatedSearchService:
    """
    High-level service interface for federated search.

    Wires record providers to the built-in adapters, owns the provider
    thread pool and exposes search, suggestions and trending searches
    with proper resource management and error handling.
    """

    def __init__(
        self,
        providers: Mapping[Union[EntityType, str], RecordProvider],
        settings: Optional[Settings] = None,
        **overrides
    ):
        """
        Initialize federated search service.

        Args:
            providers: Record provider per entity type
            settings: Engine settings (loaded from the environment if omitted)
            **overrides: Individual settings fields overriding the loaded ones

        Raises:
            ConfigurationError: If the settings or provider mapping are invalid
        """
        if settings is None:
            settings = load_settings(**overrides)
        elif overrides:
            settings = settings.model_copy(update=overrides)

        try:
            setup_logging(level=settings.log_level)
        except ValueError as e:
            raise ConfigurationError(f"Invalid logging configuration: {str(e)}") from e
        self.settings = settings

        executor = ThreadPoolExecutor(
            max_workers=settings.max_workers,
            thread_name_prefix="federated-search"
        )
        try:
            registry = build_registry(
                providers,
                matcher_config=settings.matcher_config(),
                candidate_limit=settings.candidate_limit,
                executor=executor
            )
        except (ValueError, ConfigurationError) as e:
            executor.shutdown(wait=False)
            raise ConfigurationError(f"Invalid provider configuration: {str(e)}") from e

        self.engine = FederatedSearchEngine(registry, settings=settings, executor=executor)

        self._initialized = False
        logger.info("Federated search service initialized")

    async def initialize(self) -> None:
        """Mark the service ready; warns when no type will be searched by default."""
        missing = [t.value for t in self.engine.default_types if t not in self.engine.registry]
        if missing:
            logger.warning(f"Default types without a provider: {', '.join(missing)}")

        self._initialized = True
        logger.info("Service initialization complete")

    async def search(self, options: SearchOptions) -> SearchResponse:
        """
        Run a federated search.

        Args:
            options: Search options

        Returns:
            Paginated response with facets

        Raises:
            UnsupportedOptionError: If the sort option is not recognized
            ValidationError: If types or filters are malformed
            SearchError: If the search fails
        """
        self._check_initialized()

        try:
            response = await self.engine.search(options)
            logger.debug(f"Search returned {len(response.results)} of {response.total} results")
            return response

        except FederatedSearchError:
            raise
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search failed: {str(e)}") from e

    async def search_text(
        self,
        query: str,
        types: Optional[List[Union[EntityType, str]]] = None,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        sort_by: Union[SortOrder, str] = SortOrder.RELEVANCE,
        fuzzy_threshold: Optional[float] = None
    ) -> SearchResponse:
        """
        Convenience method for simple text search.

        Args:
            query: Search text
            types: Optional entity type names
            filters: Optional metadata equality filters
            limit: Page size (configured default if omitted)
            offset: Results to skip
            sort_by: relevance, date or title
            fuzzy_threshold: Match tolerance (configured default if omitted)

        Returns:
            Paginated response with facets
        """
        options = SearchOptions(
            query=query,
            types=types,
            filters=filters,
            limit=self.settings.default_limit if limit is None else limit,
            offset=offset,
            sort_by=sort_by,
            fuzzy_threshold=(
                self.settings.fuzzy_threshold if fuzzy_threshold is None else fuzzy_threshold
            )
        )
        return await self.search(options)

    async def suggest(self, partial_query: str, limit: Optional[int] = None) -> List[str]:
        """Autocomplete titles for a partial query."""
        self._check_initialized()

        try:
            return await self.engine.suggest(partial_query, limit)

        except FederatedSearchError:
            raise
        except Exception as e:
            logger.error(f"Suggestions failed: {str(e)}")
            raise SearchError(f"Suggestions failed: {str(e)}") from e

    async def trending(self, limit: int = 10) -> List[str]:
        """Configured trending searches."""
        return self.engine.trending(limit)

    async def get_stats(self) -> Dict[str, Any]:
        """Get service and engine statistics."""
        self._check_initialized()

        return {
            'service': {
                'initialized': self._initialized,
                'max_workers': self.settings.max_workers
            },
            'engine': self.engine.get_stats()
        }

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check."""
        try:
            if not self._initialized:
                return {
                    'status': 'not_initialized',
                    'message': 'Service not initialized'
                }

            return await self.engine.health_check()

        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return {
                'status': 'error',
                'message': str(e)
            }

    def _check_initialized(self) -> None:
        """Check if service is properly initialized."""
        if not self._initialized:
            raise FederatedSearchError("Service not initialized. Call initialize() first.")

    async def close(self) -> None:
        """Clean up resources and close the service."""
        try:
            await self.engine.close()
            self._initialized = False
            logger.info("Service closed successfully")

        except Exception as e:
            logger.error(f"Error during service shutdown: {str(e)}")

    @classmethod
    @asynccontextmanager
    async def create(
        cls,
        providers: Mapping[Union[EntityType, str], RecordProvider],
        **kwargs
    ) -> AsyncContextManager['FederatedSearchService']:
        """
        Create and manage service lifecycle with context manager.

        Args:
            providers: Record provider per entity type
            **kwargs: Settings instance or individual settings fields

        Yields:
            Initialized federated search service
        """
        service = cls(providers, **kwargs)

        try:
            await service.initialize()
            yield service
        finally:
            await service.close()

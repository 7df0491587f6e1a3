"""
Contracts - Interfaces the engine depends on.

Record providers are supplied by the host application; match strategies
default to FuzzyMatcher but can be swapped for a precomputed index.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Dict, List, Optional, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from ..models.record import SearchableRecord
    from .matcher import RecordMatch

RawRecord = Dict[str, Any]


@runtime_checkable
class RecordProvider(Protocol):
    """
    Source of raw records for one entity type.
    
    `fetch` may be a coroutine function or a plain blocking function;
    blocking providers are run on the engine's thread pool.
    """

    def fetch(
        self,
        limit: int,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Union[List[RawRecord], Awaitable[List[RawRecord]]]:
        """Return up to `limit` raw records whose fields equal `filters`."""
        ...


@runtime_checkable
class MatchStrategy(Protocol):
    """Contract for approximate matching over an in-memory record list."""

    def search(
        self,
        records: List[SearchableRecord],
        query: str,
    ) -> List[RecordMatch]:
        """Return matches ordered by descending score, ties in input order."""
        ...

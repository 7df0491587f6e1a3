"""Service layer for federated search."""

from .service import FederatedSearchService

__all__ = ["FederatedSearchService"]

"""Core components for federated search."""

from .exceptions import (
    FederatedSearchError,
    SearchError,
    UnsupportedOptionError,
    ProviderError,
    ValidationError,
    ConfigurationError
)
from .contracts import MatchStrategy, RecordProvider
from .matcher import FuzzyMatcher, MatcherConfig
from .normalizers import normalize
from .providers import InMemoryRecordProvider
from .adapters import SearchAdapter, AdapterRegistry, build_registry
# Imported last: the engine pulls in config, which needs the modules above
from .engine import FederatedSearchEngine

__all__ = [
    "FederatedSearchEngine",
    "FuzzyMatcher",
    "MatcherConfig",
    "MatchStrategy",
    "RecordProvider",
    "InMemoryRecordProvider",
    "SearchAdapter",
    "AdapterRegistry",
    "build_registry",
    "normalize",
    "FederatedSearchError",
    "SearchError",
    "UnsupportedOptionError",
    "ProviderError",
    "ValidationError",
    "ConfigurationError"
]

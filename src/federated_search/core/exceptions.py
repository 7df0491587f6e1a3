"""Custom exceptions for the federated search engine."""


class FederatedSearchError(Exception):
    """Base exception for federated search operations."""
    pass


class SearchError(FederatedSearchError):
    """Exception raised when the search pipeline itself fails."""
    pass


class UnsupportedOptionError(SearchError):
    """Exception raised for an option value the orchestrator does not recognize."""
    pass


class ProviderError(FederatedSearchError):
    """Exception raised when a record provider fails or returns garbage."""
    pass


class ValidationError(FederatedSearchError):
    """Exception raised during input validation."""
    pass


class ConfigurationError(FederatedSearchError):
    """Exception raised for configuration issues."""
    pass

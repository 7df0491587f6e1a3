"""Utility modules for federated search."""

from .text_processing import TextProcessor
from .dates import parse_date, days_between
from .validators import validate_options, coerce_entity_types, coerce_sort_order
from .logging_config import setup_logging, StructuredLogger

__all__ = [
    "TextProcessor",
    "parse_date",
    "days_between",
    "validate_options",
    "coerce_entity_types",
    "coerce_sort_order",
    "setup_logging",
    "StructuredLogger",
]

"""Logging setup for the search service and its adapters."""

import logging
import sys
from typing import Any, Dict, Optional, TextIO

PACKAGE_LOGGER = "federated_search"

# Chatty at INFO while a search fans out across executor threads
QUIET_LOGGERS = ("asyncio", "concurrent.futures", "uvicorn.access")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COMPACT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure root and package logging for a search service.

    Args:
        level: Level name for the federated_search loggers
        format_string: Custom format string
        include_timestamp: Prefix records with asctime (ignored when
            format_string is given)
        stream: Output stream, stdout by default
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    if format_string is None:
        format_string = DEFAULT_FORMAT if include_timestamp else COMPACT_FORMAT

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        stream=stream or sys.stdout,
        force=True
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.getLogger(__name__).debug(f"Search logging at {level.upper()}")


class StructuredLogger:
    """
    Logger that appends bound key=value pairs to every message.

    Adapters bind their entity type so a contained provider failure can be
    traced to the collection it came from:

        >>> log = StructuredLogger(__name__).with_context(entity_type="event")
        >>> log.error("Provider fetch failed: timeout")
        # Provider fetch failed: timeout [entity_type=event]
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.context: Dict[str, Any] = dict(context or {})

    def with_context(self, **kwargs) -> 'StructuredLogger':
        """Return a new logger with extra context bound; this one is unchanged."""
        return StructuredLogger(self.logger.name, {**self.context, **kwargs})

    def _format_message(self, message: str) -> str:
        if not self.context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{message} [{pairs}]"

    def debug(self, message: str) -> None:
        self.logger.debug(self._format_message(message))

    def info(self, message: str) -> None:
        self.logger.info(self._format_message(message))

    def warning(self, message: str) -> None:
        self.logger.warning(self._format_message(message))

    def error(self, message: str, exc_info: bool = False) -> None:
        self.logger.error(self._format_message(message), exc_info=exc_info)

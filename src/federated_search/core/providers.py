"""Bundled record provider backed by an in-memory list."""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..utils.dates import parse_date

_MISSING = object()


class InMemoryRecordProvider:
    """
    Record provider over a fixed list of raw records.

    Useful for tests, demos and small static collections. Records are
    returned as shallow copies so callers cannot mutate the source list.

    Example:
        >>> provider = InMemoryRecordProvider(rows, order_by="created_at")
        >>> provider.fetch(100, {"status": "active"})
    """

    def __init__(self, records: Iterable[Dict[str, Any]], order_by: Optional[str] = None):
        """
        Initialize provider.

        Args:
            records: Raw records
            order_by: Key to order by, most recent / largest first; records
                without the key come last in their original order
        """
        self.records: List[Dict[str, Any]] = list(records)
        self.order_by = order_by

    def fetch(self, limit: int, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return up to `limit` records whose fields equal every filter value."""
        rows = self.records
        if filters:
            rows = [
                row for row in rows
                if all(row.get(key, _MISSING) == value for key, value in filters.items())
            ]
        if self.order_by:
            rows = self._ordered(rows)
        return [dict(row) for row in rows[:max(0, limit)]]

    def _ordered(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        present = [row for row in rows if row.get(self.order_by) is not None]
        missing = [row for row in rows if row.get(self.order_by) is None]
        present.sort(key=self._sort_key, reverse=True)
        return present + missing

    def _sort_key(self, row: Dict[str, Any]) -> Tuple[int, Any]:
        # Dates first, then numbers, then anything else compared as text
        value = row[self.order_by]
        parsed = parse_date(value)
        if parsed is not None:
            return 2, parsed.timestamp()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return 1, float(value)
        return 0, str(value)

"""Date coercion helpers for sorting and date-range faceting."""

from datetime import date, datetime, timezone
from typing import Any, Optional


def parse_date(value: Any) -> Optional[datetime]:
    """
    Coerce a metadata date value to an aware UTC datetime.
    
    Accepts datetime, date and ISO 8601 strings (a trailing 'Z' is
    understood). Naive values are taken to be UTC.
    
    Returns:
        Parsed datetime, or None when the value is missing or unparseable
    """
    if value is None or value == "":
        return None
    
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def days_between(earlier: datetime, now: Optional[datetime] = None) -> int:
    """Whole days elapsed from `earlier` to `now` (negative for future dates)."""
    now = now or datetime.now(timezone.utc)
    return (now - earlier).days

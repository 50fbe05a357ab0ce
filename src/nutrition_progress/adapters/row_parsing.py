"""Normalization of loosely typed Supabase rows."""

from datetime import UTC, date, datetime


def parse_optional_float(value: object) -> float | None:
    """Return value as a float, or None when missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def parse_float(value: object, default: float = 0.0) -> float:
    """Return value as a float; missing or non-numeric values become default."""
    parsed = parse_optional_float(value)
    return default if parsed is None else parsed


def parse_datetime(value: object) -> datetime:
    """Return an aware UTC datetime from an ISO string or datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_date(value: object) -> date:
    """Return a date from an ISO date, ISO timestamp or date object."""
    if isinstance(value, datetime):
        return parse_datetime(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        if len(value) == len("YYYY-MM-DD"):
            return date.fromisoformat(value)
        return parse_datetime(value).date()
    raise ValueError(f"Invalid date: {value!r}")

"""Jinja2 filters registered on every Jinja2 evaluator.

Filters keep presentation of dates and missing values consistent across
templates without each template reimplementing them.
"""

from datetime import UTC, datetime
from typing import Any

from jinja2 import Undefined

PLACEHOLDER = "N/A"


def format_datetime(dt: datetime | str | None, fmt: str = "%Y-%m-%d %H:%M:%S UTC") -> str:
    """Format datetime for display.

    Naive datetimes are treated as UTC. ISO strings are parsed first;
    unparseable strings are returned unchanged.

    Args:
        dt: Datetime object or ISO string
        fmt: strftime format

    Returns:
        Formatted date string

    Examples:
        >>> format_datetime(datetime(2024, 1, 15, 12, 0, 0))
        '2024-01-15 12:00:00 UTC'
        >>> format_datetime(None)
        'N/A'
    """
    if dt is None:
        return PLACEHOLDER

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    # Ensure UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.strftime(fmt)


def is_empty(value: Any) -> bool:
    """Check if a value is effectively empty.

    Args:
        value: Value to check

    Returns:
        True for None, undefined variables, empty collections,
        whitespace-only strings and "N/A"
    """
    if value is None or isinstance(value, Undefined):
        return True

    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped.upper() == PLACEHOLDER

    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0

    return False


def or_placeholder(value: Any, placeholder: str = PLACEHOLDER) -> Any:
    """Return the value, or a placeholder if it is empty."""
    if is_empty(value):
        return placeholder
    return value


DEFAULT_FILTERS = {
    "format_datetime": format_datetime,
    "or_na": or_placeholder,
}

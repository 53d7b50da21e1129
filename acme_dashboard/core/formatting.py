"""Display Formatting — locale-style rendering of stored values."""

from datetime import date

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_date_to_local(value: date) -> str:
    """Render a date the way en-US short dates read, e.g. 'Oct 16, 2026'."""
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"

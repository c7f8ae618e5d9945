"""Wall-clock helpers.

Every "now" used by the services comes from ``utc_now`` so expiry and
due-date logic can be exercised in tests by patching a single function.
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_date_string(value: date) -> str:
    """Render a date the way task due dates are stored (YYYY-MM-DD)."""
    return value.isoformat()

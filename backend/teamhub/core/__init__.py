from datetime import datetime, timezone
from typing import Optional


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware (UTC).

    MongoDB hands datetimes back naive (always UTC, no tzinfo). Invite
    expiry compares stored values against ``utc_now()``, so both sides
    have to be aware before they can be compared.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt

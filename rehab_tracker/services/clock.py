"""Calendar helpers shared by the progress and compliance services."""

from datetime import date, datetime, timezone


def utc_today() -> date:
    """Current calendar date in UTC; progress days are bucketed on this."""
    return datetime.now(timezone.utc).date()

"""Clock used for every catalog, pending change and audit timestamp.

All DateTime columns are naive and hold UTC, so review times, audit ranges
and token expiry compare without timezone conversion.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

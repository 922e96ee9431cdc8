from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def next_timestamp(previous: str | None) -> str:
    """Return a fresh timestamp that sorts strictly after ``previous``."""
    now = datetime.now(timezone.utc)
    if previous:
        earliest = datetime.fromisoformat(previous) + timedelta(microseconds=1)
        if now < earliest:
            now = earliest
    return now.isoformat(timespec="microseconds")

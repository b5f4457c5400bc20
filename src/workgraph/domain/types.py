"""Shared type aliases and helpers used across the domain."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import TypeAlias

WorkItemId: TypeAlias = str
LinkId: TypeAlias = str
Duration: TypeAlias = float  # estimate units, days in the product UI

DEFAULT_DURATION: Duration = 1.0


def as_utc(dt: datetime) -> datetime:
    """Return *dt* as an aware UTC datetime.  Naive values are read as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

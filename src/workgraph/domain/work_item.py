"""WorkItem entity -- one node of the dependency graph.

A work item is whatever the workspace tracks as a unit of delivery
(feature, bug, concept, enhancement).  The engine only cares about five
attributes: its duration estimate, its execution status, its due date,
and the id/name pair used for reporting.

Mapped from the product's work_items table.  The category label is the
row's ``type`` column; it is carried for display and never interpreted.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from workgraph.domain.types import DEFAULT_DURATION, Duration, WorkItemId


class WorkItemStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    REVIEW = "review"
    COMPLETED = "completed"

    @property
    def is_active(self) -> bool:
        """Work is being done on the item right now."""
        return self in (WorkItemStatus.IN_PROGRESS, WorkItemStatus.REVIEW)


@dataclass(frozen=True, slots=True)
class WorkItem:
    """Immutable snapshot of a work item."""
    id: WorkItemId
    name: str = ""
    category: str = ""
    duration: Duration = DEFAULT_DURATION
    status: WorkItemStatus = WorkItemStatus.NOT_STARTED
    due: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("WorkItem id must be a non-empty string")
        if not math.isfinite(self.duration) or self.duration < 0:
            raise ValueError(
                f"WorkItem {self.id!r}: duration must be a finite number >= 0, "
                f"got {self.duration!r}"
            )

    @property
    def label(self) -> str:
        """Name for display, falling back to the id."""
        return self.name or self.id

    def is_completed(self) -> bool:
        return self.status is WorkItemStatus.COMPLETED

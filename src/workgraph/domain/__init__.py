"""Domain model for workgraph.

Re-exports all public types for convenient access:
    from workgraph.domain import WorkItem, Link, LinkKind, WorkItemStatus
"""
from workgraph.domain.link import BLOCKING_KINDS, Link, LinkKind
from workgraph.domain.types import (
    DEFAULT_DURATION,
    Duration,
    LinkId,
    WorkItemId,
    as_utc,
)
from workgraph.domain.work_item import WorkItem, WorkItemStatus

__all__ = [
    "BLOCKING_KINDS",
    "DEFAULT_DURATION",
    "Duration",
    "Link",
    "LinkId",
    "LinkKind",
    "WorkItem",
    "WorkItemId",
    "WorkItemStatus",
    "as_utc",
]

"""Link entity -- a typed, directed edge between two work items.

Only two kinds impose ordering.  ``dependency`` and ``blocks`` both mean
"target is gated on source" and are analyzed identically; they stay
separate labels so the UI can group them.  ``complements`` and
``relates`` are informational and only matter for orphan detection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from workgraph.domain.types import LinkId, WorkItemId


class LinkKind(Enum):
    DEPENDENCY = "dependency"
    BLOCKS = "blocks"
    COMPLEMENTS = "complements"
    RELATES = "relates"

    @property
    def is_blocking(self) -> bool:
        return self in BLOCKING_KINDS


BLOCKING_KINDS = frozenset({LinkKind.DEPENDENCY, LinkKind.BLOCKS})


@dataclass(frozen=True, slots=True)
class Link:
    """Immutable link between two work items."""
    id: LinkId
    source: WorkItemId
    target: WorkItemId
    kind: LinkKind
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_blocking(self) -> bool:
        return self.kind.is_blocking

    @property
    def key(self) -> tuple[WorkItemId, WorkItemId, LinkKind]:
        """Identity used for duplicate detection (the id is ignored)."""
        return (self.source, self.target, self.kind)

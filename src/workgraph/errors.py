"""Exceptions raised by the analysis engine.

Two families:

  GraphValidationError -- the caller handed us a malformed snapshot.
      Terminal for the whole call; no partial report is produced.
  TopologicalSortInvariantViolation -- an internal defect in the
      cycle-exclusion logic.  Valid input can never trigger it.

Cycles, bottlenecks and orphans are results, not errors, so there is
no exception type for them.
"""
from __future__ import annotations


class GraphValidationError(ValueError):
    """Base class for snapshot errors caused by caller input."""


class UnknownNodeReference(GraphValidationError):
    """A link points at a work item that is not in the snapshot."""

    def __init__(self, link_id: str, node_id: str) -> None:
        self.link_id = link_id
        self.node_id = node_id
        super().__init__(f"Link {link_id!r} references unknown work item {node_id!r}")


class SelfLoopEdge(GraphValidationError):
    """A link whose source and target are the same work item."""

    def __init__(self, link_id: str, node_id: str) -> None:
        self.link_id = link_id
        self.node_id = node_id
        super().__init__(f"Link {link_id!r} is a self-loop on {node_id!r}")


class DuplicateNodeId(GraphValidationError):
    """Two work items in one snapshot share an id."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Duplicate work item id {node_id!r}")


class SnapshotFormatError(GraphValidationError):
    """A persisted row could not be mapped to a WorkItem or Link."""


class TopologicalSortInvariantViolation(RuntimeError):
    """Kahn's algorithm left nodes unsorted outside the cycle exclusion set."""

    def __init__(self, remaining_nodes: list[str]) -> None:
        self.remaining_nodes = remaining_nodes
        super().__init__(
            f"Topological sort left {len(remaining_nodes)} node(s) unsorted "
            f"outside the cycle exclusion set"
        )

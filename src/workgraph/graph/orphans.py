"""Orphan detection: work items with no links of any kind."""
from __future__ import annotations

from workgraph.domain.types import WorkItemId
from workgraph.graph.builder import WorkGraph


def find_orphans(graph: WorkGraph) -> list[WorkItemId]:
    """Ids of items with zero incident links, ascending."""
    return sorted(n for n in graph.node_ids() if graph.incident_link_count(n) == 0)

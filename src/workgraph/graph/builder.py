"""Assemble a validated, immutable WorkGraph from a snapshot.

This is the single validation boundary of the engine.  Everything
downstream assumes the invariants checked here:

  - work item ids are unique
  - every link endpoint names a work item in the snapshot
  - no link has source == target
  - no two links share (source, target, kind); the first one wins

Two adjacency graphs are built side by side.  The blocking graph holds
only dependency/blocks links and drives cycles, ordering, critical path
and bottlenecks.  The full graph holds every kind and is used for
orphan detection.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from workgraph.domain.link import Link
from workgraph.domain.types import WorkItemId
from workgraph.domain.work_item import WorkItem
from workgraph.errors import DuplicateNodeId, SelfLoopEdge, UnknownNodeReference
from workgraph.graph.adjacency import Graph


class WorkGraph:
    """Read-only view over one workspace snapshot.

    Instances are created by build_graph(); the adjacency graphs are
    frozen, so a WorkGraph may be analyzed from several threads at once.
    """

    __slots__ = ("_items", "_links", "_blocking", "_full", "_first_blocking")

    def __init__(
        self,
        items: dict[WorkItemId, WorkItem],
        links: tuple[Link, ...],
        blocking: Graph[WorkItemId],
        full: Graph[WorkItemId],
    ) -> None:
        self._items = items
        self._links = links
        self._first_blocking: dict[tuple[WorkItemId, WorkItemId], Link] = {}
        for link in links:
            if link.is_blocking:
                self._first_blocking.setdefault((link.source, link.target), link)
        self._blocking = blocking.freeze()
        self._full = full.freeze()

    # ---- items -----------------------------------------------------------

    def item(self, node_id: WorkItemId) -> WorkItem:
        return self._items[node_id]

    def node_ids(self) -> list[WorkItemId]:
        """All work item ids in snapshot order."""
        return list(self._items)

    def duration(self, node_id: WorkItemId) -> float:
        return self._items[node_id].duration

    # ---- links -----------------------------------------------------------

    @property
    def links(self) -> tuple[Link, ...]:
        """Deduplicated links in snapshot order."""
        return self._links

    def blocking_links(self) -> Iterator[Link]:
        return (link for link in self._links if link.is_blocking)

    def link_between(self, src: WorkItemId, dst: WorkItemId) -> Link | None:
        """First blocking link src -> dst, or None."""
        return self._first_blocking.get((src, dst))

    # ---- adjacency -------------------------------------------------------

    @property
    def blocking(self) -> Graph[WorkItemId]:
        return self._blocking

    def blocking_successors(self, node_id: WorkItemId) -> list[WorkItemId]:
        return self._blocking.successors(node_id)

    def blocking_predecessors(self, node_id: WorkItemId) -> list[WorkItemId]:
        return self._blocking.predecessors(node_id)

    def all_neighbors(self, node_id: WorkItemId) -> set[WorkItemId]:
        """Items linked to *node_id* by any kind, in either direction."""
        return self._full.neighbors(node_id)

    def incident_link_count(self, node_id: WorkItemId) -> int:
        return self._full.degree(node_id)

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"WorkGraph(items={len(self._items)}, links={len(self._links)}, "
            f"blocking_links={self._blocking.edge_count})"
        )


def build_graph(items: Iterable[WorkItem], links: Iterable[Link]) -> WorkGraph:
    """Validate *items* and *links* and return an immutable WorkGraph.

    Raises DuplicateNodeId, UnknownNodeReference or SelfLoopEdge on the
    first offending record.
    """
    by_id: dict[WorkItemId, WorkItem] = {}
    blocking: Graph[WorkItemId] = Graph()
    full: Graph[WorkItemId] = Graph()

    for item in items:
        if item.id in by_id:
            raise DuplicateNodeId(item.id)
        by_id[item.id] = item
        blocking.add_node(item.id)
        full.add_node(item.id)

    kept: list[Link] = []
    seen: set[tuple] = set()
    blocking_pairs: set[tuple[WorkItemId, WorkItemId]] = set()
    for link in links:
        for endpoint in (link.source, link.target):
            if endpoint not in by_id:
                raise UnknownNodeReference(link.id, endpoint)
        if link.source == link.target:
            raise SelfLoopEdge(link.id, link.source)
        if link.key in seen:
            continue
        seen.add(link.key)
        kept.append(link)
        full.add_edge(link.source, link.target)
        # dependency and blocks between the same pair collapse to one edge
        if link.is_blocking and (link.source, link.target) not in blocking_pairs:
            blocking_pairs.add((link.source, link.target))
            blocking.add_edge(link.source, link.target)

    return WorkGraph(by_id, tuple(kept), blocking, full)

"""Cycle detection over blocking links using DFS three-color marking.

The three colors:
  WHITE  -- node not yet visited
  GRAY   -- node is on the current DFS path
  BLACK  -- node fully explored (all descendants visited)

An edge into a GRAY node is a back edge and closes a cycle.  The cycle
is the slice of the current DFS path from that GRAY node to the top.

Unlike a "has a cycle?" check we do not stop at the first back edge:
every back edge yields one Cycle, and the scan restarts from every
still-WHITE node, so disjoint loops are all reported.  Every directed
cycle contains at least one back edge of any DFS, which means removing
the reported members always leaves an acyclic remainder.

The DFS keeps its own stack of (node, successor iterator) frames
instead of recursing, so a 10,000-deep dependency chain does not hit
the interpreter's recursion limit.  Roots and successors are visited in
ascending id order to keep the output reproducible.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from workgraph.domain.link import LinkKind
from workgraph.domain.types import LinkId, WorkItemId
from workgraph.graph.builder import WorkGraph

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(frozen=True, slots=True)
class SuggestedFix:
    """The link to change so a cycle stops being one."""
    link_id: LinkId
    source: WorkItemId
    target: WorkItemId
    source_name: str
    target_name: str
    reason: str


@dataclass(frozen=True, slots=True)
class Cycle:
    """A closed loop of blocking links.

    ``nodes`` is [v0, v1, ..., vk]; each consecutive pair is a blocking
    link and vk -> v0 closes the loop.  ``suggested_fix`` points at that
    vk -> v0 link, the natural candidate for removal.  ``names`` holds
    the display labels of ``nodes`` in the same order.
    """
    nodes: tuple[WorkItemId, ...]
    names: tuple[str, ...] = ()
    suggested_fix: SuggestedFix | None = None

    @property
    def closing_link(self) -> LinkId | None:
        return self.suggested_fix.link_id if self.suggested_fix else None

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes


def _suggest_fix(graph: WorkGraph, src: WorkItemId, dst: WorkItemId) -> SuggestedFix | None:
    link = graph.link_between(src, dst)
    if link is None:
        return None
    if link.kind is LinkKind.BLOCKS:
        reason = 'Change "blocks" to "relates" (informational only)'
    else:
        reason = "Remove the dependency that closes the loop"
    return SuggestedFix(
        link_id=link.id,
        source=src,
        target=dst,
        source_name=graph.item(src).label,
        target_name=graph.item(dst).label,
        reason=reason,
    )


def detect_cycles(graph: WorkGraph) -> list[Cycle]:
    """Return every back-edge cycle in the blocking subgraph.

    An empty list means the blocking subgraph is a DAG.
    """
    blocking = graph.blocking
    color: dict[WorkItemId, int] = {n: WHITE for n in blocking.nodes()}
    cycles: list[Cycle] = []

    for root in sorted(color):
        if color[root] != WHITE:
            continue

        path: list[WorkItemId] = [root]
        position: dict[WorkItemId, int] = {root: 0}
        stack: list[Iterator[WorkItemId]] = [iter(sorted(blocking.successors(root)))]
        color[root] = GRAY

        while stack:
            node = path[-1]
            succ = next(stack[-1], None)
            if succ is None:
                # all successors explored
                color[node] = BLACK
                stack.pop()
                path.pop()
                del position[node]
                continue
            if color[succ] == GRAY:
                members = tuple(path[position[succ]:])
                cycles.append(Cycle(
                    nodes=members,
                    names=tuple(graph.item(n).label for n in members),
                    suggested_fix=_suggest_fix(graph, node, succ),
                ))
            elif color[succ] == WHITE:
                color[succ] = GRAY
                position[succ] = len(path)
                path.append(succ)
                stack.append(iter(sorted(blocking.successors(succ))))

    return cycles


def cycle_members(cycles: Iterable[Cycle]) -> frozenset[WorkItemId]:
    """Union of all cycle members: the exclusion set for ordering."""
    members: set[WorkItemId] = set()
    for cycle in cycles:
        members.update(cycle.nodes)
    return frozenset(members)

"""Critical path analysis on the acyclic remainder.

The critical path is the longest duration-weighted chain of blocking
links.  Its total is the shortest possible delivery time for the
workspace if every item took exactly its estimate.

Algorithm (standard DAG longest path, O(V + E)):
  1.  Walk nodes in topological order.
  2.  For each node n, pull from its blocking predecessors:
        finish[n] = duration[n] + max(finish[p] for p in preds(n))
      or just duration[n] when n has no predecessors.  Remember which
      predecessor produced the max.
  3.  The endpoint is the node with the largest finish.
  4.  Walk the remembered predecessors back to a source.

Ties are resolved toward the lower id at both steps 2 and 3, so equal
length chains always come out the same way.  Predecessors that sit in
an excluded cycle are not in the order and are ignored.
"""
from __future__ import annotations

from dataclasses import dataclass

from workgraph.domain.types import WorkItemId
from workgraph.graph.builder import WorkGraph


@dataclass(frozen=True, slots=True)
class CriticalPathResult:
    """Result of critical path analysis."""
    path: tuple[WorkItemId, ...]
    total_duration: float

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.path

    def __len__(self) -> int:
        return len(self.path)


EMPTY_PATH = CriticalPathResult(path=(), total_duration=0.0)


def earliest_finish(
    graph: WorkGraph, order: list[WorkItemId]
) -> tuple[dict[WorkItemId, float], dict[WorkItemId, WorkItemId | None]]:
    """Forward pass: earliest finish per node and the predecessor it came from."""
    finish: dict[WorkItemId, float] = {}
    pred: dict[WorkItemId, WorkItemId | None] = {}

    for node in order:
        best_pred: WorkItemId | None = None
        best_start = 0.0
        for p in sorted(graph.blocking_predecessors(node)):
            if p not in finish:
                continue  # excluded cycle member
            if best_pred is None or finish[p] > best_start:
                best_pred = p
                best_start = finish[p]
        finish[node] = best_start + graph.duration(node)
        pred[node] = best_pred

    return finish, pred


def critical_path(graph: WorkGraph, order: list[WorkItemId]) -> CriticalPathResult:
    """Find the longest duration-weighted chain through *order*.

    *order* must be a topological order of the nodes to consider, as
    produced by topological_sort().  An empty order gives EMPTY_PATH.
    """
    if not order:
        return EMPTY_PATH

    finish, pred = earliest_finish(graph, order)

    best_node = min(finish, key=lambda n: (-finish[n], n))

    path: list[WorkItemId] = [best_node]
    cur = pred[best_node]
    while cur is not None:
        path.append(cur)
        cur = pred[cur]
    path.reverse()

    return CriticalPathResult(path=tuple(path), total_duration=finish[best_node])

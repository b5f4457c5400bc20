"""Topological sort via Kahn's algorithm over the acyclic remainder.

The remainder is the blocking subgraph induced by every work item that
is not a member of a detected cycle.  Links into or out of excluded
items are dropped with them, so an item downstream of a cycle is
still ordered, just without its cyclic prerequisites.

The algorithm:
  1.  Compute in-degree for every remaining node.
  2.  Seed a min-heap with all nodes whose in-degree is 0.
  3.  Pop the smallest id, append it to the result, decrement the
      in-degree of its successors.  Any successor that reaches 0
      enters the heap.
  4.  The result must contain every remaining node.

A plain FIFO queue gives *a* valid order; the heap gives the same
order every time for the same snapshot, which the report relies on.
"""
from __future__ import annotations

import heapq
import logging
from typing import AbstractSet

from workgraph.domain.types import WorkItemId
from workgraph.errors import TopologicalSortInvariantViolation
from workgraph.graph.builder import WorkGraph

log = logging.getLogger(__name__)


def topological_sort(
    graph: WorkGraph,
    excluded: AbstractSet[WorkItemId] = frozenset(),
) -> list[WorkItemId]:
    """Return remaining work items in dependency order (prerequisites first).

    Raises TopologicalSortInvariantViolation if the remainder still
    contains a cycle, which means *excluded* was computed wrongly.
    """
    keep = [n for n in graph.node_ids() if n not in excluded]
    sub = graph.blocking.induced_subgraph(frozenset(keep))

    in_deg: dict[WorkItemId, int] = {n: sub.in_degree(n) for n in sub.nodes()}
    ready: list[WorkItemId] = [n for n, deg in in_deg.items() if deg == 0]
    heapq.heapify(ready)

    result: list[WorkItemId] = []
    while ready:
        node = heapq.heappop(ready)
        result.append(node)
        for succ in sub.successors(node):
            in_deg[succ] -= 1
            if in_deg[succ] == 0:
                heapq.heappush(ready, succ)

    if len(result) != sub.node_count:
        placed = set(result)
        remaining = sorted(n for n in sub.nodes() if n not in placed)
        log.error(
            "topological sort left %d of %d node(s) unsorted with %d excluded: %s",
            len(remaining), sub.node_count, len(excluded), remaining[:10],
        )
        raise TopologicalSortInvariantViolation(remaining)

    return result

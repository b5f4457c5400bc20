"""Bottleneck analysis: how much downstream work does each item gate?

The blocking count of an item is the size of its transitive successor
set along blocking links.  On the acyclic remainder one reverse
topological pass computes every set:

    reachable(n) = union over successors s of ({s} | reachable(s))

Because successors come later in topological order, walking the order
backwards guarantees reachable(s) is ready before n needs it.

Cycle members are outside the order, and the accumulation above has
no valid order to follow there.  Their reachable sets come from a
plain BFS over the full blocking graph (cycle included) instead.  An
item upstream of a cycle therefore counts the members it gates and
everything beyond them.  Cycle members themselves are left out of the
result unless the caller opts in.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet

from workgraph.domain.types import WorkItemId
from workgraph.graph.builder import WorkGraph


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class SeverityThresholds:
    """Minimum blocking counts for the medium and high tiers.

    Any count of at least 1 is LOW.
    """
    medium: int = 2
    high: int = 5

    def __post_init__(self) -> None:
        if not (1 <= self.medium <= self.high):
            raise ValueError(
                "Severity thresholds must satisfy: 1 <= medium <= high, "
                f"got medium={self.medium}, high={self.high}"
            )

    def classify(self, count: int) -> Severity | None:
        """Severity for a blocking count, None when nothing is blocked."""
        if count >= self.high:
            return Severity.HIGH
        if count >= self.medium:
            return Severity.MEDIUM
        if count >= 1:
            return Severity.LOW
        return None


@dataclass(frozen=True, slots=True)
class Bottleneck:
    """One item that gates downstream work."""
    node_id: WorkItemId
    blocking_count: int       # transitively blocked items
    severity: Severity
    direct_dependents: int    # items blocked by a direct link
    name: str = ""


def reachable_set(graph: WorkGraph, start: WorkItemId) -> frozenset[WorkItemId]:
    """Blocking successors reachable from *start*, excluding *start* itself.

    Plain BFS over the full blocking graph, so it is valid inside cycles.
    """
    seen: set[WorkItemId] = {start}
    q: deque[WorkItemId] = deque([start])
    while q:
        node = q.popleft()
        for succ in graph.blocking_successors(node):
            if succ not in seen:
                seen.add(succ)
                q.append(succ)
    seen.discard(start)
    return frozenset(seen)


def bfs_reachable_count(graph: WorkGraph, start: WorkItemId) -> int:
    return len(reachable_set(graph, start))


def reachable_counts(
    graph: WorkGraph, order: list[WorkItemId]
) -> dict[WorkItemId, int]:
    """Transitive blocking-successor count for every node in *order*.

    A successor outside *order* is a cycle member; it is counted along
    with everything it reaches, taken from one cached BFS per member.
    """
    reach: dict[WorkItemId, frozenset[WorkItemId]] = {}
    cyclic_reach: dict[WorkItemId, frozenset[WorkItemId]] = {}
    for node in reversed(order):
        acc: set[WorkItemId] = set()
        for succ in graph.blocking_successors(node):
            acc.add(succ)
            if succ in reach:
                acc |= reach[succ]
            else:
                if succ not in cyclic_reach:
                    cyclic_reach[succ] = reachable_set(graph, succ)
                acc |= cyclic_reach[succ]
        reach[node] = frozenset(acc)
    return {n: len(s) for n, s in reach.items()}


def find_bottlenecks(
    graph: WorkGraph,
    order: list[WorkItemId],
    thresholds: SeverityThresholds | None = None,
    cyclic: AbstractSet[WorkItemId] = frozenset(),
) -> list[Bottleneck]:
    """Items with a nonzero blocking count, most severe first.

    *cyclic* lists cycle members to include via BFS; leave it empty to
    report the acyclic remainder only.  Sorted by count descending,
    then id ascending.
    """
    thresholds = thresholds or SeverityThresholds()
    counts = reachable_counts(graph, order)
    for node in cyclic:
        counts[node] = bfs_reachable_count(graph, node)

    result: list[Bottleneck] = []
    for node, count in counts.items():
        severity = thresholds.classify(count)
        if severity is None:
            continue
        result.append(Bottleneck(
            node_id=node,
            blocking_count=count,
            severity=severity,
            direct_dependents=graph.blocking.out_degree(node),
            name=graph.item(node).label,
        ))
    result.sort(key=lambda b: (-b.blocking_count, b.node_id))
    return result

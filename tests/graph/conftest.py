"""Shared fixtures for graph algorithm tests."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable

import pytest

from workgraph.domain.link import Link, LinkKind
from workgraph.domain.work_item import WorkItem, WorkItemStatus
from workgraph.graph.builder import WorkGraph, build_graph

NOW = datetime(2025, 6, 15, 14, 30, tzinfo=timezone.utc)

EdgeSpec = tuple  # (src, dst) or (src, dst, LinkKind)


def make_item(
    node_id: str,
    duration: float = 1.0,
    status: WorkItemStatus = WorkItemStatus.NOT_STARTED,
    due: datetime | None = None,
) -> WorkItem:
    return WorkItem(id=node_id, name=f"Item {node_id}", duration=duration,
                    status=status, due=due)


def make_link(
    src: str,
    dst: str,
    kind: LinkKind = LinkKind.DEPENDENCY,
    link_id: str | None = None,
) -> Link:
    return Link(
        id=link_id or f"{src}->{dst}:{kind.value}",
        source=src,
        target=dst,
        kind=kind,
        created_at=NOW,
    )


def graph_from(
    edges: Iterable[EdgeSpec],
    nodes: Iterable[str] = (),
    durations: dict[str, float] | None = None,
) -> WorkGraph:
    """Build a WorkGraph from edge tuples; endpoints become items."""
    edges = list(edges)
    durations = durations or {}
    ids: dict[str, None] = dict.fromkeys(nodes)
    for spec in edges:
        ids.update(dict.fromkeys(spec[:2]))
    items = [make_item(n, durations.get(n, 1.0)) for n in ids]
    links = [make_link(*spec) for spec in edges]
    return build_graph(items, links)


@pytest.fixture
def build() -> Callable[..., WorkGraph]:
    return graph_from


@pytest.fixture
def empty_graph() -> WorkGraph:
    return build_graph([], [])


@pytest.fixture
def linear_graph() -> WorkGraph:
    """A -> B -> C -> D"""
    return graph_from([("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def diamond_graph() -> WorkGraph:
    """
    A -> B -> D
    A -> C -> D
    """
    return graph_from([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def cycle_graph() -> WorkGraph:
    """A -> B -> C -> A, all blocks."""
    return graph_from([
        ("A", "B", LinkKind.BLOCKS),
        ("B", "C", LinkKind.BLOCKS),
        ("C", "A", LinkKind.BLOCKS),
    ])


@pytest.fixture
def wide_graph() -> WorkGraph:
    """root with 10 children, each with 2 grandchildren (all leaves)."""
    edges = []
    for i in range(10):
        child = f"L1_{i}"
        edges.append(("root", child))
        for j in range(2):
            edges.append((child, f"L2_{i}_{j}"))
    return graph_from(edges)

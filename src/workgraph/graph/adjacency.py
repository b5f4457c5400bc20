"""Generic directed graph using adjacency lists.

Nodes are any hashable type T.  Internally it is a dict[T, list[T]]
mapping each node to its successors, plus a reverse map for
predecessors so in-degree queries are O(1) instead of a full scan.

workgraph keeps two of these per snapshot: one restricted to blocking
links (dependency/blocks) and one over every link kind.  Both are
frozen once the builder is done with them, after which any mutation
raises.  Callers that need a private, mutable graph derive one with
``induced_subgraph``.
"""
from __future__ import annotations

from typing import Collection, Generic, Hashable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


class FrozenGraphError(RuntimeError):
    """Raised on any attempt to mutate a frozen Graph."""


class Graph(Generic[T]):
    """Directed graph backed by adjacency lists.

    Maintains both forward (successors) and reverse (predecessors)
    adjacency maps.  Parallel edges are stored once per ``add_edge``
    call; the builder deduplicates before it gets here.
    """

    __slots__ = ("_fwd", "_rev", "_frozen")

    def __init__(self) -> None:
        self._fwd: dict[T, list[T]] = {}
        self._rev: dict[T, list[T]] = {}
        self._frozen = False

    # ---- mutation --------------------------------------------------------

    def add_node(self, node: T) -> None:
        """Add *node* if it does not already exist."""
        self._check_mutable()
        if node not in self._fwd:
            self._fwd[node] = []
            self._rev[node] = []

    def add_edge(self, src: T, dst: T) -> None:
        """Add a directed edge src -> dst, creating missing nodes."""
        self._check_mutable()
        self.add_node(src)
        self.add_node(dst)
        self._fwd[src].append(dst)
        self._rev[dst].append(src)

    def freeze(self) -> Graph[T]:
        """Make the graph read-only.  Returns self for chaining."""
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenGraphError("Graph is frozen; build a new one instead")

    # ---- derived graphs --------------------------------------------------

    def induced_subgraph(self, keep: Collection[T]) -> Graph[T]:
        """New mutable graph on the nodes in *keep* and the edges between them.

        Node insertion order follows this graph, not *keep*.
        """
        sub: Graph[T] = Graph()
        for node in self._fwd:
            if node in keep:
                sub.add_node(node)
        for src, dst in self.edges():
            if src in keep and dst in keep:
                sub.add_edge(src, dst)
        return sub

    # ---- queries ---------------------------------------------------------

    def has_edge(self, src: T, dst: T) -> bool:
        return src in self._fwd and dst in self._fwd[src]

    def successors(self, node: T) -> list[T]:
        """Direct successors (neighbors along outgoing edges)."""
        return list(self._fwd.get(node, []))

    def predecessors(self, node: T) -> list[T]:
        """Direct predecessors (nodes with an edge into *node*)."""
        return list(self._rev.get(node, []))

    def neighbors(self, node: T) -> set[T]:
        """Nodes adjacent to *node* in either direction."""
        return set(self._fwd.get(node, [])) | set(self._rev.get(node, []))

    def in_degree(self, node: T) -> int:
        return len(self._rev.get(node, []))

    def out_degree(self, node: T) -> int:
        return len(self._fwd.get(node, []))

    def degree(self, node: T) -> int:
        """Incident edge count, incoming plus outgoing."""
        return self.in_degree(node) + self.out_degree(node)

    def nodes(self) -> Iterator[T]:
        return iter(self._fwd)

    def edges(self) -> Iterator[tuple[T, T]]:
        for src, dsts in self._fwd.items():
            for dst in dsts:
                yield src, dst

    @property
    def node_count(self) -> int:
        return len(self._fwd)

    @property
    def edge_count(self) -> int:
        return sum(len(dsts) for dsts in self._fwd.values())

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, node: object) -> bool:
        return node in self._fwd

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"Graph(nodes={self.node_count}, edges={self.edge_count}{state})"

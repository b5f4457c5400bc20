"""Tests for explicit-stack DFS cycle detection."""
from __future__ import annotations

import random

from workgraph.domain.link import LinkKind
from workgraph.graph.builder import WorkGraph
from workgraph.graph.cycle_detector import Cycle, SuggestedFix, cycle_members, detect_cycles

from .conftest import graph_from


def _closes(graph: WorkGraph, cycle: Cycle) -> bool:
    """Every consecutive pair, plus last -> first, is a blocking edge."""
    nodes = list(cycle.nodes)
    pairs = zip(nodes, nodes[1:] + nodes[:1])
    return all(graph.blocking.has_edge(a, b) for a, b in pairs)


class TestCycleDetector:
    def test_no_cycle_empty(self, empty_graph: WorkGraph) -> None:
        assert detect_cycles(empty_graph) == []

    def test_no_cycle_linear(self, linear_graph: WorkGraph) -> None:
        assert detect_cycles(linear_graph) == []

    def test_no_cycle_diamond(self, diamond_graph: WorkGraph) -> None:
        assert detect_cycles(diamond_graph) == []

    def test_three_node_cycle(self, cycle_graph: WorkGraph) -> None:
        cycles = detect_cycles(cycle_graph)
        assert len(cycles) == 1
        cycle = cycles[0]
        assert len(cycle) == 3
        assert set(cycle.nodes) == {"A", "B", "C"}
        assert cycle.nodes == ("A", "B", "C")
        assert cycle.closing_link == "C->A:blocks"
        assert _closes(cycle_graph, cycle)

    def test_two_node_cycle(self) -> None:
        g = graph_from([("A", "B"), ("B", "A")])
        cycles = detect_cycles(g)
        assert [c.nodes for c in cycles] == [("A", "B")]

    def test_deep_cycle_behind_entry(self) -> None:
        """A -> B -> C -> D -> B (cycle of length 3)."""
        g = graph_from([("A", "B"), ("B", "C"), ("C", "D"), ("D", "B")])
        cycles = detect_cycles(g)
        assert len(cycles) == 1
        assert cycles[0].nodes == ("B", "C", "D")
        assert "A" not in cycles[0]

    def test_disjoint_cycles_all_reported(self) -> None:
        g = graph_from([
            ("A", "B"), ("B", "A"),
            ("C", "D"), ("D", "E"), ("E", "C"),
            ("X", "Y"),
        ])
        cycles = detect_cycles(g)
        assert [set(c.nodes) for c in cycles] == [{"A", "B"}, {"C", "D", "E"}]
        assert cycle_members(cycles) == frozenset("ABCDE")

    def test_overlapping_cycles_share_members(self) -> None:
        # A -> B -> A and B -> C -> B share B
        g = graph_from([("A", "B"), ("B", "A"), ("B", "C"), ("C", "B")])
        cycles = detect_cycles(g)
        assert len(cycles) == 2
        assert cycle_members(cycles) == frozenset("ABC")
        for cycle in cycles:
            assert _closes(g, cycle)

    def test_non_blocking_loops_ignored(self) -> None:
        g = graph_from([
            ("A", "B", LinkKind.RELATES),
            ("B", "A", LinkKind.COMPLEMENTS),
        ])
        assert detect_cycles(g) == []

    def test_mixed_blocking_kinds_form_cycle(self) -> None:
        g = graph_from([
            ("A", "B", LinkKind.DEPENDENCY),
            ("B", "A", LinkKind.BLOCKS),
        ])
        assert len(detect_cycles(g)) == 1

    def test_parallel_blocking_kinds_report_once(self) -> None:
        g = graph_from([
            ("A", "B", LinkKind.DEPENDENCY),
            ("B", "A", LinkKind.DEPENDENCY),
            ("B", "A", LinkKind.BLOCKS),
        ])
        cycles = detect_cycles(g)
        assert len(cycles) == 1
        assert cycles[0].closing_link == "B->A:dependency"

    def test_names_and_fix_for_blocks_link(self, cycle_graph: WorkGraph) -> None:
        (cycle,) = detect_cycles(cycle_graph)
        assert cycle.names == ("Item A", "Item B", "Item C")
        assert cycle.suggested_fix == SuggestedFix(
            link_id="C->A:blocks",
            source="C",
            target="A",
            source_name="Item C",
            target_name="Item A",
            reason='Change "blocks" to "relates" (informational only)',
        )

    def test_fix_for_dependency_link_is_removal(self) -> None:
        g = graph_from([("A", "B"), ("B", "A")])
        (cycle,) = detect_cycles(g)
        assert cycle.suggested_fix is not None
        assert cycle.suggested_fix.reason.startswith("Remove")

    def test_bare_cycle_has_no_closing_link(self) -> None:
        assert Cycle(nodes=("A", "B")).closing_link is None

    def test_deep_chain_does_not_recurse(self) -> None:
        """A 5000-long chain closed at the end would overflow a recursive DFS."""
        n = 5000
        ids = [f"n{i:05d}" for i in range(n)]
        edges = [(ids[i], ids[i + 1]) for i in range(n - 1)]
        edges.append((ids[-1], ids[0]))
        g = graph_from(edges)
        cycles = detect_cycles(g)
        assert len(cycles) == 1
        assert len(cycles[0]) == n

    def test_no_false_positives_random_dags(self) -> None:
        """50 random DAGs built from forward edges only."""
        rng = random.Random(42)
        for _ in range(50):
            n = rng.randint(2, 30)
            ids = [f"n{i:02d}" for i in range(n)]
            edges = [
                (ids[i], ids[j])
                for i in range(n)
                for j in range(i + 1, n)
                if rng.random() < 0.3
            ]
            g = graph_from(edges, nodes=ids)
            assert detect_cycles(g) == [], f"False positive on DAG with {n} nodes"

    def test_no_false_negatives_random_cycles(self) -> None:
        """A chain guarantees reachability, so any back edge closes a cycle."""
        rng = random.Random(43)
        for _ in range(50):
            n = rng.randint(3, 20)
            ids = [f"n{i:02d}" for i in range(n)]
            edges = [(ids[i], ids[i + 1]) for i in range(n - 1)]
            for i in range(n):
                for j in range(i + 2, n):
                    if rng.random() < 0.2:
                        edges.append((ids[i], ids[j]))
            src = rng.randint(1, n - 1)
            dst = rng.randint(0, src - 1)
            edges.append((ids[src], ids[dst]))
            g = graph_from(edges)
            cycles = detect_cycles(g)
            assert cycles, f"False negative: missed back edge {src}->{dst}"
            members = cycle_members(cycles)
            assert {ids[k] for k in range(dst, src + 1)} <= members
            for cycle in cycles:
                assert _closes(g, cycle)

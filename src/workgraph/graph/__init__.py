"""Graph algorithms for work item dependency analysis."""

from workgraph.graph.adjacency import FrozenGraphError, Graph
from workgraph.graph.bottleneck import (
    Bottleneck,
    Severity,
    SeverityThresholds,
    find_bottlenecks,
)
from workgraph.graph.builder import WorkGraph, build_graph
from workgraph.graph.critical_path import CriticalPathResult, critical_path
from workgraph.graph.cycle_detector import (
    Cycle,
    SuggestedFix,
    cycle_members,
    detect_cycles,
)
from workgraph.graph.health import (
    EdgeHealth,
    HealthSummary,
    HealthTier,
    classify_edges,
    summarize_health,
)
from workgraph.graph.orphans import find_orphans
from workgraph.graph.topological import topological_sort

__all__ = [
    "Bottleneck",
    "CriticalPathResult",
    "Cycle",
    "EdgeHealth",
    "FrozenGraphError",
    "Graph",
    "HealthSummary",
    "HealthTier",
    "Severity",
    "SeverityThresholds",
    "SuggestedFix",
    "WorkGraph",
    "build_graph",
    "classify_edges",
    "critical_path",
    "cycle_members",
    "detect_cycles",
    "find_bottlenecks",
    "find_orphans",
    "summarize_health",
    "topological_sort",
]

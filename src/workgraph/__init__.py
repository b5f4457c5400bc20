"""Dependency graph analysis for work items.

Derives the critical path, bottleneck severity, circular dependencies,
orphaned items and per-link health from one immutable snapshot:

    from workgraph import analyze
    report = analyze(items, links)
"""

from workgraph.config import AnalysisConfig
from workgraph.domain import Link, LinkKind, WorkItem, WorkItemStatus
from workgraph.engine import AnalysisEngine, analyze
from workgraph.errors import (
    DuplicateNodeId,
    GraphValidationError,
    SelfLoopEdge,
    SnapshotFormatError,
    TopologicalSortInvariantViolation,
    UnknownNodeReference,
)
from workgraph.report import AnalysisReport, format_report

__all__ = [
    "AnalysisConfig",
    "AnalysisEngine",
    "AnalysisReport",
    "DuplicateNodeId",
    "GraphValidationError",
    "Link",
    "LinkKind",
    "SelfLoopEdge",
    "SnapshotFormatError",
    "TopologicalSortInvariantViolation",
    "UnknownNodeReference",
    "WorkItem",
    "WorkItemStatus",
    "analyze",
    "format_report",
]

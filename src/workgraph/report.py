"""Analysis report: assembly, plain-dict form and terminal rendering.

The report is the engine's only output.  ``to_dict`` produces plain
lists, dicts, strings and numbers in a fixed order, so two runs on the
same snapshot serialize identically with any JSON encoder.  Choosing
the wire format is left to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from workgraph.domain.types import WorkItemId
from workgraph.graph.bottleneck import Bottleneck
from workgraph.graph.critical_path import CriticalPathResult
from workgraph.graph.cycle_detector import Cycle, SuggestedFix
from workgraph.graph.health import EdgeHealth, HealthSummary, summarize_health


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Everything derived from one snapshot."""
    critical_path: CriticalPathResult
    bottlenecks: tuple[Bottleneck, ...]
    circular_dependencies: tuple[Cycle, ...]
    edge_health: tuple[EdgeHealth, ...]
    orphaned_items: tuple[WorkItemId, ...]
    warnings: tuple[str, ...] = ()
    item_count: int = 0
    analyzed_count: int = 0    # items outside every cycle

    @property
    def has_cycles(self) -> bool:
        return bool(self.circular_dependencies)

    def health_summary(self) -> HealthSummary:
        return summarize_health(self.edge_health)

    def to_dict(self) -> dict[str, Any]:
        return {
            "critical_path": {
                "path": list(self.critical_path.path),
                "total_duration": self.critical_path.total_duration,
            },
            "bottlenecks": [
                {
                    "node_id": b.node_id,
                    "name": b.name,
                    "blocking_count": b.blocking_count,
                    "severity": b.severity.value,
                    "direct_dependents": b.direct_dependents,
                }
                for b in self.bottlenecks
            ],
            "circular_dependencies": [
                {
                    "cycle": list(c.nodes),
                    "names": list(c.names),
                    "suggested_fix": _fix_dict(c.suggested_fix),
                }
                for c in self.circular_dependencies
            ],
            "edge_health": [
                {"link_id": e.link_id, "tier": e.tier.value}
                for e in self.edge_health
            ],
            "orphaned_items": list(self.orphaned_items),
            "warnings": list(self.warnings),
        }


def _fix_dict(fix: SuggestedFix | None) -> dict[str, str] | None:
    if fix is None:
        return None
    return {
        "link_id": fix.link_id,
        "source_name": fix.source_name,
        "target_name": fix.target_name,
        "reason": fix.reason,
    }


def build_warnings(
    cycles: list[Cycle],
    path: CriticalPathResult,
    analyzed_count: int,
    critical_share_warning: float,
    bottleneck_count: int = 0,
    bottleneck_warning_limit: int = 5,
) -> list[str]:
    """Human-readable caveats about the analysis."""
    warnings: list[str] = []
    if cycles:
        excluded = len({n for c in cycles for n in c.nodes})
        warnings.append(
            f"{len(cycles)} circular dependenc{'y' if len(cycles) == 1 else 'ies'} "
            f"detected; {excluded} item(s) excluded from critical path and "
            f"bottleneck analysis."
        )
    if analyzed_count and len(path) / analyzed_count > critical_share_warning:
        warnings.append(
            f"{len(path)} of {analyzed_count} work items are on the critical path. "
            f"Consider parallelizing tasks."
        )
    if bottleneck_count > bottleneck_warning_limit:
        warnings.append(
            f"{bottleneck_count} bottleneck items detected. "
            f"These items may delay the project."
        )
    return warnings


def assemble_report(
    *,
    critical_path: CriticalPathResult,
    bottlenecks: list[Bottleneck],
    cycles: list[Cycle],
    edge_health: list[EdgeHealth],
    orphans: list[WorkItemId],
    item_count: int,
    analyzed_count: int,
    critical_share_warning: float = 0.5,
    bottleneck_warning_limit: int = 5,
) -> AnalysisReport:
    """Merge the per-phase outputs into one AnalysisReport."""
    return AnalysisReport(
        critical_path=critical_path,
        bottlenecks=tuple(bottlenecks),
        circular_dependencies=tuple(cycles),
        edge_health=tuple(edge_health),
        orphaned_items=tuple(orphans),
        warnings=tuple(build_warnings(
            cycles, critical_path, analyzed_count, critical_share_warning,
            len(bottlenecks), bottleneck_warning_limit,
        )),
        item_count=item_count,
        analyzed_count=analyzed_count,
    )


def format_report(report: AnalysisReport, label: str = "Dependency analysis") -> str:
    """Format an AnalysisReport as a readable report string."""
    cp = report.critical_path
    health = report.health_summary()
    lines = [
        f"=== {label} ===",
        f"Work items:        {report.item_count:,} "
        f"({report.analyzed_count:,} outside cycles)",
        f"Critical path:     {' -> '.join(cp.path) if cp.path else '(none)'}",
        f"Total duration:    {cp.total_duration:g}",
        f"Cycles:            {len(report.circular_dependencies)}",
    ]
    for cycle in report.circular_dependencies:
        loop = " -> ".join((*cycle.nodes, cycle.nodes[0]))
        fix = cycle.suggested_fix
        lines.append(f"  {loop} (remove {fix.link_id})" if fix else f"  {loop}")
        if fix:
            lines.append(f"    {fix.source_name} -> {fix.target_name}: {fix.reason}")
    lines.append(f"Bottlenecks:       {len(report.bottlenecks)}")
    for b in report.bottlenecks:
        lines.append(
            f"  {b.node_id:<20} blocks {b.blocking_count:>4}  [{b.severity.value}]"
        )
    lines += [
        f"Orphans:           {', '.join(report.orphaned_items) or '(none)'}",
        f"Link health:       {health.healthy} healthy, {health.at_risk} at risk, "
        f"{health.blocked} blocked",
    ]
    for warning in report.warnings:
        lines.append(f"! {warning}")
    return "\n".join(lines)

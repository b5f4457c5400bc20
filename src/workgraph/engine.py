"""Analysis engine: snapshot in, AnalysisReport out.

Phase dependencies:

    build_graph
      |-- detect_cycles --.
      |-- find_orphans    |  (independent)
      |-- classify_edges  |
      |                   v
      |            topological_sort(excluded = cycle members)
      |                   |-- critical_path     (independent)
      |                   `-- find_bottlenecks
      v
    assemble_report

With ``AnalysisConfig.parallel`` the independent phases of each stage
are submitted to a ThreadPoolExecutor and joined before the next
stage.  The WorkGraph is frozen, so the tasks share it without locks.
The output is the same either way; the sequential path is the default
because the work is pure Python and the GIL serializes it anyway.

The engine keeps no state between calls.  Callers that need a
deadline enforce it around analyze().
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, TypeVar

from workgraph.config import AnalysisConfig
from workgraph.domain.link import Link
from workgraph.domain.work_item import WorkItem
from workgraph.graph.bottleneck import find_bottlenecks
from workgraph.graph.builder import WorkGraph, build_graph
from workgraph.graph.critical_path import critical_path
from workgraph.graph.cycle_detector import cycle_members, detect_cycles
from workgraph.graph.health import classify_edges
from workgraph.graph.orphans import find_orphans
from workgraph.graph.topological import topological_sort
from workgraph.report import AnalysisReport, assemble_report

log = logging.getLogger(__name__)

R = TypeVar("R")


class AnalysisEngine:
    """Stateless dependency graph analyzer.

    Usage:
        engine = AnalysisEngine(AnalysisConfig(risk_window=timedelta(days=3)))
        report = engine.analyze(items, links)
        report.to_dict()
    """

    __slots__ = ("_config",)

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def analyze(
        self,
        items: Iterable[WorkItem],
        links: Iterable[Link],
        now: datetime | None = None,
    ) -> AnalysisReport:
        """Build a graph from *items* and *links* and analyze it.

        Raises a GraphValidationError subclass on malformed input; no
        partial report is produced in that case.
        """
        graph = build_graph(items, links)
        return self.analyze_graph(graph, now)

    def analyze_graph(
        self, graph: WorkGraph, now: datetime | None = None
    ) -> AnalysisReport:
        """Analyze an already built graph.

        *now* is the evaluation time for link health; defaults to the
        current UTC time.  Pass it explicitly for reproducible reports.
        """
        cfg = self._config
        now = now or datetime.now(timezone.utc)
        t_start = time.perf_counter()

        if cfg.parallel:
            with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
                report = self._run(graph, now, _pooled(pool))
        else:
            report = self._run(graph, now, _inline)

        log.debug(
            "analyzed %d items / %d links in %.1f ms (parallel=%s)",
            len(graph), len(graph.links),
            (time.perf_counter() - t_start) * 1000.0, cfg.parallel,
        )
        return report

    def _run(
        self,
        graph: WorkGraph,
        now: datetime,
        submit: Callable[..., Callable[[], Any]],
    ) -> AnalysisReport:
        cfg = self._config

        # stage 1: graph-wide, no ordering needed
        cycles_f = submit(detect_cycles, graph)
        orphans_f = submit(find_orphans, graph)
        health_f = submit(classify_edges, graph, now, cfg.risk_window)
        cycles = cycles_f()

        excluded = cycle_members(cycles)
        if cycles:
            log.warning(
                "%d cycle(s) found; excluding %d item(s) from path analysis",
                len(cycles), len(excluded),
            )

        # stage 2: ordering of the acyclic remainder
        order = topological_sort(graph, excluded)
        log.debug("ordered %d of %d items", len(order), len(graph))

        # stage 3: both need the order, neither needs the other
        path_f = submit(critical_path, graph, order)
        bottlenecks_f = submit(
            find_bottlenecks,
            graph,
            order,
            cfg.thresholds,
            excluded if cfg.include_cyclic_bottlenecks else frozenset(),
        )

        return assemble_report(
            critical_path=path_f(),
            bottlenecks=bottlenecks_f(),
            cycles=cycles,
            edge_health=health_f(),
            orphans=orphans_f(),
            item_count=len(graph),
            analyzed_count=len(order),
            critical_share_warning=cfg.critical_share_warning,
            bottleneck_warning_limit=cfg.bottleneck_warning_limit,
        )


def _inline(fn: Callable[..., R], *args: object) -> Callable[[], R]:
    """Run *fn* now; return a thunk yielding its result."""
    result = fn(*args)
    return lambda: result


def _pooled(pool: ThreadPoolExecutor) -> Callable[..., Callable[[], Any]]:
    """Submit to *pool*; the returned thunk joins the future."""
    def submit(fn: Callable[..., R], *args: object) -> Callable[[], R]:
        future: Future[R] = pool.submit(fn, *args)
        return future.result
    return submit


def analyze(
    items: Iterable[WorkItem],
    links: Iterable[Link],
    now: datetime | None = None,
    config: AnalysisConfig | None = None,
) -> AnalysisReport:
    """One-shot convenience wrapper around AnalysisEngine.analyze()."""
    return AnalysisEngine(config).analyze(items, links, now)

"""Per-link health tiers for blocking links.

Each blocking link source -> target is judged from the two items'
statuses and the target's due date, independently of every other
analysis:

  healthy  -- the source is completed; nothing else matters
  blocked  -- the source is not completed but the target is already
              in progress or in review (work started on an unmet
              precondition)
  at_risk  -- the source is in progress and the target is due within
              the risk window of the evaluation time (overdue targets
              count too)
  healthy  -- anything else

Rules are checked in that order, so "blocked" wins over "at_risk".
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

from workgraph.domain.types import LinkId, as_utc
from workgraph.domain.work_item import WorkItem, WorkItemStatus
from workgraph.graph.builder import WorkGraph

DEFAULT_RISK_WINDOW = timedelta(days=7)


class HealthTier(Enum):
    HEALTHY = "healthy"
    AT_RISK = "at_risk"
    BLOCKED = "blocked"


@dataclass(frozen=True, slots=True)
class EdgeHealth:
    link_id: LinkId
    tier: HealthTier


@dataclass(frozen=True, slots=True)
class HealthSummary:
    """Dashboard counts derived from a list of EdgeHealth."""
    healthy: int = 0
    at_risk: int = 0
    blocked: int = 0

    @property
    def total(self) -> int:
        return self.healthy + self.at_risk + self.blocked


def classify_link(
    source: WorkItem,
    target: WorkItem,
    now: datetime,
    risk_window: timedelta = DEFAULT_RISK_WINDOW,
) -> HealthTier:
    """Health tier of one blocking link source -> target at time *now*."""
    if source.is_completed():
        return HealthTier.HEALTHY
    if target.status.is_active:
        return HealthTier.BLOCKED
    if (
        source.status is WorkItemStatus.IN_PROGRESS
        and target.due is not None
        and as_utc(target.due) <= as_utc(now) + risk_window
    ):
        return HealthTier.AT_RISK
    return HealthTier.HEALTHY


def classify_edges(
    graph: WorkGraph,
    now: datetime,
    risk_window: timedelta = DEFAULT_RISK_WINDOW,
) -> list[EdgeHealth]:
    """EdgeHealth for every blocking link, in snapshot order."""
    result: list[EdgeHealth] = []
    for link in graph.blocking_links():
        tier = classify_link(
            graph.item(link.source), graph.item(link.target), now, risk_window
        )
        result.append(EdgeHealth(link_id=link.id, tier=tier))
    return result


def summarize_health(edge_health: Iterable[EdgeHealth]) -> HealthSummary:
    """Count links per tier without re-running any analysis."""
    counts = Counter(e.tier for e in edge_health)
    return HealthSummary(
        healthy=counts[HealthTier.HEALTHY],
        at_risk=counts[HealthTier.AT_RISK],
        blocked=counts[HealthTier.BLOCKED],
    )

"""Tunables for one analysis run.

Everything the engine treats as policy rather than algorithm lives
here: severity cut-offs, the at-risk window, whether cycle members get
bottleneck counts, and whether independent phases run on a thread
pool.  Defaults reproduce the product's documented behavior.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping

from workgraph.graph.bottleneck import SeverityThresholds
from workgraph.graph.health import DEFAULT_RISK_WINDOW


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Immutable analysis settings, validated on construction."""
    thresholds: SeverityThresholds = field(default_factory=SeverityThresholds)
    risk_window: timedelta = DEFAULT_RISK_WINDOW
    include_cyclic_bottlenecks: bool = False
    parallel: bool = False
    max_workers: int = 4
    critical_share_warning: float = 0.5   # warn above this share on the path
    bottleneck_warning_limit: int = 5     # warn above this many bottlenecks

    def __post_init__(self) -> None:
        if self.risk_window < timedelta(0):
            raise ValueError("risk_window must not be negative")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if not (0.0 < self.critical_share_warning <= 1.0):
            raise ValueError("critical_share_warning must be in (0, 1]")
        if self.bottleneck_warning_limit < 0:
            raise ValueError("bottleneck_warning_limit must not be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AnalysisConfig:
        """Build a config from plain values (JSON, CLI flags).

        Recognized keys: medium, high, risk_window_days,
        include_cyclic_bottlenecks, parallel, max_workers,
        critical_share_warning, bottleneck_warning_limit.  Missing keys
        keep their defaults.
        """
        defaults = SeverityThresholds()
        thresholds = SeverityThresholds(
            medium=int(data.get("medium", defaults.medium)),
            high=int(data.get("high", defaults.high)),
        )
        kwargs: dict[str, Any] = {"thresholds": thresholds}
        if "risk_window_days" in data:
            kwargs["risk_window"] = timedelta(days=float(data["risk_window_days"]))
        for key in ("include_cyclic_bottlenecks", "parallel"):
            if key in data:
                kwargs[key] = bool(data[key])
        for key in ("max_workers", "bottleneck_warning_limit"):
            if key in data:
                kwargs[key] = int(data[key])
        if "critical_share_warning" in data:
            kwargs["critical_share_warning"] = float(data["critical_share_warning"])
        return cls(**kwargs)

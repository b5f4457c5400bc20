"""workgraph CLI entry point.

Usage: workgraph [-v] analyze SNAPSHOT.json [options]
       workgraph summary SNAPSHOT.json
"""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from workgraph.config import AnalysisConfig
from workgraph.engine import AnalysisEngine
from workgraph.errors import GraphValidationError
from workgraph.report import format_report
from workgraph.snapshot import parse_timestamp, read_snapshot

log = logging.getLogger(__name__)


def _add_analyze_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "analyze",
        help="Run the full dependency analysis on a snapshot file.",
    )
    p.add_argument("snapshot", help="JSON file with work_items and connections")
    p.add_argument(
        "--now", default=None,
        help="Evaluation time for link health, ISO-8601 (default: current UTC time)",
    )
    p.add_argument(
        "--risk-window-days", type=float, default=7.0,
        help="Days ahead of --now in which a due target is at risk (default: 7)",
    )
    p.add_argument(
        "--medium", type=int, default=2,
        help="Blocking count for medium severity (default: 2)",
    )
    p.add_argument(
        "--high", type=int, default=5,
        help="Blocking count for high severity (default: 5)",
    )
    p.add_argument(
        "--include-cyclic", action="store_true",
        help="Report bottleneck counts for items inside cycles too.",
    )
    p.add_argument(
        "--parallel", action="store_true",
        help="Run independent analysis phases on a thread pool.",
    )
    p.add_argument(
        "--json", action="store_true",
        help="Print the report as JSON instead of text.",
    )


def _add_summary_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "summary",
        help="Print link health counts for a snapshot.",
    )
    p.add_argument("snapshot", help="JSON file with work_items and connections")
    p.add_argument("--now", default=None, help="Evaluation time, ISO-8601")


def _evaluation_time(value: str | None) -> datetime:
    return parse_timestamp(value) or datetime.now(timezone.utc)


def _analysis_config(args: argparse.Namespace) -> AnalysisConfig:
    return AnalysisConfig.from_mapping({
        "medium": args.medium,
        "high": args.high,
        "risk_window_days": args.risk_window_days,
        "include_cyclic_bottlenecks": args.include_cyclic,
        "parallel": args.parallel,
    })


def _run_analyze(args: argparse.Namespace, config: AnalysisConfig) -> None:
    items, links = read_snapshot(args.snapshot)
    report = AnalysisEngine(config).analyze(items, links, _evaluation_time(args.now))
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_report(report, label=f"Dependency analysis: {args.snapshot}"))


def _run_summary(args: argparse.Namespace) -> None:
    items, links = read_snapshot(args.snapshot)
    report = AnalysisEngine().analyze(items, links, _evaluation_time(args.now))
    health = report.health_summary()
    print(f"{'Tier':<10} {'Links':>6}")
    print("-" * 17)
    print(f"{'healthy':<10} {health.healthy:>6}")
    print(f"{'at_risk':<10} {health.at_risk:>6}")
    print(f"{'blocked':<10} {health.blocked:>6}")
    print(f"{'total':<10} {health.total:>6}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="workgraph",
        description="Critical path, bottleneck and cycle analysis for work item graphs.",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress to stderr (-vv for debug output).",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_analyze_parser(subparsers)
    _add_summary_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "analyze":
        try:
            config = _analysis_config(args)
        except ValueError as exc:
            parser.error(str(exc))

    try:
        if args.command == "analyze":
            _run_analyze(args, config)
        elif args.command == "summary":
            _run_summary(args)
    except (GraphValidationError, OSError) as exc:
        log.debug("snapshot rejected", exc_info=True)
        print(f"workgraph: error: {exc}", file=sys.stderr)
        sys.exit(2)

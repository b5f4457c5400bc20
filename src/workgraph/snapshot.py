"""Map persisted rows to WorkItem and Link objects.

The product stores work items and connections as loosely typed rows.
This module converts them exactly once, so the graph code never has to
wonder whether a duration is a string or a due date is missing.

Accepted column names follow the product's tables, with short aliases:

  work item:  id, name, type | category, status,
              duration | estimated_duration, due_date | due
  connection: id, source_work_item_id | source,
              target_work_item_id | target, connection_type | kind,
              created_at, status

Connections whose ``status`` is present and not "active" are dropped,
the same filter the product applies before drawing the graph.

Timeline statuses outside the engine's five values are folded in by
STATUS_ALIASES: ``on_hold`` reads as blocked, ``cancelled`` as not
started.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from workgraph.domain.link import Link, LinkKind
from workgraph.domain.types import DEFAULT_DURATION, as_utc
from workgraph.domain.work_item import WorkItem, WorkItemStatus
from workgraph.errors import SnapshotFormatError

# legacy and alias spellings seen in the connection tables
KIND_ALIASES: dict[str, LinkKind] = {
    "dependency": LinkKind.DEPENDENCY,
    "depends_on": LinkKind.DEPENDENCY,
    "blocks": LinkKind.BLOCKS,
    "complements": LinkKind.COMPLEMENTS,
    "relates": LinkKind.RELATES,
    "relates_to": LinkKind.RELATES,
    "related_to": LinkKind.RELATES,
}

# timeline statuses the engine folds into its five-value enum
STATUS_ALIASES: dict[str, WorkItemStatus] = {
    "on_hold": WorkItemStatus.BLOCKED,
    "cancelled": WorkItemStatus.NOT_STARTED,
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


def _required(row: Mapping[str, Any], *keys: str) -> str:
    value = _first(row, *keys)
    if value is None or value == "":
        raise SnapshotFormatError(f"Row {row!r} is missing {' / '.join(keys)}")
    return str(value)


def parse_timestamp(value: Any) -> datetime | None:
    """ISO-8601 string or datetime to aware UTC; None passes through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            raise SnapshotFormatError(f"Invalid timestamp {value!r}") from None
    raise SnapshotFormatError(f"Invalid timestamp {value!r}")


def parse_kind(value: Any) -> LinkKind:
    if isinstance(value, LinkKind):
        return value
    try:
        return KIND_ALIASES[str(value).strip().lower()]
    except KeyError:
        raise SnapshotFormatError(f"Unknown link kind {value!r}") from None


def parse_status(value: Any) -> WorkItemStatus:
    if value is None:
        return WorkItemStatus.NOT_STARTED
    if isinstance(value, WorkItemStatus):
        return value
    text = str(value).strip().lower()
    if text in STATUS_ALIASES:
        return STATUS_ALIASES[text]
    try:
        return WorkItemStatus(text)
    except ValueError:
        raise SnapshotFormatError(f"Unknown work item status {value!r}") from None


def item_from_row(row: Mapping[str, Any]) -> WorkItem:
    """Build a WorkItem from a work item row."""
    raw_duration = _first(row, "duration", "estimated_duration")
    try:
        duration = DEFAULT_DURATION if raw_duration is None else float(raw_duration)
    except (TypeError, ValueError):
        raise SnapshotFormatError(f"Invalid duration {raw_duration!r}") from None
    item_id = _required(row, "id")
    status = parse_status(_first(row, "status"))
    due = parse_timestamp(_first(row, "due_date", "due"))
    try:
        return WorkItem(
            id=item_id,
            name=str(_first(row, "name") or ""),
            category=str(_first(row, "type", "category") or ""),
            duration=duration,
            status=status,
            due=due,
        )
    except ValueError as exc:
        raise SnapshotFormatError(str(exc)) from exc


def link_from_row(row: Mapping[str, Any]) -> Link:
    """Build a Link from a connection row."""
    return Link(
        id=_required(row, "id"),
        source=_required(row, "source_work_item_id", "source"),
        target=_required(row, "target_work_item_id", "target"),
        kind=parse_kind(_required(row, "connection_type", "kind")),
        created_at=parse_timestamp(_first(row, "created_at")) or _EPOCH,
    )


def is_active_connection(row: Mapping[str, Any]) -> bool:
    status = row.get("status")
    return status is None or status == "active"


def load_snapshot(
    data: Mapping[str, Any],
) -> tuple[list[WorkItem], list[Link]]:
    """Convert ``{"work_items": [...], "connections": [...]}`` to domain objects."""
    items = [item_from_row(row) for row in _rows(data, "work_items")]
    links = [
        link_from_row(row)
        for row in _rows(data, "connections")
        if is_active_connection(row)
    ]
    return items, links


def _rows(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    rows = data.get(key)
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise SnapshotFormatError(
            f"{key!r} must be a list of objects, got {type(rows).__name__}"
        )
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise SnapshotFormatError(
                f"{key}[{index}] must be an object, got {row!r}"
            )
    return rows


def read_snapshot(path: str | Path) -> tuple[list[WorkItem], list[Link]]:
    """Read a JSON snapshot file and convert it."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotFormatError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"{path}: expected a JSON object at top level")
    return load_snapshot(data)

"""Shared fixtures for engine, snapshot and CLI tests."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from workgraph.domain.link import Link, LinkKind
from workgraph.domain.work_item import WorkItem, WorkItemStatus

NOW = datetime(2025, 6, 15, 14, 30, tzinfo=timezone.utc)


def item(
    node_id: str,
    duration: float = 1.0,
    status: WorkItemStatus = WorkItemStatus.NOT_STARTED,
    due: datetime | None = None,
) -> WorkItem:
    return WorkItem(id=node_id, name=node_id.lower(), category="feature",
                    duration=duration, status=status, due=due)


def link(src: str, dst: str, kind: LinkKind = LinkKind.DEPENDENCY) -> Link:
    return Link(id=f"{src}{dst}", source=src, target=dst, kind=kind, created_at=NOW)


@pytest.fixture
def diamond() -> tuple[list[WorkItem], list[Link]]:
    items = [item(n) for n in "ABCD"]
    links = [link("A", "B"), link("A", "C"), link("B", "D"), link("C", "D")]
    return items, links


@pytest.fixture
def cyclic() -> tuple[list[WorkItem], list[Link]]:
    items = [item(n) for n in "ABC"]
    links = [
        link("A", "B", LinkKind.BLOCKS),
        link("B", "C", LinkKind.BLOCKS),
        link("C", "A", LinkKind.BLOCKS),
    ]
    return items, links


@pytest.fixture
def snapshot_rows() -> dict[str, Any]:
    """A workspace export shaped like the product's tables."""
    return {
        "work_items": [
            {"id": "wi-1", "name": "Auth service", "type": "feature",
             "status": "completed", "estimated_duration": 5},
            {"id": "wi-2", "name": "Login page", "type": "feature",
             "status": "in_progress", "duration": "3"},
            {"id": "wi-3", "name": "Session audit", "type": "enhancement",
             "status": "not_started", "due_date": "2025-06-18T00:00:00Z"},
            {"id": "wi-4", "name": "Docs", "type": "concept", "status": "review"},
            {"id": "wi-5", "name": "Spike", "type": "concept", "status": "not_started"},
        ],
        "connections": [
            {"id": "c-1", "source_work_item_id": "wi-1", "target_work_item_id": "wi-2",
             "connection_type": "dependency", "status": "active",
             "created_at": "2025-06-01T09:00:00Z"},
            {"id": "c-2", "source_work_item_id": "wi-2", "target_work_item_id": "wi-3",
             "connection_type": "blocks", "status": "active",
             "created_at": "2025-06-02T09:00:00Z"},
            {"id": "c-3", "source_work_item_id": "wi-3", "target_work_item_id": "wi-4",
             "connection_type": "relates_to", "status": "active",
             "created_at": "2025-06-03T09:00:00Z"},
            {"id": "c-4", "source_work_item_id": "wi-2", "target_work_item_id": "wi-5",
             "connection_type": "blocks", "status": "rejected",
             "created_at": "2025-06-04T09:00:00Z"},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_rows: dict[str, Any]) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_rows), encoding="utf-8")
    return path

"""Shared test fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from task_engine.models import Task, TaskPriority, TaskStatus

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def sample_tasks() -> list[Task]:
    """Mixed snapshot: overdue, unestimated, duplicated tags and tied priorities."""

    return [
        Task(
            id=1,
            title="Write report",
            status=TaskStatus.TODO,
            priority=TaskPriority.LOW,
            tags=frozenset({"docs", "q1"}),
            estimated_hours=3,
            due_date=NOW - timedelta(days=1),
        ),
        Task(
            id=2,
            title="Fix login",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            tags=frozenset({"bug"}),
            estimated_hours=None,
            due_date=NOW + timedelta(days=2),
        ),
        Task(
            id=3,
            title="Release",
            status=TaskStatus.DONE,
            priority=TaskPriority.HIGH,
            tags=frozenset({"q1", "ops"}),
            estimated_hours=5,
            due_date=NOW - timedelta(days=3),
        ),
        Task(
            id=4,
            title="Plan sprint",
            status=TaskStatus.REVIEW,
            priority=TaskPriority.URGENT,
            estimated_hours=1,
        ),
    ]


@pytest.fixture()
def tasks_file(tmp_path: Path, sample_tasks: list[Task]) -> Path:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([task.to_dict() for task in sample_tasks]), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_task_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TASK_ENGINE_LOG_LEVEL",
        "TASK_ENGINE_TOP_PRIORITY_LIMIT",
        "TASK_ENGINE_BATCH_SIZE",
        "TASK_ENGINE_TASKS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    logger = logging.getLogger("task_engine")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate

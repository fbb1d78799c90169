from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import allure
import pytest

from task_engine.errors import InvalidTaskError
from task_engine.loader import load_tasks
from task_engine.models import Task, TaskPriority, TaskStatus

pytestmark = [
    allure.epic("Task Queries"),
    allure.feature("Task Records"),
]


def test_task_normalizes_tags_and_naive_due_date() -> None:
    task = Task(
        id=1,
        title="Tagged",
        tags=["a", "b", "a"],  # type: ignore[arg-type]
        due_date=datetime(2026, 1, 1),
    )

    assert task.tags == frozenset({"a", "b"})
    assert task.due_date == datetime(2026, 1, 1, tzinfo=UTC)


def test_task_treats_bare_string_tags_as_one_tag() -> None:
    task = Task(id=1, title="Single tag", tags="urgent")  # type: ignore[arg-type]

    assert task.tags == frozenset({"urgent"})


def test_task_rejects_empty_title_and_negative_estimate() -> None:
    with pytest.raises(InvalidTaskError, match="non-empty title"):
        Task(id=1, title="  ")
    with pytest.raises(InvalidTaskError, match="estimated_hours") as error_info:
        Task(id=2, title="Bad", estimated_hours=-1)
    assert error_info.value.field_name == "estimated_hours"


def test_priority_rank_orders_levels() -> None:
    ranks = [priority.rank for priority in TaskPriority]

    assert ranks == sorted(ranks)
    assert TaskPriority.URGENT.rank > TaskPriority.HIGH.rank > TaskPriority.LOW.rank


def test_is_overdue_ignores_done_and_undated_tasks() -> None:
    now = datetime(2026, 3, 1, tzinfo=UTC)
    past = datetime(2026, 2, 1, tzinfo=UTC)

    assert Task(id=1, title="Late", due_date=past).is_overdue(now)
    assert not Task(id=2, title="Done", due_date=past, status=TaskStatus.DONE).is_overdue(now)
    assert not Task(id=3, title="Undated").is_overdue(now)


def test_is_overdue_accepts_naive_now() -> None:
    task = Task(id=1, title="Late", due_date=datetime(2026, 1, 1))

    assert task.is_overdue(datetime(2026, 2, 1))
    assert not task.is_overdue(datetime(2025, 12, 1))


def test_from_dict_accepts_names_and_values() -> None:
    task = Task.from_dict(
        {
            "id": 7,
            "title": "Parsed",
            "status": "IN_PROGRESS",
            "priority": "high",
            "tags": "x, y",
            "estimated_hours": 4,
            "due_date": "2026-05-01T10:00:00+00:00",
        },
    )

    assert task.id == 7
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.priority == TaskPriority.HIGH
    assert task.tags == frozenset({"x", "y"})
    assert task.estimated_hours == 4
    assert Task.from_dict(task.to_dict()) == task


@pytest.mark.parametrize(
    ("payload", "code"),
    [
        ({"title": "No id"}, "missing_field"),
        ({"id": "abc", "title": "Bad id"}, "invalid_id"),
        ({"id": 1.9, "title": "Fractional id"}, "invalid_id"),
        ({"id": True, "title": "Boolean id"}, "invalid_id"),
        ({"id": 1, "title": None}, "invalid_title"),
        ({"id": 1, "title": 42}, "invalid_title"),
        (
            {"id": 1, "title": "Fractional hours", "estimated_hours": 2.7},
            "invalid_estimated_hours",
        ),
        ({"id": 1, "title": "Bad status", "status": "blocked"}, "invalid_status"),
        ({"id": 1, "title": "Bad date", "due_date": "tomorrow"}, "invalid_due_date"),
    ],
)
def test_from_dict_reports_invalid_payloads(payload: dict[str, object], code: str) -> None:
    with pytest.raises(InvalidTaskError) as error_info:
        Task.from_dict(payload)

    assert error_info.value.code == code


def test_load_tasks_reads_list_and_wrapped_payloads(tmp_path: Path, tasks_file: Path) -> None:
    tasks = load_tasks(tasks_file)
    assert [task.id for task in tasks] == [1, 2, 3, 4]

    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"tasks": [{"id": 9, "title": "Only"}]}), encoding="utf-8")
    assert [task.title for task in load_tasks(wrapped)] == ["Only"]


def test_load_tasks_rejects_malformed_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(InvalidTaskError, match="not valid JSON"):
        load_tasks(broken)

    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")
    with pytest.raises(InvalidTaskError, match="list of task objects"):
        load_tasks(scalar)

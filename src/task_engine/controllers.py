"""Controllers for task-engine CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from task_engine.analyzer import TaskAnalyzer
from task_engine.config import Settings
from task_engine.loader import load_tasks
from task_engine.models import Task, TaskPriority, TaskStatus
from task_engine.processing import TaskProcessingEngine


@dataclass(slots=True)
class SummaryCommand:
    """CLI inputs for summary command."""

    tasks_file: Path | None
    task_id: int | None


@dataclass(slots=True)
class TopCommand:
    """CLI inputs for top-priority command."""

    tasks_file: Path | None
    limit: int | None


@dataclass(slots=True)
class TagsCommand:
    """CLI inputs for tags command."""

    tasks_file: Path | None
    sort_all: bool


@dataclass(slots=True)
class BatchesCommand:
    """CLI inputs for batches command."""

    tasks_file: Path | None
    batch_size: int | None


class TaskCliController:
    """Coordinates task command execution."""

    def __init__(self, engine: TaskProcessingEngine | None = None) -> None:
        self.engine = engine or TaskProcessingEngine()

    def summary(self, command: SummaryCommand) -> list[str]:
        _, tasks = _load(command.tasks_file)
        analyzer = TaskAnalyzer(tasks)
        now = datetime.now(tz=UTC)

        total = analyzer.total_estimated_hours()
        average = analyzer.average_estimated_hours()
        overdue = analyzer.partition_by_overdue(now)
        lines = [
            f"Tasks: total={len(analyzer)} "
            f"overdue={len(overdue[True])} "
            f"all_assigned={'yes' if analyzer.all_assigned() else 'no'}",
            "Estimated hours: "
            f"total={total if total is not None else '-'} "
            f"average={f'{average:.2f}' if average is not None else '-'}",
        ]

        by_status = analyzer.group_by_status()
        lines.append(
            "By status: "
            + _format_counts(
                (status.name, len(by_status[status]))
                for status in TaskStatus
                if status in by_status
            ),
        )
        by_priority = analyzer.count_by_priority()
        lines.append(
            "By priority: "
            + _format_counts(
                (priority.name, by_priority[priority])
                for priority in TaskPriority
                if priority in by_priority
            ),
        )
        if command.task_id is not None:
            lines.append(f"Task {command.task_id}: {analyzer.summary(command.task_id)}")
        return lines

    def top(self, command: TopCommand) -> list[str]:
        settings, tasks = _load(command.tasks_file)
        limit = settings.query.top_priority_limit if command.limit is None else command.limit
        analyzer = TaskAnalyzer(tasks)

        top_tasks = analyzer.top_priority(limit)
        if not top_tasks:
            return ["No tasks."]
        return [_format_task(task) for task in top_tasks]

    def tags(self, command: TagsCommand) -> list[str]:
        _, tasks = _load(command.tasks_file)
        analyzer = TaskAnalyzer(tasks)
        if command.sort_all:
            return analyzer.all_tags_sorted()
        return sorted(analyzer.unique_tags())

    def batches(self, command: BatchesCommand) -> list[str]:
        settings, tasks = _load(command.tasks_file)
        batch_size = (
            settings.processing.batch_size if command.batch_size is None else command.batch_size
        )
        lines: list[str] = []

        def _describe(batch: list[Task]) -> None:
            ids = ",".join(str(task.id) for task in batch)
            lines.append(f"batch={len(lines) + 1} size={len(batch)} ids={ids}")

        self.engine.batch_process(tasks, batch_size, _describe)
        return lines or ["No tasks."]


def _load(tasks_file: Path | None) -> tuple[Settings, list[Task]]:
    settings = Settings.from_env(tasks_file=tasks_file)
    settings.validate()
    if settings.tasks_file is None:
        raise ValueError(
            "A tasks file is required. Set TASK_ENGINE_TASKS_FILE or pass --tasks-file.",
        )
    return settings, load_tasks(settings.tasks_file)


def _format_task(task: Task) -> str:
    hours = task.estimated_hours if task.estimated_hours is not None else "-"
    return (
        f"id={task.id} priority={task.priority.name} status={task.status.name} "
        f"hours={hours} title={task.title}"
    )


def _format_counts(pairs: Iterable[tuple[str, int]]) -> str:
    rendered = " ".join(f"{name}={count}" for name, count in pairs)
    return rendered or "-"

"""Read-only queries and aggregations over a task snapshot."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import datetime

from task_engine.models import Task, TaskPriority, TaskStatus
from task_engine.strategies import TaskPredicate

TASK_NOT_FOUND = "Task not found"


class TaskAnalyzer:
    """Answers questions about a fixed snapshot of tasks.

    The snapshot is copied at construction, so later changes to the caller's
    list are not visible here. Lookups by id return the first match in
    snapshot order; duplicate ids are tolerated rather than rejected.
    """

    def __init__(self, tasks: Iterable[Task]) -> None:
        self._tasks: list[Task] = list(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def filter(self, predicate: TaskPredicate) -> list[Task]:
        """Return matching tasks in snapshot order."""

        return [task for task in self._tasks if predicate(task)]

    def filter_with_custom_predicate(self, predicate: TaskPredicate) -> list[Task]:
        return self.filter(predicate)

    def find_by_id(self, task_id: int) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def top_priority(self, limit: int) -> list[Task]:
        """Return up to ``limit`` tasks, highest priority first.

        Ties keep snapshot order.
        """

        if limit <= 0:
            return []
        ranked = sorted(self._tasks, key=lambda task: task.priority.rank, reverse=True)
        return ranked[:limit]

    def group_by_status(self) -> dict[TaskStatus, list[Task]]:
        groups: dict[TaskStatus, list[Task]] = defaultdict(list)
        for task in self._tasks:
            groups[task.status].append(task)
        return dict(groups)

    def partition_by_overdue(self, now: datetime | None = None) -> dict[bool, list[Task]]:
        """Split tasks into overdue (True) and not overdue (False); both keys always present."""

        partitions: dict[bool, list[Task]] = {True: [], False: []}
        for task in self._tasks:
            partitions[task.is_overdue(now)].append(task)
        return partitions

    def unique_tags(self) -> set[str]:
        return {tag for task in self._tasks for tag in task.tags}

    def all_tags_sorted(self) -> list[str]:
        """Every tag of every task, duplicates across tasks included, ascending."""

        return sorted(tag for task in self._tasks for tag in task.tags)

    def total_estimated_hours(self) -> int | None:
        """Sum of known estimates; ``None`` when no task carries one."""

        estimates = self._known_estimates()
        if not estimates:
            return None
        return sum(estimates)

    def average_estimated_hours(self) -> float | None:
        estimates = self._known_estimates()
        if not estimates:
            return None
        return sum(estimates) / len(estimates)

    def titles(self) -> list[str]:
        return [task.title for task in self._tasks]

    def count_by_priority(self) -> dict[TaskPriority, int]:
        return dict(Counter(task.priority for task in self._tasks))

    def summary(self, task_id: int) -> str:
        task = self.find_by_id(task_id)
        if task is None:
            return TASK_NOT_FOUND
        return f"{task.title} - {task.status.name}"

    def has_overdue_tasks(self, now: datetime | None = None) -> bool:
        return any(task.is_overdue(now) for task in self._tasks)

    def all_assigned(self) -> bool:
        """True when no task is still in TODO (vacuously true when empty)."""

        return all(task.status != TaskStatus.TODO for task in self._tasks)

    def _known_estimates(self) -> list[int]:
        return [task.estimated_hours for task in self._tasks if task.estimated_hours is not None]

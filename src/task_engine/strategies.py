"""Pluggable strategy contracts and comparator helpers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from task_engine.models import Task

TaskPredicate = Callable[[Task], bool]
TaskTransformer = Callable[[Task], Task]
TaskMerger = Callable[[Task, Task], Task]
TaskConsumer = Callable[[Task], None]
TaskSupplier = Callable[[], Task]
TaskComparator = Callable[[Task, Task], int]
PipelineStage = Callable[[list[Task]], list[Task]]
BatchConsumer = Callable[[list[Task]], None]


@runtime_checkable
class BatchProcessor(Protocol):
    """Consumer of one contiguous batch of tasks."""

    def process(self, batch: list[Task]) -> None:
        """Handle one batch."""
        raise NotImplementedError


def comparing(key: Callable[[Task], Any]) -> TaskComparator:
    """Build a comparator ordering tasks by ascending ``key``."""

    def compare(left: Task, right: Task) -> int:
        left_key = key(left)
        right_key = key(right)
        return (left_key > right_key) - (left_key < right_key)

    return compare


def reverse_order(comparator: TaskComparator) -> TaskComparator:
    def compare(left: Task, right: Task) -> int:
        return comparator(right, left)

    return compare


def then_comparing(first: TaskComparator, second: TaskComparator) -> TaskComparator:
    """Use ``second`` only to break ties left by ``first``."""

    def compare(left: Task, right: Task) -> int:
        return first(left, right) or second(left, right)

    return compare


def compose_comparators(comparators: Sequence[TaskComparator]) -> TaskComparator | None:
    """Chain comparators left to right; ``None`` when there is nothing to compose."""

    if not comparators:
        return None
    composed = comparators[0]
    for comparator in comparators[1:]:
        composed = then_comparing(composed, comparator)
    return composed


def _estimate_sort_key(task: Task) -> tuple[bool, int]:
    return (task.estimated_hours is None, task.estimated_hours or 0)


by_id = comparing(lambda task: task.id)
by_title = comparing(lambda task: task.title)
by_priority = comparing(lambda task: task.priority.rank)
# Unestimated tasks sort after every estimated one.
by_estimated_hours = comparing(_estimate_sort_key)

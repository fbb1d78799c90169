"""Stateless pipeline composition and transformation over task lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import cmp_to_key
from itertools import islice
from typing import TypeVar

from task_engine.errors import InvalidArgumentError
from task_engine.models import Task
from task_engine.strategies import (
    BatchConsumer,
    BatchProcessor,
    PipelineStage,
    TaskComparator,
    TaskConsumer,
    TaskMerger,
    TaskPredicate,
    TaskSupplier,
    TaskTransformer,
    compose_comparators,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskProcessingEngine:
    """Runs caller-supplied operations over task lists.

    The engine keeps no state between calls and never mutates its inputs.
    Failures raised by caller-supplied functions propagate unchanged.
    """

    def run_pipeline(self, tasks: Sequence[Task], stages: Sequence[PipelineStage]) -> list[Task]:
        """Apply ``stages`` left to right; each stage receives the previous output."""

        current = list(tasks)
        for index, stage in enumerate(stages):
            try:
                current = list(stage(current))
            except Exception:
                logger.debug("Pipeline stage %d of %d failed", index + 1, len(stages))
                raise
            logger.debug(
                "Pipeline stage %d of %d produced %d tasks",
                index + 1,
                len(stages),
                len(current),
            )
        return current

    def or_else_create(self, maybe_task: Task | None, supplier: TaskSupplier) -> Task:
        """Return ``maybe_task`` or, only when it is absent, a task from ``supplier``."""

        if maybe_task is not None:
            return maybe_task
        return supplier()

    def for_each_with_effect(self, tasks: Iterable[Task], effect: TaskConsumer) -> None:
        for task in tasks:
            effect(task)

    def merge(self, task_a: Task, task_b: Task, merger: TaskMerger) -> Task:
        return merger(task_a, task_b)

    def map_all(self, tasks: Iterable[Task], transformer: TaskTransformer) -> list[Task]:
        return [transformer(task) for task in tasks]

    def filter_then_map(
        self,
        tasks: Iterable[Task],
        predicate: TaskPredicate,
        transformer: TaskTransformer,
    ) -> list[Task]:
        """Transform only the tasks that pass ``predicate``."""

        return [transformer(task) for task in tasks if predicate(task)]

    def batches(self, tasks: Sequence[Task], batch_size: int) -> Iterator[list[Task]]:
        """Split ``tasks`` into contiguous batches of at most ``batch_size``."""

        _require_positive_batch_size(batch_size)
        return _iter_batches(list(tasks), batch_size)

    def batch_process(
        self,
        tasks: Sequence[Task],
        batch_size: int,
        processor: BatchProcessor | BatchConsumer,
    ) -> None:
        """Hand each batch to ``processor`` in order.

        ``batch_size`` is checked before any batch is processed.
        """

        handle = processor.process if isinstance(processor, BatchProcessor) else processor
        for number, batch in enumerate(self.batches(tasks, batch_size), start=1):
            logger.debug("Processing batch %d with %d tasks", number, len(batch))
            handle(batch)

    def highest_priority_title(self, tasks: Iterable[Task]) -> str | None:
        """Title of the first task, in iteration order, holding the top priority."""

        best: Task | None = None
        for task in tasks:
            if best is None or task.priority.rank > best.priority.rank:
                best = task
        return best.title if best is not None else None

    def generate(self, supplier: TaskSupplier) -> Iterator[Task]:
        """Endless lazy stream; ``supplier`` runs once per pulled element."""

        while True:
            yield supplier()

    def take(self, items: Iterable[T], count: int) -> list[T]:
        if count < 0:
            raise InvalidArgumentError(
                message=f"take count must be >= 0, got {count}.",
                code="invalid_take_count",
                argument="count",
            )
        return list(islice(items, count))

    def sort_by_criteria(
        self,
        tasks: Iterable[Task],
        comparators: Sequence[TaskComparator],
    ) -> list[Task]:
        """Sort by ``comparators`` with the first as primary key.

        With no comparators the original order is returned. The sort is
        stable, so tasks equal under every comparator keep their order.
        """

        composed = compose_comparators(comparators)
        if composed is None:
            return list(tasks)
        return sorted(tasks, key=cmp_to_key(composed))


def _require_positive_batch_size(batch_size: int) -> None:
    if batch_size <= 0:
        raise InvalidArgumentError(
            message=f"batch_size must be a positive integer, got {batch_size}.",
            code="invalid_batch_size",
            argument="batch_size",
        )


def _iter_batches(tasks: list[Task], batch_size: int) -> Iterator[list[Task]]:
    for start in range(0, len(tasks), batch_size):
        yield tasks[start : start + batch_size]

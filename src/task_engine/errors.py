"""Error types raised by the task engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TaskEngineError(Exception):
    """Base task engine error."""

    message: str
    code: str = "task_engine_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class InvalidArgumentError(TaskEngineError, ValueError):
    """Argument rejected before any work was done."""

    argument: str | None = None


@dataclass(slots=True)
class InvalidTaskError(TaskEngineError, ValueError):
    """Task record or payload failed validation."""

    field_name: str | None = None

"""Runtime configuration for the task-engine CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class QuerySettings:
    """Defaults for analyzer queries."""

    top_priority_limit: int = 5


@dataclass(slots=True)
class ProcessingSettings:
    """Defaults for processing engine operations."""

    batch_size: int = 10


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    log_level: str = "WARNING"
    tasks_file: Path | None = None
    query: QuerySettings = field(default_factory=QuerySettings)
    processing: ProcessingSettings = field(default_factory=ProcessingSettings)

    @classmethod
    def from_env(cls, tasks_file: Path | None = None) -> Settings:
        """Load settings from ``TASK_ENGINE_*`` environment variables."""

        env_tasks_file = os.getenv("TASK_ENGINE_TASKS_FILE", "").strip()
        return cls(
            log_level=os.getenv("TASK_ENGINE_LOG_LEVEL", "WARNING").strip().upper(),
            tasks_file=tasks_file or (Path(env_tasks_file) if env_tasks_file else None),
            query=QuerySettings(
                top_priority_limit=_env_int("TASK_ENGINE_TOP_PRIORITY_LIMIT", 5),
            ),
            processing=ProcessingSettings(
                batch_size=_env_int("TASK_ENGINE_BATCH_SIZE", 10),
            ),
        )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def validate(self) -> None:
        """Raise configuration error on out-of-range values."""

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"TASK_ENGINE_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, "
                f"got {self.log_level!r}.",
            )
        if self.query.top_priority_limit < 0:
            raise ValueError("TASK_ENGINE_TOP_PRIORITY_LIMIT must be >= 0.")
        if self.processing.batch_size <= 0:
            raise ValueError("TASK_ENGINE_BATCH_SIZE must be a positive integer.")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as error:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from error

"""Load task snapshots from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from task_engine.errors import InvalidTaskError
from task_engine.models import Task

logger = logging.getLogger(__name__)


def load_tasks(path: Path) -> list[Task]:
    """Read a JSON list of task objects, or ``{"tasks": [...]}``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise InvalidTaskError(
            message=f"Tasks file {path} is not valid JSON: {error.msg} (line {error.lineno}).",
            code="invalid_json",
        ) from error

    if isinstance(payload, dict):
        payload = payload.get("tasks")
    if not isinstance(payload, list):
        raise InvalidTaskError(
            message=f"Tasks file {path} must contain a list of task objects.",
            code="invalid_tasks_file",
        )

    tasks: list[Task] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InvalidTaskError(
                message=f"Task entry #{index} in {path} must be an object.",
                code="invalid_task_entry",
            )
        tasks.append(Task.from_dict(item))

    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return tasks

"""CLI entrypoint for task-engine."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import rich_click as click

from task_engine import __version__
from task_engine.config import Settings
from task_engine.controllers import (
    BatchesCommand,
    SummaryCommand,
    TagsCommand,
    TaskCliController,
    TopCommand,
)
from task_engine.errors import TaskEngineError
from task_engine.logging_setup import setup_logging

click.rich_click.USE_MARKDOWN = True
TASK_CONTROLLER = TaskCliController()

_TASKS_FILE_OPTION = click.option(
    "--tasks-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="JSON file with a list of tasks. Defaults to TASK_ENGINE_TASKS_FILE.",
)


@click.group()
@click.version_option(version=__version__, prog_name="task-engine")
def task_engine() -> None:
    """Query and batch-process task snapshots."""

    try:
        settings = Settings.from_env()
        settings.validate()
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    setup_logging(settings.log_level_value)


@task_engine.command("summary")
@_TASKS_FILE_OPTION
@click.option("--id", "task_id", type=int, default=None, help="Also summarize one task by id.")
def summary(tasks_file: Path | None, task_id: int | None) -> None:
    """Show counts, estimates and assignment status."""

    _emit_lines(
        _run(TASK_CONTROLLER.summary, SummaryCommand(tasks_file=tasks_file, task_id=task_id)),
    )


@task_engine.command("top")
@_TASKS_FILE_OPTION
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="How many tasks to print. Defaults to TASK_ENGINE_TOP_PRIORITY_LIMIT.",
)
def top(tasks_file: Path | None, limit: int | None) -> None:
    """List the highest-priority tasks."""

    _emit_lines(_run(TASK_CONTROLLER.top, TopCommand(tasks_file=tasks_file, limit=limit)))


@task_engine.command("tags")
@_TASKS_FILE_OPTION
@click.option(
    "--sorted/--unique",
    "sort_all",
    default=False,
    show_default=True,
    help="Print every tag occurrence sorted, or only distinct tags.",
)
def tags(tasks_file: Path | None, sort_all: bool) -> None:
    """List task tags."""

    _emit_lines(_run(TASK_CONTROLLER.tags, TagsCommand(tasks_file=tasks_file, sort_all=sort_all)))


@task_engine.command("batches")
@_TASKS_FILE_OPTION
@click.option(
    "--batch-size",
    type=int,
    default=None,
    help="Tasks per batch. Defaults to TASK_ENGINE_BATCH_SIZE.",
)
def batches(tasks_file: Path | None, batch_size: int | None) -> None:
    """Split tasks into contiguous batches and print each one."""

    _emit_lines(
        _run(
            TASK_CONTROLLER.batches,
            BatchesCommand(tasks_file=tasks_file, batch_size=batch_size),
        ),
    )


def _run(handler: Callable[[Any], list[str]], command: object) -> list[str]:
    try:
        return handler(command)
    except (TaskEngineError, ValueError) as error:
        raise click.ClickException(str(error)) from error


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    task_engine()

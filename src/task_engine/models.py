"""Task entity consumed by the analyzer and the processing engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TypeVar

from task_engine.errors import InvalidTaskError


class TaskStatus(str, Enum):
    """Lifecycle states for tasks."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority levels, ordered by ``rank``."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {priority: index for index, priority in enumerate(TaskPriority)}

E = TypeVar("E", bound=Enum)


@dataclass(slots=True, frozen=True)
class Task:
    """Immutable task record."""

    id: int
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: frozenset[str] = field(default_factory=frozenset)
    estimated_hours: int | None = None
    due_date: datetime | None = None
    description: str = ""
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise InvalidTaskError(
                message=f"Task {self.id!r} must have a non-empty title.",
                code="empty_title",
                field_name="title",
            )
        if self.estimated_hours is not None and self.estimated_hours < 0:
            raise InvalidTaskError(
                message=(
                    f"Task {self.id!r} estimated_hours must be >= 0, got {self.estimated_hours}."
                ),
                code="negative_estimate",
                field_name="estimated_hours",
            )
        if isinstance(self.tags, str):
            object.__setattr__(self, "tags", frozenset({self.tags}))
        elif not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))
        if self.due_date is not None and self.due_date.tzinfo is None:
            object.__setattr__(self, "due_date", self.due_date.replace(tzinfo=UTC))

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Return True when the due date has passed and the task is not done."""

        if self.due_date is None or self.status == TaskStatus.DONE:
            return False
        if now is None:
            now = datetime.now(tz=UTC)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return self.due_date < now

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> Task:
        """Build a task from a JSON-style mapping."""

        missing = [key for key in ("id", "title") if key not in payload]
        if missing:
            raise InvalidTaskError(
                message=f"Task payload is missing required key {missing[0]!r}.",
                code="missing_field",
                field_name=missing[0],
            )
        title = payload["title"]
        if not isinstance(title, str):
            raise InvalidTaskError(
                message=f"Task payload title must be a string, got {title!r}.",
                code="invalid_title",
                field_name="title",
            )

        return cls(
            id=_parse_int(payload["id"], "id"),
            title=title,
            status=_parse_enum(TaskStatus, payload.get("status"), TaskStatus.TODO, "status"),
            priority=_parse_enum(
                TaskPriority,
                payload.get("priority"),
                TaskPriority.MEDIUM,
                "priority",
            ),
            tags=frozenset(_parse_tags(payload.get("tags"))),
            estimated_hours=_parse_optional_int(
                payload.get("estimated_hours"),
                "estimated_hours",
            ),
            due_date=_parse_optional_datetime(payload.get("due_date"), "due_date"),
            description=str(payload.get("description") or ""),
            created_at=_parse_optional_datetime(payload.get("created_at"), "created_at"),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "tags": sorted(self.tags),
            "estimated_hours": self.estimated_hours,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def _parse_enum(enum_type: type[E], raw: object, default: E, field_name: str) -> E:
    if raw is None:
        return default
    token = str(raw).strip()
    for member in enum_type:
        if token in (member.value, member.name):
            return member
    raise InvalidTaskError(
        message=f"Unknown {field_name} value: {raw!r}.",
        code=f"invalid_{field_name}",
        field_name=field_name,
    )


def _parse_tags(raw: object) -> Iterable[str]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (part.strip() for part in raw.split(",") if part.strip())
    if isinstance(raw, Iterable):
        return (str(item) for item in raw)
    raise InvalidTaskError(
        message=f"Task tags must be a list of strings, got {raw!r}.",
        code="invalid_tags",
        field_name="tags",
    )


def _parse_int(raw: object, field_name: str) -> int:
    # bool is an int subclass; floats and numeric strings are not coerced.
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidTaskError(
            message=f"Invalid {field_name} value: {raw!r} (expected an integer).",
            code=f"invalid_{field_name}",
            field_name=field_name,
        )
    return raw


def _parse_optional_int(raw: object, field_name: str) -> int | None:
    if raw is None:
        return None
    return _parse_int(raw, field_name)


def _parse_optional_datetime(raw: object, field_name: str) -> datetime | None:
    if raw is None or raw == "":
        return None
    try:
        parsed = datetime.fromisoformat(str(raw))
    except ValueError as error:
        raise InvalidTaskError(
            message=f"Invalid {field_name} timestamp: {raw!r}.",
            code=f"invalid_{field_name}",
            field_name=field_name,
        ) from error
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed

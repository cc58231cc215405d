# src/homework_reminder/tasks/task_models.py

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

SUBJECT_THEORY = "theory submission"
SUBJECT_TEST = "test"

DEFAULT_SUBJECT = SUBJECT_THEORY


class RecordDecodeError(ValueError):
    """A stored record is missing a required field or has a wrong type."""


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class TaskRecord:
    """
    One homework item.

    Notes:
    - `id` is generated once and never changes, including across store round trips.
    - `due_date` is always timezone-aware (naive values are treated as UTC).
    """

    title: str
    due_date: datetime
    details: str = ""
    is_completed: bool = False
    subject: str = DEFAULT_SUBJECT
    id: str = field(default_factory=new_task_id)

    def is_overdue(self, now: datetime) -> bool:
        return self.due_date < now

    # ---- wire format ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "details": self.details,
            "dueDate": _format_date(self.due_date),
            "isCompleted": self.is_completed,
            "subject": self.subject,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> TaskRecord:
        if not isinstance(raw, dict):
            raise RecordDecodeError(f"record must be an object, got {type(raw).__name__}")

        title = raw.get("title")
        if not isinstance(title, str):
            raise RecordDecodeError("title is required")

        if "dueDate" not in raw:
            raise RecordDecodeError("dueDate is required")
        due_date = _parse_date(raw["dueDate"])

        raw_id = raw.get("id")
        if raw_id is None:
            task_id = new_task_id()
        elif isinstance(raw_id, str) and raw_id.strip():
            task_id = raw_id
        else:
            raise RecordDecodeError("id must be a non-empty string")

        details = raw.get("details", "")
        if details is None:
            details = ""
        if not isinstance(details, str):
            raise RecordDecodeError("details must be a string")

        is_completed = raw.get("isCompleted", False)
        if is_completed is None:
            is_completed = False
        if not isinstance(is_completed, bool):
            raise RecordDecodeError("isCompleted must be a boolean")

        subject = raw.get("subject") or DEFAULT_SUBJECT
        if not isinstance(subject, str):
            raise RecordDecodeError("subject must be a string")

        return cls(
            id=task_id,
            title=title,
            details=details,
            due_date=due_date,
            is_completed=is_completed,
            subject=subject,
        )


def _format_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


def _parse_date(raw: Any) -> datetime:
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw, bool):
        raise RecordDecodeError("dueDate must be a date string or timestamp")

    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw), tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise RecordDecodeError(f"dueDate timestamp out of range: {raw!r}") from e

    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as e:
            raise RecordDecodeError(f"dueDate is not ISO-8601: {raw!r}") from e
        return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)

    raise RecordDecodeError("dueDate must be a date string or timestamp")


def display_order(tasks: Iterable[TaskRecord]) -> list[TaskRecord]:
    """Incomplete first, then by ascending due date. Never mutates the input."""
    return sorted(tasks, key=lambda t: (t.is_completed, t.due_date))


def active_count(tasks: Iterable[TaskRecord]) -> int:
    return sum(1 for t in tasks if not t.is_completed)


def completion_progress(tasks: Sequence[TaskRecord]) -> float:
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.is_completed)
    return done / len(tasks)

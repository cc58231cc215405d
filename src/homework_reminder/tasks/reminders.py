# src/homework_reminder/tasks/reminders.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

from .task_models import TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_LEAD = timedelta(hours=1)
REMINDER_BODY = "Time to get ready!"


@dataclass(slots=True, frozen=True)
class ReminderRequest:
    """
    What we ask the notification subsystem to deliver.

    `identifier` is the task id, so re-scheduling the same task replaces the old request.
    """

    identifier: str
    title: str
    body: str
    fire_at: datetime


def build_reminder(task: TaskRecord, *, lead: timedelta = DEFAULT_LEAD) -> ReminderRequest:
    return ReminderRequest(
        identifier=task.id,
        title=f"{task.subject}: {task.title}",
        body=REMINDER_BODY,
        fire_at=task.due_date - lead,
    )


class LoggingReminderScheduler:
    """
    Stand-in for the host notification center.

    Keeps pending requests in memory (keyed by identifier) and logs them.
    Delivery is out of scope; the console host lists them with /reminders.
    """

    def __init__(self) -> None:
        self._pending: dict[str, ReminderRequest] = {}
        self._lock = threading.Lock()

    def schedule(self, request: ReminderRequest) -> None:
        with self._lock:
            self._pending[request.identifier] = request
        logger.info(
            "Reminder scheduled id=%s fire_at=%s title=%r",
            request.identifier,
            request.fire_at.isoformat(),
            request.title,
        )

    def pending(self) -> list[ReminderRequest]:
        with self._lock:
            return sorted(self._pending.values(), key=lambda r: r.fire_at)

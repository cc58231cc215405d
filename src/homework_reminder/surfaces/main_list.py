# src/homework_reminder/surfaces/main_list.py

"""
Main list surface.

Holds a private in-memory copy of the task collection and mutates it in place.
Every mutation saves the full in-memory list without reloading first, so an
append made by the share-ingest surface after our last refresh() is overwritten
(last-writer-wins, accepted). refresh() on activation and on every return to the
foreground keeps that window small.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from ..core.ports import ReminderScheduler, TaskRepo
from ..tasks.reminders import DEFAULT_LEAD, build_reminder
from ..tasks.task_models import (
    DEFAULT_SUBJECT,
    TaskRecord,
    active_count,
    completion_progress,
    display_order,
)

logger = logging.getLogger(__name__)


class TaskListController:
    def __init__(
        self,
        store: TaskRepo,
        *,
        reminders: ReminderScheduler | None = None,
        reminder_lead: timedelta = DEFAULT_LEAD,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._reminders = reminders
        self._reminder_lead = reminder_lead
        self._clock = clock or (lambda: datetime.now(UTC))
        self._tasks: list[TaskRecord] = []

    @property
    def tasks(self) -> list[TaskRecord]:
        """Stored order (insertion order). Returns a copy."""
        return list(self._tasks)

    # ---- lifecycle ----

    def activate(self) -> None:
        self.refresh()

    def did_enter_foreground(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        self._tasks = self._store.load()
        logger.debug("Main list refreshed: %d tasks", len(self._tasks))

    # ---- mutations ----

    def toggle_completion(self, task_id: str) -> TaskRecord | None:
        task = self._find(task_id)
        if task is None:
            logger.info("toggle_completion: unknown task id=%s", task_id)
            return None

        task.is_completed = not task.is_completed
        self._store.save(self._tasks)
        logger.info("Task %s completed=%s", task.id, task.is_completed)
        return task

    def delete(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) == before:
            logger.info("delete: unknown task id=%s", task_id)
            return False

        self._store.save(self._tasks)
        logger.info("Task %s deleted", task_id)
        return True

    @staticmethod
    def can_create(title: str) -> bool:
        return bool(title and title.strip())

    def create(
        self,
        title: str,
        details: str = "",
        due_date: datetime | None = None,
        subject: str = DEFAULT_SUBJECT,
    ) -> TaskRecord | None:
        """
        Append a new task and save. Returns None when the title is empty.

        If the save succeeded, a reminder one lead interval before the due date is
        scheduled best-effort.
        """
        if not self.can_create(title):
            logger.debug("create rejected: empty title")
            return None

        task = TaskRecord(
            title=title.strip(),
            details=details or "",
            due_date=due_date if due_date is not None else self._clock(),
            subject=subject or DEFAULT_SUBJECT,
        )
        self._tasks.append(task)
        err = self._store.save(self._tasks)
        logger.info("Task %s created due=%s", task.id, task.due_date.isoformat())

        # Only remind about tasks that actually reached the store.
        if err is None:
            self._schedule_reminder(task)
        return task

    # ---- display ----

    def sorted_tasks(self) -> list[TaskRecord]:
        return display_order(self._tasks)

    @property
    def active_count(self) -> int:
        return active_count(self._tasks)

    @property
    def progress(self) -> float:
        return completion_progress(self._tasks)

    # ---- helpers ----

    def _find(self, task_id: str) -> TaskRecord | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def _schedule_reminder(self, task: TaskRecord) -> None:
        if self._reminders is None:
            return
        try:
            self._reminders.schedule(build_reminder(task, lead=self._reminder_lead))
        except Exception:
            logger.exception("Reminder scheduling failed task_id=%s (ignored)", task.id)

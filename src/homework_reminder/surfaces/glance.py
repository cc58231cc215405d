# src/homework_reminder/surfaces/glance.py

from __future__ import annotations

"""
Glance surface (home-screen widget equivalent).

A read-only projection of the shared store: on every refresh it loads the
collection, keeps incomplete tasks and shows the one with the earliest due date.
It never saves and never sees the main list's in-memory state.

Refreshes happen on a fixed interval and whenever the store fires the
"reload all" signal (GlanceCenter).
"""

import asyncio
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ..core.ports import TaskRepo
from ..tasks.task_models import SUBJECT_TEST, TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = timedelta(minutes=10)


@dataclass(slots=True, frozen=True)
class GlanceEntry:
    """One rendered state. task=None is the "nothing pending" sentinel."""

    date: datetime
    task: TaskRecord | None


@dataclass(slots=True, frozen=True)
class GlanceTimeline:
    entries: list[GlanceEntry]
    next_refresh: datetime


def select_most_urgent(tasks: Iterable[TaskRecord]) -> TaskRecord | None:
    """Earliest due date among incomplete tasks; ties keep stored order."""
    pending = [t for t in tasks if not t.is_completed]
    if not pending:
        return None
    return min(pending, key=lambda t: t.due_date)


class GlanceProvider:
    def __init__(
        self,
        store: TaskRepo,
        *,
        refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._refresh_interval = refresh_interval
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def refresh_interval(self) -> timedelta:
        return self._refresh_interval

    def placeholder(self, now: datetime | None = None) -> GlanceEntry:
        now = now or self._clock()
        return GlanceEntry(
            date=now,
            task=TaskRecord(title="Loading...", details="", due_date=now, subject=SUBJECT_TEST),
        )

    def snapshot(self, now: datetime | None = None) -> GlanceEntry:
        now = now or self._clock()
        return GlanceEntry(
            date=now,
            task=TaskRecord(title="Sample assignment", details="", due_date=now, subject=SUBJECT_TEST),
        )

    def timeline(self, now: datetime | None = None) -> GlanceTimeline:
        now = now or self._clock()
        task = select_most_urgent(self._store.load())
        return GlanceTimeline(
            entries=[GlanceEntry(date=now, task=task)],
            next_refresh=now + self._refresh_interval,
        )


def format_entry(entry: GlanceEntry, now: datetime | None = None) -> str:
    task = entry.task
    if task is None:
        return "All done!"

    now = now or entry.date
    delta = task.due_date - now
    overdue = delta.total_seconds() < 0
    minutes = int(abs(delta.total_seconds()) // 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days:
        span = f"{days}d {hours}h"
    elif hours:
        span = f"{hours}h {minutes}m"
    else:
        span = f"{minutes}m"

    when = f"overdue by {span}" if overdue else f"due in {span}"
    return f"[{task.subject.upper()}] {task.title} ({when})"


class GlanceCenter:
    """
    In-process stand-in for the host's "reload all widgets" call.

    Refreshers register a wake-up callback; reload_all() invokes them all.
    Fire-and-forget: listener failures are logged and never reach the caller.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[], None]] = []
        self._lock = threading.Lock()
        self.reload_count = 0

    def add_listener(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    def reload_all(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
            self.reload_count += 1

        for cb in listeners:
            try:
                cb()
            except Exception:
                logger.debug("Glance reload listener failed.", exc_info=True)


async def run_glance_refresher(
        provider: GlanceProvider,
        center: GlanceCenter | None,
        *,
        on_entry: Callable[[GlanceEntry], None],
        interval_seconds: float | None = None,
) -> None:
    """
    Rebuild the glance timeline forever.

    Wakes up:
    - every interval_seconds (defaults to the provider's refresh interval),
    - immediately after center.reload_all() (safe to call from any thread).

    To stop the refresher, cancel the coroutine/task.
    """
    if interval_seconds is None:
        interval_seconds = provider.refresh_interval.total_seconds()
    sleep_s = max(0.05, float(interval_seconds))

    loop = asyncio.get_running_loop()
    wake = asyncio.Event()

    def _wake() -> None:
        loop.call_soon_threadsafe(wake.set)

    if center is not None:
        center.add_listener(_wake)

    try:
        while True:
            try:
                timeline = provider.timeline()
            except Exception:
                logger.exception("Glance timeline build failed")
                timeline = None

            if timeline is not None:
                for entry in timeline.entries:
                    try:
                        on_entry(entry)
                    except Exception:
                        logger.exception("Glance on_entry callback failed")

            try:
                await asyncio.wait_for(wake.wait(), timeout=sleep_s)
            except TimeoutError:
                pass
            wake.clear()
    finally:
        if center is not None:
            center.remove_listener(_wake)

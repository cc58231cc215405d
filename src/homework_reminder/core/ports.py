# src/homework_reminder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the surfaces.

Surfaces depend on Protocols instead of concrete implementations.
This keeps the shared namespace, the host's refresh signal and the notification
subsystem swappable, and lets tests run every surface against in-memory fakes.
"""

from collections.abc import Awaitable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.reminders import ReminderRequest
    from ..tasks.task_models import TaskRecord
    from ..tasks.task_store import StoreError


class SharedDefaults(Protocol):
    """Key-value namespace shared by all surfaces of one app group. Values are raw bytes."""

    def data(self, key: str) -> bytes | None: ...
    def set_data(self, key: str, value: bytes) -> None: ...
    def remove(self, key: str) -> None: ...


class RefreshNotifier(Protocol):
    """
    Host-side "reload all glance surfaces" signal.

    Fire-and-forget: no return value, no delivery guarantee.
    """

    def reload_all(self) -> None: ...


class TaskRepo(Protocol):
    """
    Whole-collection task persistence.

    save() always takes the full sequence: writers must load, apply their delta,
    then save, or they overwrite changes made elsewhere since their last load.
    """

    def load(self) -> list[TaskRecord]: ...
    def save(self, tasks: Sequence[TaskRecord]) -> StoreError | None: ...


class ReminderScheduler(Protocol):
    """Host notification subsystem (best-effort, no retry/dedup)."""

    def schedule(self, request: ReminderRequest) -> None: ...


class DateDetector(Protocol):
    """Best-effort `text -> datetime | None`. None means nothing date-like was found."""

    def detect(self, text: str, *, now: datetime) -> datetime | None: ...


class ExtensionContext(Protocol):
    """Share-pipeline host. complete_request() must be called exactly once per post."""

    def complete_request(self) -> None: ...


class TextAttachment(Protocol):
    """Asynchronous text extraction from a shared attachment."""

    def load_text(self) -> Awaitable[str | None]: ...

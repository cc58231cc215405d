# src/homework_reminder/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import RefreshNotifier, SharedDefaults
from .task_models import RecordDecodeError, TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "SavedTasks"


class StoreError(Exception):
    """Base class for store failures. Never propagated out of TaskStore."""


class StoreUnavailable(StoreError):
    """The shared namespace could not be opened, read or written."""


class DecodeFailure(StoreError):
    """The stored payload does not parse as a task collection."""


class EncodeFailure(StoreError):
    """The task collection could not be serialized."""


def encode_tasks(tasks: Sequence[TaskRecord]) -> bytes:
    try:
        payload = [t.to_dict() for t in tasks]
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise EncodeFailure(str(e)) from e


def decode_tasks(data: bytes) -> list[TaskRecord]:
    """
    Decode a stored payload.

    All-or-nothing: one malformed record makes the whole payload undecodable.
    Optional fields fall back to their defaults; unknown fields are ignored.
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeFailure(f"payload is not JSON: {e}") from e

    if not isinstance(raw, list):
        raise DecodeFailure(f"payload must be a list, got {type(raw).__name__}")

    try:
        return [TaskRecord.from_dict(item) for item in raw]
    except RecordDecodeError as e:
        raise DecodeFailure(str(e)) from e


class TaskStore:
    """
    Single point of truth for the serialized task collection.

    The whole collection lives as one JSON value at a fixed key in the shared
    namespace. There is no locking and no merge:

    - load() reads the full value,
    - save() overwrites the full value (whole-collection replace).

    Two writers that load the same state and save one after the other lose the
    first writer's changes (last-writer-wins). This is accepted: writes from
    different surfaces are rare and separated by user interaction.

    Failures never escape: loads degrade to [], saves to a no-op returning the error.
    """

    def __init__(
        self,
        defaults: SharedDefaults | None,
        *,
        key: str = DEFAULT_TASKS_KEY,
        notifier: RefreshNotifier | None = None,
    ) -> None:
        self._defaults = defaults
        self._key = key
        self._notifier = notifier

    @property
    def key(self) -> str:
        return self._key

    @property
    def available(self) -> bool:
        return self._defaults is not None

    def set_notifier(self, notifier: RefreshNotifier | None) -> None:
        self._notifier = notifier

    # ---- public API ----

    def raw_payload(self) -> bytes | None:
        if self._defaults is None:
            return None
        try:
            return self._defaults.data(self._key)
        except Exception:
            logger.exception("Shared namespace read failed key=%s", self._key)
            return None

    def load(self) -> list[TaskRecord]:
        if self._defaults is None:
            logger.warning("load: shared namespace unavailable; returning empty list")
            return []

        try:
            data = self._defaults.data(self._key)
        except Exception:
            logger.exception("load: shared namespace read failed key=%s", self._key)
            return []

        if data is None:
            return []

        try:
            tasks = decode_tasks(data)
        except DecodeFailure as e:
            logger.warning("load: undecodable payload key=%s (%s); returning empty list", self._key, e)
            return []

        logger.debug("load: %d tasks key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Sequence[TaskRecord]) -> StoreError | None:
        """
        Overwrite the stored collection with `tasks`.

        Returns None on success, otherwise the StoreError explaining why nothing was written.
        On success the refresh notifier is fired; its failures do not fail the save.
        """
        if self._defaults is None:
            logger.warning("save: shared namespace unavailable; %d tasks not written", len(tasks))
            return StoreUnavailable("shared namespace unavailable")

        try:
            data = encode_tasks(tasks)
        except EncodeFailure as e:
            logger.exception("save: failed to encode %d tasks", len(tasks))
            return e

        try:
            self._defaults.set_data(self._key, data)
        except Exception as e:
            logger.exception("save: shared namespace write failed key=%s", self._key)
            return StoreUnavailable(str(e))

        logger.debug("save: %d tasks key=%s", len(tasks), self._key)
        self._notify()
        return None

    def append(self, task: TaskRecord) -> StoreError | None:
        """Read-modify-write: load the current collection, append `task`, save."""
        tasks = self.load()
        tasks.append(task)
        return self.save(tasks)

    def _notify(self) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.reload_all()
        except Exception:
            logger.exception("Refresh notifier failed (ignored)")

# src/homework_reminder/surfaces/share_ingest.py

"""
Share-ingest surface (share extension equivalent).

Write-only append path: turns text shared from another app into exactly one
new task and appends it with load -> append -> save. Nothing here fails
outward; the worst case is a task with a guessed due date.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from ..core.ports import DateDetector, ExtensionContext, TextAttachment
from ..tasks.date_detection import RegexDateDetector
from ..tasks.task_models import TaskRecord
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE = "New assignment"
PLACEHOLDER_DETAILS = "Link or file from a shared message"
SHARED_TITLE = "Shared item"
DEFAULT_FALLBACK_DELAY = timedelta(hours=24)


def _local_now() -> datetime:
    # Times written in shared text are wall-clock times in the user's zone.
    return datetime.now().astimezone()


class ShareIngestor:
    def __init__(
        self,
        store: TaskStore,
        *,
        detector: DateDetector | None = None,
        fallback_delay: timedelta = DEFAULT_FALLBACK_DELAY,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._detector = detector or RegexDateDetector()
        self._fallback_delay = fallback_delay
        self._clock = clock or _local_now

    @staticmethod
    def is_content_valid(text: str | None) -> bool:
        # Posting is always allowed; empty input becomes a placeholder task.
        return True

    def ingest(self, shared_text: str | None) -> TaskRecord:
        text = (shared_text or "").strip()
        details = text or PLACEHOLDER_DETAILS
        title = SHARED_TITLE if text else PLACEHOLDER_TITLE

        now = self._clock()
        due_date = self._detect(details, now)
        if due_date is None:
            due_date = now + self._fallback_delay
            logger.debug("No date found in shared text; due date set to %s", due_date.isoformat())

        task = TaskRecord(title=title, details=details, due_date=due_date)
        err = self._store.append(task)
        if err is not None:
            logger.warning("Shared task %s was not saved: %s", task.id, err)
        else:
            logger.info("Shared task %s saved due=%s", task.id, task.due_date.isoformat())
        return task

    async def handle_post(
        self,
        host: ExtensionContext,
        content_text: str | None,
        attachment: TextAttachment | None = None,
    ) -> TaskRecord:
        """
        Host entry point for a share post.

        If the composed text is empty, waits for the attachment's text first.
        Either way ingest() runs exactly once and host.complete_request() is
        called exactly once, after the task is saved.
        """
        text = content_text or ""

        if not text and attachment is not None:
            try:
                loaded = await attachment.load_text()
            except Exception:
                logger.exception("Attachment text extraction failed; using empty text")
                loaded = None
            text = loaded or ""

        try:
            return self.ingest(text)
        finally:
            try:
                host.complete_request()
            except Exception:
                logger.exception("complete_request failed")

    def _detect(self, text: str, now: datetime) -> datetime | None:
        try:
            return self._detector.detect(text, now=now)
        except Exception:
            logger.exception("Date detector crashed; treating as a miss")
            return None

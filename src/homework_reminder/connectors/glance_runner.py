# src/homework_reminder/connectors/glance_runner.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from ..core.state import AppState
from ..surfaces.glance import GlanceEntry, format_entry, run_glance_refresher

logger = logging.getLogger(__name__)


@dataclass
class GlanceBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task[None]

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.task.cancel)
        except Exception:
            logger.debug("Failed to signal glance stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_glance_in_background(state: AppState) -> GlanceBackgroundRunner | None:
    """
    Start the glance refresher in a background thread.

    Why a thread:
    - console REPL is blocking (input()).
    - the refresher is async and wants its own event loop.
    """
    if not state.settings.glance_enabled:
        logger.info("Glance surface disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def on_entry(entry: GlanceEntry) -> None:
        previous = state.last_glance
        state.last_glance = entry
        if previous is None or previous.task != entry.task:
            logger.info("Glance updated: %s", format_entry(entry))

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        task = loop.create_task(
            run_glance_refresher(state.glance, state.glance_center, on_entry=on_entry)
        )

        holder["loop"] = loop
        holder["task"] = task
        ready.set()

        try:
            with contextlib.suppress(asyncio.CancelledError):
                loop.run_until_complete(task)
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="glance-refresher", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    task = holder.get("task")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(task, asyncio.Task):
        logger.error("Glance thread did not initialize properly.")
        return None

    logger.info("Glance background thread started.")
    return GlanceBackgroundRunner(thread=t, loop=loop, task=task)

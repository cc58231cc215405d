# src/homework_reminder/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..surfaces.glance import GlanceCenter, GlanceEntry, GlanceProvider
from ..surfaces.main_list import TaskListController
from ..surfaces.share_ingest import ShareIngestor
from ..tasks.reminders import LoggingReminderScheduler
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskStore
    main: TaskListController
    glance: GlanceProvider
    ingestor: ShareIngestor
    glance_center: GlanceCenter
    reminders: LoggingReminderScheduler

    # Latest entry produced by the background glance refresher (None until the first run).
    last_glance: GlanceEntry | None = None
    lock: threading.Lock = field(default_factory=threading.Lock)

# src/homework_reminder/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens one shared-namespace handle per surface (as separate processes would),
- wires stores, surfaces and host stand-ins into AppState.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..config import get_settings
from ..core.state import AppState
from ..storage.shared_defaults import open_shared_defaults
from ..surfaces.glance import GlanceCenter, GlanceProvider
from ..surfaces.main_list import TaskListController
from ..surfaces.share_ingest import ShareIngestor
from ..tasks.date_detection import RegexDateDetector
from ..tasks.reminders import LoggingReminderScheduler
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.shared_db_path.parent.mkdir(parents=True, exist_ok=True)


def _open_store(settings, *, notifier: GlanceCenter | None) -> TaskStore:
    defaults = open_shared_defaults(settings.shared_db_path, settings.app_group)
    return TaskStore(defaults, key=settings.tasks_key, notifier=notifier)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    center = GlanceCenter()
    reminders = LoggingReminderScheduler()

    store = _open_store(settings, notifier=center)
    main = TaskListController(
        store,
        reminders=reminders,
        reminder_lead=timedelta(minutes=settings.reminder_lead_minutes),
    )
    # The glance surface only reads, so its store never fires the reload signal.
    glance = GlanceProvider(
        _open_store(settings, notifier=None),
        refresh_interval=timedelta(minutes=settings.glance_refresh_minutes),
    )
    ingestor = ShareIngestor(
        _open_store(settings, notifier=center),
        detector=RegexDateDetector(),
        fallback_delay=timedelta(hours=settings.ingest_fallback_hours),
    )

    main.activate()
    logger.info("Main list activated with %d tasks", len(main.tasks))

    return AppState(
        settings=settings,
        store=store,
        main=main,
        glance=glance,
        ingestor=ingestor,
        glance_center=center,
        reminders=reminders,
    )

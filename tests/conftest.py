# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from homework_reminder.cli.bootstrap import create_initial_state
from homework_reminder.core.state import AppState
from homework_reminder.storage.shared_defaults import InMemorySharedDefaults
from homework_reminder.tasks.task_store import TaskStore

from .fakes import RecordingNotifier

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def clock():
    return lambda: NOW


@pytest.fixture()
def defaults() -> InMemorySharedDefaults:
    """One namespace shared by every surface in a test."""
    return InMemorySharedDefaults("group.test")


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def store(defaults: InMemorySharedDefaults, notifier: RecordingNotifier) -> TaskStore:
    return TaskStore(defaults, notifier=notifier)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with create_initial_state().

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="homework-test",
        log_level="DEBUG",
        console_enabled=False,
        glance_enabled=False,
        data_dir=tmp_path,
        shared_db_path=tmp_path / "shared_defaults.sqlite3",
        app_group="group.test",
        tasks_key="SavedTasks",
        glance_refresh_minutes=10,
        reminder_lead_minutes=60,
        ingest_fallback_hours=24,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired from real components.

    NOTE: We keep the real SQLite namespace here because the surfaces only
    see each other through it.
    """
    return create_initial_state(settings=settings)

# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from homework_reminder.storage.shared_defaults import InMemorySharedDefaults
from homework_reminder.tasks.task_models import TaskRecord
from homework_reminder.tasks.task_store import StoreUnavailable, TaskStore

from .fakes import FailingDefaults, FailingNotifier, RecordingNotifier


def _task(task_id: str, day: int = 1, done: bool = False) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        title=f"task {task_id}",
        details=f"details {task_id}",
        due_date=datetime(2025, 1, day, 9, 0, tzinfo=UTC),
        is_completed=done,
    )


def test_save_then_load_returns_last_saved_collection(store: TaskStore) -> None:
    first = [_task("A"), _task("B", 2, done=True)]
    second = [_task("C", 3)]

    assert store.save(first) is None
    assert store.load() == first

    assert store.save(second) is None
    assert store.load() == second

    assert store.save([]) is None
    assert store.load() == []


def test_load_on_empty_namespace_returns_empty(store: TaskStore) -> None:
    assert store.load() == []


@pytest.mark.parametrize(
    "payload",
    [
        b"not json",
        b"\xff\xfe\x00",
        b'{"id": "A"}',
        b'[{"id": "A", "title": "t", "dueDate": "2025-01-01T00:00:00Z"}, {"id": "B"}]',
        b"null",
    ],
)
def test_load_on_corrupted_payload_returns_empty(
    defaults: InMemorySharedDefaults, store: TaskStore, payload: bytes
) -> None:
    defaults.set_data(store.key, payload)
    assert store.load() == []


def test_unavailable_namespace_degrades_gracefully() -> None:
    notifier = RecordingNotifier()
    store = TaskStore(None, notifier=notifier)

    assert store.available is False
    assert store.load() == []
    err = store.save([_task("A")])
    assert isinstance(err, StoreUnavailable)
    assert notifier.calls == 0


def test_failing_namespace_degrades_gracefully() -> None:
    notifier = RecordingNotifier()
    store = TaskStore(FailingDefaults(), notifier=notifier)

    assert store.load() == []
    assert isinstance(store.save([_task("A")]), StoreUnavailable)
    assert store.raw_payload() is None
    assert notifier.calls == 0


def test_every_successful_save_signals_refresh(store: TaskStore, notifier: RecordingNotifier) -> None:
    store.save([_task("A")])
    store.save([_task("A"), _task("B")])
    store.load()
    assert notifier.calls == 2


def test_notifier_failure_does_not_fail_save(defaults: InMemorySharedDefaults) -> None:
    store = TaskStore(defaults, notifier=FailingNotifier())
    assert store.save([_task("A")]) is None
    assert [t.id for t in store.load()] == ["A"]


def test_payload_is_a_json_array_at_the_fixed_key(defaults: InMemorySharedDefaults) -> None:
    store = TaskStore(defaults, key="SavedTasks")
    store.save([_task("A")])

    raw = json.loads(defaults.data("SavedTasks") or b"")
    assert raw == [
        {
            "id": "A",
            "title": "task A",
            "details": "details A",
            "dueDate": "2025-01-01T09:00:00+00:00",
            "isCompleted": False,
            "subject": "theory submission",
        }
    ]


def test_append_is_read_modify_write(defaults: InMemorySharedDefaults) -> None:
    store = TaskStore(defaults)
    store.save([_task("A")])
    assert store.append(_task("B")) is None
    assert [t.id for t in store.load()] == ["A", "B"]


def test_concurrent_writers_last_writer_wins_and_first_write_is_lost(
    defaults: InMemorySharedDefaults,
) -> None:
    """
    Whole-collection replace without locking: this lost write is the accepted
    behavior and must not be "fixed" silently.
    """
    TaskStore(defaults).save([_task("A")])

    writer_x = TaskStore(defaults)
    writer_y = TaskStore(defaults)

    x_tasks = writer_x.load()
    y_tasks = writer_y.load()

    y_tasks.append(_task("B"))
    assert writer_y.save(y_tasks) is None

    x_tasks.append(_task("C"))
    assert writer_x.save(x_tasks) is None

    assert [t.id for t in TaskStore(defaults).load()] == ["A", "C"]


def test_ids_survive_round_trips(defaults: InMemorySharedDefaults) -> None:
    store = TaskStore(defaults)
    original = [_task("11111111-1111-4111-8111-111111111111"), _task("B")]
    store.save(original)

    for _ in range(3):
        store.save(store.load())

    assert [t.id for t in store.load()] == [t.id for t in original]


def test_legacy_records_without_id_get_stable_ids_once_saved(defaults: InMemorySharedDefaults) -> None:
    defaults.set_data(
        "SavedTasks",
        b'[{"title": "old", "details": "", "dueDate": "2025-01-01T00:00:00Z"}]',
    )
    store = TaskStore(defaults)

    first = store.load()
    store.save(first)

    assert [t.id for t in store.load()] == [first[0].id]
    assert [t.id for t in store.load()] == [first[0].id]

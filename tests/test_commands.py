# tests/test_commands.py

from __future__ import annotations

from datetime import UTC, datetime

from homework_reminder.cli.commands import CommandRegistry, registry
from homework_reminder.surfaces.glance import GlanceEntry


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_list_done_rm_flow(state) -> None:
    reply = registry.handle(state, "/add Причастия | 5 марта в 10:00 | стр. 42 | тест")
    assert reply is not None and reply.startswith("Added: Причастия")

    listing = registry.handle(state, "/list") or ""
    assert "TEST: Причастия" in listing
    assert "стр. 42" in listing

    assert registry.handle(state, "/done 1") == "Completed: Причастия"
    assert state.main.tasks[0].is_completed is True
    assert "All done!" in (registry.handle(state, "/stats") or "")

    assert registry.handle(state, "/rm 1") == "Deleted: Причастия"
    assert state.main.tasks == []
    assert "No assignments" in (registry.handle(state, "/list") or "")


def test_add_requires_title_and_understandable_date(state) -> None:
    assert "Title is required" in (registry.handle(state, "/add  | завтра") or "")
    assert "Could not understand" in (registry.handle(state, "/add Эссе | когда-нибудь") or "")
    assert state.main.tasks == []


def test_add_schedules_reminder(state) -> None:
    registry.handle(state, "/add Эссе | tomorrow 18:00")
    assert "Эссе" in (registry.handle(state, "/reminders") or "")


def test_share_goes_through_ingest_and_refreshes_main_list(state) -> None:
    notes: list[str] = []
    reply = registry.handle(state, "/share контрольная завтра в 9:00", emit=notes.append)

    assert reply == "Main list refreshed: 1 tasks."
    assert notes and notes[0].startswith("[SHARE] Saved 'Shared item'")
    assert state.main.tasks[0].details == "контрольная завтра в 9:00"
    assert state.glance_center.reload_count == 1


def test_glance_and_raw(state) -> None:
    assert registry.handle(state, "/glance") == "Glance: All done!"
    assert registry.handle(state, "/raw") == "Nothing stored yet."

    registry.handle(state, "/add Эссе | tomorrow 18:00")

    assert "Эссе" in (registry.handle(state, "/glance") or "")
    assert '"title": "Эссе"' in (registry.handle(state, "/raw") or "")


def test_unknown_task_reference(state) -> None:
    assert registry.handle(state, "/done 7") == "No such task: 7"
    assert registry.handle(state, "/rm zzz") == "No such task: zzz"
    assert registry.handle(state, "/done") == "Usage: /done <number|id>"


def test_add_and_share_agree_on_the_same_sentence(state) -> None:
    registry.handle(state, "/add Эссе | 5 марта в 10:00")
    registry.handle(state, "/share встреча 5 марта в 10:00")

    added, shared = state.main.tasks
    assert added.due_date == shared.due_date


def test_glance_reflects_a_save_immediately(state) -> None:
    state.last_glance = GlanceEntry(date=datetime(2025, 1, 1, tzinfo=UTC), task=None)
    registry.handle(state, "/add Первое | 05.03.2030 в 10:00")
    registry.handle(state, "/add Второе | 01.03.2030 в 10:00")
    assert "Второе" in (registry.handle(state, "/glance") or "")

    registry.handle(state, "/done 1")
    reply = registry.handle(state, "/glance") or ""
    assert "Первое" in reply

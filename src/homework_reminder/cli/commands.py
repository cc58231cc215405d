# src/homework_reminder/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..surfaces.glance import format_entry
from ..tasks.date_detection import RegexDateDetector
from ..tasks.task_models import SUBJECT_TEST, SUBJECT_THEORY, TaskRecord

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_SUBJECT_ALIASES = {
    "test": SUBJECT_TEST,
    "тест": SUBJECT_TEST,
    "theory": SUBJECT_THEORY,
    "теория": SUBJECT_THEORY,
}


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _now_local() -> datetime:
    return datetime.now().astimezone()


def _fmt_due(task: TaskRecord) -> str:
    return task.due_date.astimezone().strftime("%Y-%m-%d %H:%M")


def _resolve(state: AppState, ref: str) -> TaskRecord | None:
    """Accept a 1-based position from /list or an id (prefix)."""
    ordered = state.main.sorted_tasks()
    if ref.isdigit():
        idx = int(ref) - 1
        return ordered[idx] if 0 <= idx < len(ordered) else None

    matches = [t for t in ordered if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.main.sorted_tasks()
    if not tasks:
        return "No assignments yet. Add one with /add or /share."

    now = _now_local()
    lines = []
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.is_completed else " "
        flag = " !" if not t.is_completed and t.is_overdue(now) else ""
        lines.append(f"{i:>2}. [{mark}] {t.subject.upper()}: {t.title} (due {_fmt_due(t)}){flag}  id={t.id[:8]}")
        if t.details and not t.is_completed:
            lines.append(f"      {t.details}")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title> | <due> | <details> | <subject>

    Only the title is required. Due is free text ("5 марта в 10:00", "tomorrow 18:00");
    without it the task is due now.
    """
    usage = "Usage: /add <title> | <due> | <details> | <test|theory>"
    fields = [f.strip() for f in " ".join(args).split("|")]
    fields += [""] * (4 - len(fields))
    title, due_text, details, subject_text = fields[:4]

    if not state.main.can_create(title):
        return "Title is required. " + usage

    due_date = None
    if due_text:
        due_date = RegexDateDetector().detect(due_text, now=_now_local())
        if due_date is None:
            return f"Could not understand the due date {due_text!r}. " + usage

    subject = SUBJECT_THEORY
    if subject_text:
        subject = _SUBJECT_ALIASES.get(subject_text.lower(), subject_text)

    task = state.main.create(title, details, due_date or _now_local(), subject)
    if task is None:
        return "Title is required. " + usage
    return f"Added: {task.title} (due {_fmt_due(task)})"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <number|id>"
    task = _resolve(state, args[0])
    if task is None:
        return f"No such task: {args[0]}"
    toggled = state.main.toggle_completion(task.id)
    if toggled is None:
        return f"No such task: {args[0]}"
    return f"{'Completed' if toggled.is_completed else 'Reopened'}: {toggled.title}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <number|id>"
    task = _resolve(state, args[0])
    if task is None or not state.main.delete(task.id):
        return f"No such task: {args[0]}"
    return f"Deleted: {task.title}"


class _ConsoleExtensionContext:
    """Host side of a console share post."""

    def __init__(self) -> None:
        self.completed = 0

    def complete_request(self) -> None:
        self.completed += 1


def cmd_share(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /share <text>

    Runs the share-ingest surface as if text was shared from another app while the
    main list was in the background, then brings the main list back to the foreground.
    """
    host = _ConsoleExtensionContext()
    task = asyncio.run(state.ingestor.handle_post(host, " ".join(args)))

    if emit:
        emit(f"[SHARE] Saved '{task.title}' (due {_fmt_due(task)}).")

    state.main.did_enter_foreground()
    return f"Main list refreshed: {len(state.main.tasks)} tasks."


def cmd_glance(state: AppState, args: list[str]) -> str:
    # Rebuilt on demand; state.last_glance may still lag behind the last save.
    entry = state.glance.timeline().entries[0]
    return f"Glance: {format_entry(entry, _now_local())}"


def cmd_refresh(state: AppState, args: list[str]) -> str:
    state.main.refresh()
    return f"Reloaded {len(state.main.tasks)} tasks from the shared store."


def cmd_stats(state: AppState, args: list[str]) -> str:
    active = state.main.active_count
    progress = int(state.main.progress * 100)
    if active == 0:
        return f"All done! Progress: {progress}%"
    return f"Remaining: {active}. Progress: {progress}%"


def cmd_reminders(state: AppState, args: list[str]) -> str:
    pending = state.reminders.pending()
    if not pending:
        return "No reminders scheduled."
    lines = ["Scheduled reminders:"]
    for r in pending:
        fire_at = r.fire_at.astimezone().strftime("%Y-%m-%d %H:%M")
        lines.append(f"  {fire_at}  {r.title} - {r.body}")
    return "\n".join(lines)


def cmd_raw(state: AppState, args: list[str]) -> str:
    payload = state.store.raw_payload()
    if payload is None:
        return "Nothing stored yet."
    return payload.decode("utf-8", errors="replace")


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List assignments (pending first, by due date).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add: /add <title> | <due> | <details> | <test|theory>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|id>.")
registry.register("rm", cmd_rm, help_text="Delete: /rm <number|id>.", aliases=["del"])
registry.register("share", cmd_share, help_text="Simulate sharing text from another app: /share <text>.")
registry.register("glance", cmd_glance, help_text="Show the most urgent pending assignment.")
registry.register("refresh", cmd_refresh, help_text="Reload the main list from the shared store.")
registry.register("stats", cmd_stats, help_text="Show remaining count and progress.")
registry.register("reminders", cmd_reminders, help_text="List scheduled reminders.")
registry.register("raw", cmd_raw, help_text="Show the raw stored payload.")

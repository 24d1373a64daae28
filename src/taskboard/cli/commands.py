# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.board import TaskBoard
from ..core.models import Task
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[
    [AppState, list[str], CommandEmitter | None], str | Awaitable[str]
]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
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

        result = handler(state, args, emit)
        if inspect.isawaitable(result):
            result = await result
        return cast(str, result)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_tasks(board: TaskBoard) -> str:
    """Numbered list as shown by the console. Empty string when there is nothing to list."""
    lines: list[str] = []
    edit = board.edit
    for i, t in enumerate(board.tasks, start=1):
        mark = "x" if t.completed else " "
        if edit is not None and edit.task_id == t.id:
            lines.append(f"{i}. [{mark}] {t.title}  (editing: {edit.text})")
        else:
            lines.append(f"{i}. [{mark}] {t.title}")
    return "\n".join(lines)


def _task_at(state: AppState, args: list[str]) -> Task | None:
    """Resolve a 1-based position from the first argument."""
    if not args:
        return None
    try:
        pos = int(args[0])
    except ValueError:
        return None
    tasks = state.board.tasks
    if pos < 1 or pos > len(tasks):
        return None
    return tasks[pos - 1]


def _list_reply(state: AppState) -> str:
    listing = render_tasks(state.board)
    return listing or "No tasks yet."


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _list_reply(state)


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    board = state.board
    store = "in-memory (offline)" if state.offline else f"hosted table {getattr(state.settings, 'table', '?')}"
    done = sum(1 for t in board.tasks if t.completed)
    editing = f"task {board.edit.task_id}" if board.edit is not None else "none"
    return (
        "Status:\n"
        f"  Store: {store}\n"
        f"  Tasks: {len(board.tasks)} ({done} done)\n"
        f"  Busy: {'yes' if board.busy else 'no'}\n"
        f"  Editing: {editing}"
    )


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title>  -> create a task with that title
    /add          -> create a task from the current draft
    """
    title = " ".join(args) if args else None
    task = await state.board.create(title)
    if task is None:
        return _list_reply(state)
    return f"Added: {task.title}\n{_list_reply(state)}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <n>         -> start editing task n (buffer = its current title)
    /edit <n> <text>  -> start editing task n with <text> in the buffer
    """
    task = _task_at(state, args)
    if task is None:
        return "Usage: /edit <n> [new title]."
    state.board.enter_edit(task.id, task.title)
    if len(args) > 1:
        state.board.set_edit_text(" ".join(args[1:]))
    return f"Editing task {args[0]}. Type the new title (or /save, /cancel).\n{_list_reply(state)}"


async def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /save         -> save the edit buffer
    /save <text>  -> replace the buffer with <text> and save
    """
    board = state.board
    if board.edit is None:
        return "Nothing is being edited. Use /edit <n> first."
    if args:
        board.set_edit_text(" ".join(args))
    await board.update()
    return _list_reply(state)


def cmd_cancel(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.board.edit is None:
        return "Nothing is being edited."
    state.board.cancel_edit()
    return "Edit cancelled."


async def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task = _task_at(state, args)
    if task is None:
        return "Usage: /toggle <n>."
    await state.board.toggle(task)
    return _list_reply(state)


async def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task = _task_at(state, args)
    if task is None:
        return "Usage: /del <n>."
    await state.board.remove(task.id)
    return _list_reply(state)


async def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Wait...")
    await state.board.load()
    return _list_reply(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show store/busy/edit status.")
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> [new title].")
registry.register("save", cmd_save, help_text="Save the task being edited: /save [new title].")
registry.register("cancel", cmd_cancel, help_text="Discard the current edit.")
registry.register("toggle", cmd_toggle, help_text="Mark a task done/undone: /toggle <n>.", aliases=["done"])
registry.register("del", cmd_del, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("reload", cmd_reload, help_text="Fetch the list from the store again.")

# src/taskboard/core/board.py

"""
TaskBoard: the in-memory list of tasks kept in sync with the remote store.

This module is view-agnostic:
- the view calls operations (load/create/update/toggle/remove, edit buffers),
- the board talks to the injected RemoteStore and tells listeners what changed,
- the view decides how to render (console, tests, ...).

Key invariants:
- each mutating operation makes exactly one remote call and, only after it
  succeeded, applies one local update (local state never runs ahead of the store),
- a failed remote call leaves local state untouched and is reported through the Notifier,
- the list never holds two tasks with the same id; updates target by id only,
- at most one task is in edit mode.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator

from .errors import RemoteStoreError, friendly_store_error_message
from .models import EditSession, Task, TaskId
from .ports import Listener, Notifier, RemoteStore

logger = logging.getLogger(__name__)

EMPTY_TITLE_ON_CREATE = "Write something first"
EMPTY_TITLE_ON_UPDATE = "Cannot be empty"


class LoggingNotifier:
    """Default Notifier: the user sees nothing, the log sees everything."""

    def alert(self, message: str) -> None:
        logger.info("alert: %s", message)

    def error(self, message: str) -> None:
        logger.warning("error: %s", message)


class TaskBoard:
    def __init__(self, store: RemoteStore, *, notifier: Notifier | None = None) -> None:
        self._store = store
        self.notifier: Notifier = notifier or LoggingNotifier()

        self._tasks: list[Task] = []
        self._in_flight = 0
        self._edit: EditSession | None = None
        self._draft = ""
        self._listeners: list[Listener] = []

    # ---- read-only view ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    @property
    def edit(self) -> EditSession | None:
        return self._edit

    @property
    def draft(self) -> str:
        return self._draft

    def find(self, task_id: TaskId) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- listeners ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state-change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Board listener failed.")

    @contextmanager
    def _busy(self, op: str) -> Iterator[None]:
        # Idle -> Busy -> Idle, success or failure alike.
        self._in_flight += 1
        self._changed()
        try:
            yield
        finally:
            self._in_flight -= 1
            logger.debug("%s settled (in_flight=%d)", op, self._in_flight)
            self._changed()

    def _report(self, op: str, err: RemoteStoreError) -> None:
        logger.warning("%s failed (%s): %s", op, err.kind, err)
        self.notifier.error(friendly_store_error_message(err))

    # ---- buffers (sync) ----

    def set_draft(self, text: str) -> None:
        self._draft = text
        self._changed()

    def enter_edit(self, task_id: TaskId, current_title: str) -> None:
        """Start editing task_id; any other unsaved edit is discarded."""
        prev = self._edit
        if prev is not None and prev.task_id != task_id:
            logger.debug("Discarding unsaved edit of task %s", prev.task_id)
        self._edit = EditSession(task_id=task_id, text=str(current_title))
        self._changed()

    def set_edit_text(self, text: str) -> None:
        if self._edit is None:
            raise RuntimeError("No task is in edit mode.")
        self._edit = replace(self._edit, text=text)
        self._changed()

    def cancel_edit(self) -> None:
        if self._edit is None:
            return
        self._edit = None
        self._changed()

    # ---- remote operations ----

    async def load(self) -> tuple[Task, ...]:
        """Replace the list wholesale with what the store holds. On failure keep the current list."""
        with self._busy("load"):
            try:
                fetched = await self._store.select_all()
            except RemoteStoreError as e:
                self._report("load", e)
                return self.tasks

            unique: dict[TaskId, Task] = {}
            for t in fetched:
                if t.id in unique:
                    logger.warning("Duplicate task id %s in store response; keeping the first", t.id)
                    continue
                unique[t.id] = t
            self._tasks = list(unique.values())
            logger.info("Loaded %d tasks", len(self._tasks))
        return self.tasks

    async def create(self, title: str | None = None) -> Task | None:
        """Insert a new task (defaults to the draft) and append the stored record."""
        if title is None:
            title = self._draft
        if not title.strip():
            self.notifier.alert(EMPTY_TITLE_ON_CREATE)
            return None

        with self._busy("create"):
            try:
                task = await self._store.insert_one({"title": title, "completed": False})
            except RemoteStoreError as e:
                self._report("create", e)
                return None

            if self.find(task.id) is not None:
                logger.warning("Store returned existing id %s on insert; replacing entry", task.id)
                self._tasks = [task if t.id == task.id else t for t in self._tasks]
            else:
                self._tasks.append(task)
            self._draft = ""
            logger.info("Created task %s", task.id)
        return task

    async def update(self, task_id: TaskId | None = None, new_title: str | None = None) -> bool:
        """Rename a task. Both arguments default to the current edit session."""
        session = self._edit
        if task_id is None:
            if session is None:
                raise RuntimeError("No task is in edit mode.")
            task_id = session.task_id
        if new_title is None:
            if session is None or session.task_id != task_id:
                raise RuntimeError(f"Task {task_id} is not in edit mode.")
            new_title = session.text

        if not new_title.strip():
            self.notifier.alert(EMPTY_TITLE_ON_UPDATE)
            return False

        with self._busy("update"):
            try:
                await self._store.update_by_id(task_id, {"title": new_title})
            except RemoteStoreError as e:
                self._report("update", e)
                return False

            self._tasks = [replace(t, title=new_title) if t.id == task_id else t for t in self._tasks]
            if self._edit is not None and self._edit.task_id == task_id:
                self._edit = None
            logger.info("Updated task %s", task_id)
        return True

    async def toggle(self, task: Task | TaskId) -> bool:
        """Flip the completed flag of one task."""
        if not isinstance(task, Task):
            found = self.find(task)
            if found is None:
                logger.info("toggle: unknown task id %s", task)
                return False
            task = found

        completed = not task.completed
        with self._busy("toggle"):
            try:
                await self._store.update_by_id(task.id, {"completed": completed})
            except RemoteStoreError as e:
                self._report("toggle", e)
                return False

            # Local state follows the write that resolved last.
            self._tasks = [
                replace(t, completed=completed) if t.id == task.id else t for t in self._tasks
            ]
            logger.info("Task %s -> completed=%s", task.id, completed)
        return True

    async def remove(self, task_id: TaskId) -> bool:
        with self._busy("remove"):
            try:
                await self._store.delete_by_id(task_id)
            except RemoteStoreError as e:
                self._report("remove", e)
                return False

            self._tasks = [t for t in self._tasks if t.id != task_id]
            if self._edit is not None and self._edit.task_id == task_id:
                self._edit = None
            logger.info("Removed task %s", task_id)
        return True

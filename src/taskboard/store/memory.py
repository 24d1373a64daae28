# src/taskboard/store/memory.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.models import Task, TaskId
from ..core.ports import TaskFields

logger = logging.getLogger(__name__)


class InMemoryRemoteStore:
    """
    Offline RemoteStore used for demos when no hosted table is configured.

    Behavior mirrors the hosted table:
    - ids are assigned here (increasing integers), never by the caller
    - select_all returns rows in insertion order
    - update/delete on an unknown id match nothing and succeed silently
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._rows: dict[TaskId, Task] = {}
        self._next_id = 1
        for t in tasks or []:
            self._rows[t.id] = t
            if isinstance(t.id, int):
                self._next_id = max(self._next_id, t.id + 1)
        logger.info("InMemoryRemoteStore ready total=%s", len(self._rows))

    async def select_all(self) -> list[Task]:
        return list(self._rows.values())

    async def insert_one(self, fields: TaskFields) -> Task:
        task = Task(
            id=self._next_id,
            title=str(fields.get("title") or ""),
            completed=bool(fields.get("completed", False)),
        )
        self._next_id += 1
        self._rows[task.id] = task
        return task

    async def update_by_id(self, task_id: TaskId, fields: TaskFields) -> None:
        current = self._rows.get(task_id)
        if current is None:
            return
        self._rows[task_id] = replace(
            current,
            title=str(fields["title"]) if "title" in fields else current.title,
            completed=bool(fields["completed"]) if "completed" in fields else current.completed,
        )

    async def delete_by_id(self, task_id: TaskId) -> None:
        self._rows.pop(task_id, None)

    async def aclose(self) -> None:
        """Compatibility hook for shutdown (nothing to close)."""
        return

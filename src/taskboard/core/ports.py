# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The board depends on Protocols instead of concrete implementations.
This keeps the hosted store swappable (PostgREST, in-memory) and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Mapping, Protocol

from .models import Task, TaskId

TaskFields = Mapping[str, Any]
# Model field names: {"title": ..., "completed": ...}. Stores map them to columns.


class RemoteStore(Protocol):
    """
    Hosted table of task records.

    Every failure is raised as taskboard.core.errors.RemoteStoreError.
    """

    async def select_all(self) -> list[Task]: ...
    async def insert_one(self, fields: TaskFields) -> Task: ...
    async def update_by_id(self, task_id: TaskId, fields: TaskFields) -> None: ...
    async def delete_by_id(self, task_id: TaskId) -> None: ...


class Notifier(Protocol):
    """
    View-side port: how the board tells the user about things.

    - alert: client-side validation (e.g. empty title)
    - error: a remote call failed, local state was left as it was
    """

    def alert(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


Listener = Callable[[Any], None]
# Called with the observed object after each change.

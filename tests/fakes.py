# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from taskboard.core.models import Task, TaskId
from taskboard.core.errors import RemoteStoreError
from taskboard.store.memory import InMemoryRemoteStore


class FakeRemoteStore(InMemoryRemoteStore):
    """
    In-memory RemoteStore for board tests.

    - Records every call for assertions
    - fail_next(op) makes the next call of that op raise RemoteStoreError
    - hold(op) parks calls of that op until release(op), to observe the busy flag
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        super().__init__(tasks)
        self.calls: list[tuple[str, Any]] = []
        self._fail: dict[str, RemoteStoreError] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def fail_next(self, op: str, kind: str = "network") -> None:
        self._fail[op] = RemoteStoreError(f"{op} failed", kind=kind)

    def hold(self, op: str) -> None:
        self._gates[op] = asyncio.Event()

    def release(self, op: str) -> None:
        self._gates.pop(op).set()

    async def _enter(self, op: str, arg: Any) -> None:
        self.calls.append((op, arg))
        gate = self._gates.get(op)
        if gate is not None:
            await gate.wait()
        err = self._fail.pop(op, None)
        if err is not None:
            raise err

    async def select_all(self) -> list[Task]:
        await self._enter("select_all", None)
        return await super().select_all()

    async def insert_one(self, fields) -> Task:
        await self._enter("insert_one", dict(fields))
        return await super().insert_one(fields)

    async def update_by_id(self, task_id: TaskId, fields) -> None:
        await self._enter("update_by_id", (task_id, dict(fields)))
        await super().update_by_id(task_id, fields)

    async def delete_by_id(self, task_id: TaskId) -> None:
        await self._enter("delete_by_id", task_id)
        await super().delete_by_id(task_id)


@dataclass(slots=True)
class FakeNotifier:
    """Collects alerts/errors instead of showing them."""

    alerts: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

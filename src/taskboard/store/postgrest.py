# src/taskboard/store/postgrest.py

from __future__ import annotations

"""
RemoteStore over the Supabase REST API (PostgREST).

Requests:
- select-all:   GET    /rest/v1/<table>?select=*
- insert-one:   POST   /rest/v1/<table>            Prefer: return=representation
- update-by-id: PATCH  /rest/v1/<table>?id=eq.<id>
- delete-by-id: DELETE /rest/v1/<table>?id=eq.<id>

Every failure (HTTP status, transport, unparsable body) is raised as RemoteStoreError.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..core.errors import RemoteStoreError, kind_for_status
from ..core.models import Task, TaskId, fields_to_row
from ..core.ports import TaskFields

logger = logging.getLogger(__name__)


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    # keep read >= connect as a sane baseline
    read_s = max(read_s, connect_s)
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _error_detail(response: httpx.Response) -> str:
    """PostgREST errors are JSON objects with message/details/hint; keep it defensive."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200]
    if isinstance(body, dict):
        parts = [str(body.get(k)) for k in ("message", "details", "hint") if body.get(k)]
        if parts:
            return " | ".join(parts)
    return str(body)[:200]


class PostgrestRemoteStore:
    """Async RemoteStore backed by one pooled httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "todo-app",
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url.strip():
            raise RuntimeError("Supabase URL is not set. Set TASKBOARD_SUPABASE_URL in your .env.")
        if not api_key.strip():
            raise RuntimeError("Supabase key is not set. Set TASKBOARD_SUPABASE_KEY in your .env.")

        self._table = table
        self._path = "/" + quote(table, safe="")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=_make_timeout(connect_timeout, read_timeout),
            transport=transport,
        )
        logger.info("PostgrestRemoteStore ready url=%s table=%s", base_url, table)

    async def aclose(self) -> None:
        await self._client.aclose()

    # ---- low-level helpers ----

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method, self._path, params=params, json=json, headers=headers
            )
        except httpx.TransportError as e:
            logger.info("%s %s failed: %s", method, self._table, e.__class__.__name__)
            raise RemoteStoreError(f"{method} {self._table}: {e.__class__.__name__}", kind="network") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.info("%s %s -> HTTP %s %s", method, self._table, response.status_code, detail)
            raise RemoteStoreError(
                f"{method} {self._table}: HTTP {response.status_code} {detail}".strip(),
                kind=kind_for_status(response.status_code),
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _rows(response: httpx.Response) -> list[dict[str, Any]]:
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteStoreError("Task store returned a non-JSON body.", kind="bad_response") from e
        if not isinstance(body, list) or not all(isinstance(r, dict) for r in body):
            raise RemoteStoreError("Task store returned an unexpected body.", kind="bad_response")
        return body

    @staticmethod
    def _id_filter(task_id: TaskId) -> dict[str, str]:
        return {"id": f"eq.{task_id}"}

    # ---- RemoteStore ----

    async def select_all(self) -> list[Task]:
        response = await self._request("GET", params={"select": "*"})
        rows = self._rows(response)
        try:
            tasks = [Task.from_row(r) for r in rows]
        except ValueError as e:
            raise RemoteStoreError(str(e), kind="bad_response") from e
        logger.debug("select_all -> %d rows", len(tasks))
        return tasks

    async def insert_one(self, fields: TaskFields) -> Task:
        response = await self._request(
            "POST",
            json=[fields_to_row(fields)],
            prefer="return=representation",
        )
        rows = self._rows(response)
        if not rows:
            raise RemoteStoreError("Insert returned no rows.", kind="bad_response")
        try:
            task = Task.from_row(rows[0])
        except ValueError as e:
            raise RemoteStoreError(str(e), kind="bad_response") from e
        logger.debug("insert_one -> id=%s", task.id)
        return task

    async def update_by_id(self, task_id: TaskId, fields: TaskFields) -> None:
        await self._request(
            "PATCH",
            params=self._id_filter(task_id),
            json=fields_to_row(fields),
            prefer="return=minimal",
        )
        logger.debug("update_by_id id=%s fields=%s", task_id, sorted(fields))

    async def delete_by_id(self, task_id: TaskId) -> None:
        await self._request("DELETE", params=self._id_filter(task_id))
        logger.debug("delete_by_id id=%s", task_id)

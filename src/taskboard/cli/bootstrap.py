# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- picks the RemoteStore (hosted table, or the in-memory store when offline),
- wires store, board and empty-state reveal into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.board import TaskBoard
from ..core.ports import Notifier, RemoteStore
from ..core.reveal import EmptyStateReveal
from ..core.state import AppState
from ..store.memory import InMemoryRemoteStore
from ..store.postgrest import PostgrestRemoteStore

logger = logging.getLogger(__name__)


def build_store(settings) -> tuple[RemoteStore, bool]:
    """Return (store, offline)."""
    if getattr(settings, "offline", False):
        logger.info("Offline mode forced; tasks live in memory only.")
        return InMemoryRemoteStore(), True

    try:
        store = PostgrestRemoteStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.table,
            connect_timeout=settings.connect_timeout_seconds,
            read_timeout=settings.read_timeout_seconds,
        )
        return store, False
    except RuntimeError as e:
        # Fallback for demos / local runs without a hosted table.
        logger.warning("%s Falling back to the in-memory store.", e)
        return InMemoryRemoteStore(), True


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    store, offline = build_store(settings)
    board = TaskBoard(store, notifier=notifier)
    reveal = EmptyStateReveal(
        caption=settings.empty_caption,
        interval=settings.reveal_interval_seconds,
    )
    return AppState(settings=settings, store=store, board=board, reveal=reveal, offline=offline)


async def close_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    state.reveal.stop()
    try:
        close = getattr(state.store, "aclose", None)
        if close is not None:
            await close()
    except Exception:
        logger.exception("Failed to close the task store.")

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.board import TaskBoard
from taskboard.core.models import Task
from taskboard.core.reveal import EmptyStateReveal
from taskboard.core.state import AppState

from .fakes import FakeNotifier, FakeRemoteStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        supabase_url="",
        supabase_key="",
        table="todo-app",
        offline=False,
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        empty_caption="  No Tasks Yet...",
        reveal_interval_seconds=0.0,
    )


@pytest.fixture()
def seed() -> list[Task]:
    return [
        Task(id=1, title="buy milk", completed=False),
        Task(id=2, title="walk dog", completed=True),
        Task(id=3, title="pay rent", completed=False),
    ]


@pytest.fixture()
def store(seed: list[Task]) -> FakeRemoteStore:
    return FakeRemoteStore(seed)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def board(store: FakeRemoteStore, notifier: FakeNotifier) -> TaskBoard:
    return TaskBoard(store, notifier=notifier)


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeRemoteStore, board: TaskBoard) -> AppState:
    """AppState wired with deterministic fakes and an instant reveal."""
    return AppState(
        settings=settings,
        store=store,
        board=board,
        reveal=EmptyStateReveal(caption=settings.empty_caption, interval=0.0),
        offline=True,
    )

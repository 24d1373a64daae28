# tests/test_bootstrap.py

from __future__ import annotations

import importlib
import inspect

import pytest

from taskboard.cli.bootstrap import close_state, create_initial_state
from taskboard.config import Settings
from taskboard.core.models import Task
from taskboard.store.memory import InMemoryRemoteStore
from taskboard.store.postgrest import PostgrestRemoteStore


@pytest.mark.asyncio
async def test_missing_credentials_fall_back_to_memory(settings) -> None:
    state = create_initial_state(settings=settings)

    assert state.offline is True
    assert isinstance(state.store, InMemoryRemoteStore)
    assert settings.data_dir.exists()
    assert state.reveal.caption == "  No Tasks Yet..."
    await close_state(state)


@pytest.mark.asyncio
async def test_configured_credentials_use_hosted_table(settings) -> None:
    settings.supabase_url = "https://demo.supabase.co"
    settings.supabase_key = "anon-key"

    state = create_initial_state(settings=settings)

    assert state.offline is False
    assert isinstance(state.store, PostgrestRemoteStore)
    await close_state(state)


def test_settings_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TASKBOARD_SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("TASKBOARD_REVEAL_INTERVAL_MS", "250")
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKBOARD_SUPABASE_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    monkeypatch.delenv("TASKBOARD_TABLE", raising=False)
    monkeypatch.delenv("TASKBOARD_EMPTY_CAPTION", raising=False)

    s = Settings.from_env()

    assert s.remote_configured
    assert s.supabase_key == "anon"
    assert s.table == "todo-app"
    assert s.reveal_interval_seconds == 0.25
    assert s.empty_caption == "  No Tasks Yet..."
    assert s.data_dir == tmp_path


def test_task_from_row_accepts_both_flag_columns() -> None:
    assert Task.from_row({"id": "a1", "title": "x", "iscompleted": True}).completed is True
    assert Task.from_row({"id": "a1", "title": "x", "completed": True}).completed is True
    with pytest.raises(ValueError):
        Task.from_row({"title": "no id"})


@pytest.mark.parametrize("module", ["board", "errors", "models", "ports", "reveal", "state"])
def test_core_does_not_import_concrete_stores(module: str) -> None:
    mod = importlib.import_module(f"taskboard.core.{module}")
    source = inspect.getsource(mod)
    assert "..store" not in source
    assert "taskboard.store" not in source

# tests/test_reveal.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.core.board import TaskBoard
from taskboard.core.models import Task
from taskboard.core.reveal import EmptyStateReveal, reveal_frames

from .fakes import FakeRemoteStore


def test_reveal_frames_are_prefixes() -> None:
    assert list(reveal_frames("abc")) == ["a", "ab", "abc"]
    assert list(reveal_frames("")) == []


@pytest.mark.asyncio
async def test_reveal_types_caption_one_char_at_a_time_then_stops() -> None:
    reveal = EmptyStateReveal(caption="  No Tasks Yet...", interval=0.0)
    frames: list[str] = []
    reveal.subscribe(lambda r: frames.append(r.text))

    reveal.start()
    await reveal.wait()

    # First notification is the reset to "".
    assert frames[0] == ""
    assert frames[1:] == list(reveal_frames("  No Tasks Yet..."))
    assert reveal.done
    assert not reveal.running


@pytest.mark.asyncio
async def test_restart_resets_text() -> None:
    reveal = EmptyStateReveal(caption="abcdef", interval=0.0)
    reveal.start()
    await reveal.wait()
    assert reveal.text == "abcdef"

    reveal.start()
    assert reveal.text == ""
    await reveal.wait()
    assert reveal.text == "abcdef"


@pytest.mark.asyncio
async def test_stop_cancels_and_clears() -> None:
    reveal = EmptyStateReveal(caption="abcdef", interval=10.0)
    reveal.start()
    await asyncio.sleep(0)
    assert reveal.running

    reveal.stop()
    await reveal.wait()

    assert reveal.text == ""
    assert not reveal.running


@pytest.mark.asyncio
async def test_sync_does_not_restart_while_active() -> None:
    reveal = EmptyStateReveal(caption="abc", interval=0.0)
    reveal.sync(True)
    await reveal.wait()
    assert reveal.done

    reveal.sync(True)
    assert reveal.text == "abc"

    reveal.sync(False)
    assert reveal.text == ""


@pytest.mark.asyncio
async def test_bound_reveal_follows_empty_and_idle_board() -> None:
    store = FakeRemoteStore()
    board = TaskBoard(store)
    reveal = EmptyStateReveal(caption="  No Tasks Yet...", interval=0.0)

    unbind = reveal.bind(board)
    assert reveal.running

    # Busy stops it; settling empty restarts it from scratch.
    store.hold("select_all")
    loading = asyncio.create_task(board.load())
    await asyncio.sleep(0)
    assert not reveal.running
    assert reveal.text == ""

    store.release("select_all")
    await loading
    await reveal.wait()
    assert reveal.text == "  No Tasks Yet..."

    # Non-empty list clears it.
    await board.create("first")
    assert reveal.text == ""
    assert not reveal.running

    # Emptiness re-enters: restarts.
    await board.remove(board.tasks[0].id)
    assert reveal.running
    await reveal.wait()
    assert reveal.done

    unbind()
    assert reveal.text == ""


@pytest.mark.asyncio
async def test_bound_reveal_idle_on_non_empty_board() -> None:
    board = TaskBoard(FakeRemoteStore([Task(id=1, title="a")]))
    await board.load()
    reveal = EmptyStateReveal(caption="xyz", interval=0.0)

    reveal.bind(board)

    assert not reveal.running
    assert reveal.text == ""

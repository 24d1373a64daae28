# src/taskboard/core/reveal.py

from __future__ import annotations

"""
Empty-state caption reveal.

A cosmetic "typing" effect: while the board is empty and idle, the caption is
revealed one character per tick. The sequence is a single asyncio task that is
cancelled and restarted whenever the condition re-enters, so two timers never
overlap. It never touches task data.
"""

import asyncio
import logging
from collections.abc import Callable, Iterator

from .board import TaskBoard
from .ports import Listener

logger = logging.getLogger(__name__)


def reveal_frames(caption: str) -> Iterator[str]:
    """Successive prefixes of caption: caption[:1], caption[:2], ... caption."""
    for i in range(1, len(caption) + 1):
        yield caption[:i]


class EmptyStateReveal:
    def __init__(self, caption: str = "  No Tasks Yet...", interval: float = 0.1) -> None:
        self.caption = caption
        self.interval = max(0.0, float(interval))
        self.text = ""

        self._task: asyncio.Task[None] | None = None
        self._active = False
        self._listeners: list[Listener] = []

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def done(self) -> bool:
        return self.text == self.caption

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Listener is called with this object after every revealed character and on reset."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_text(self, text: str) -> None:
        self.text = text
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Reveal listener failed.")

    # ---- sequence control ----

    def start(self) -> None:
        """Reset to "" and (re)start the sequence. Needs a running event loop."""
        self._cancel()
        self._set_text("")
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        self._cancel()
        if self.text:
            self._set_text("")

    def sync(self, active: bool) -> None:
        """Start on inactive -> active, stop on active -> inactive, otherwise leave it running."""
        if active and not self._active:
            self._active = True
            self.start()
        elif not active and self._active:
            self._active = False
            self.stop()

    def bind(self, board: TaskBoard) -> Callable[[], None]:
        """Keep the reveal active exactly while the board is empty and not busy."""

        def on_board(b: TaskBoard) -> None:
            self.sync(b.is_empty and not b.busy)

        unsubscribe = board.subscribe(on_board)
        on_board(board)

        def unbind() -> None:
            unsubscribe()
            self.sync(False)

        return unbind

    async def wait(self) -> None:
        """Wait for the current sequence to finish (a cancelled sequence counts as finished)."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})

    def _cancel(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self) -> None:
        for frame in reveal_frames(self.caption):
            await asyncio.sleep(self.interval)
            self._set_text(frame)
        logger.debug("Empty caption fully revealed.")

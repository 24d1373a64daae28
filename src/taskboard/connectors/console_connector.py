# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.reveal import EmptyStateReveal
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleNotifier:
    """Notifier that prints alerts/errors as [!] lines."""

    def alert(self, message: str) -> None:
        print(f"[{_ts_local()}] [!] {message}", flush=True)

    def error(self, message: str) -> None:
        print(f"[{_ts_local()}] [!] {message}", flush=True)


class _CaptionView:
    """
    Draws the empty-state caption.
    On a TTY the caption is redrawn in place as characters are revealed.
    """

    def __init__(self, reveal: EmptyStateReveal) -> None:
        self._reveal = reveal
        self._tty = sys.stdout.isatty()
        self._showing = False
        reveal.subscribe(self._on_frame)

    def _draw(self, text: str) -> None:
        sys.stdout.write("\033[2K\r" + text + "|")
        sys.stdout.flush()

    def _on_frame(self, reveal: EmptyStateReveal) -> None:
        if self._showing and self._tty:
            self._draw(reveal.text)

    async def show(self) -> None:
        self._showing = True
        try:
            if self._tty:
                self._draw(self._reveal.text)
            await self._reveal.wait()
        finally:
            self._showing = False

        if self._tty:
            sys.stdout.write("\n")
            sys.stdout.flush()
        else:
            print(self._reveal.text + "|")


async def _render(state: AppState, caption: _CaptionView) -> None:
    board = state.board
    if board.busy:
        print("Wait...")
        return
    if board.is_empty:
        await caption.show()
        return
    print(render_tasks(board))


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (offline=%s).", state.offline)
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    state.board.notifier = ConsoleNotifier()
    caption = _CaptionView(state.reveal)
    unbind = state.reveal.bind(state.board)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        emit("Wait...")
        await state.board.load()
        await _render(state, caption)

        while True:
            try:
                user_input = (await asyncio.to_thread(input, "> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                cmd_response = await command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                _print_ts("Internal error while handling a command.")
                continue

            if cmd_response is not None:
                print(f"[{_ts_local()}] {cmd_response}")
                if state.board.is_empty and not state.board.busy:
                    await caption.show()
                continue

            # Plain text: the edit buffer while editing, otherwise a new task.
            board = state.board
            try:
                if board.edit is not None:
                    board.set_edit_text(user_input)
                    await board.update()
                else:
                    await board.create(user_input)
            except Exception:
                logger.exception("Console task handler crashed.")
                _print_ts("Internal error while updating the list.")
                continue

            await _render(state, caption)
    finally:
        unbind()

    logger.info("Console connector finished.")

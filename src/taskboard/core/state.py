# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .board import TaskBoard
from .ports import RemoteStore
from .reveal import EmptyStateReveal


@dataclass
class AppState:
    """
    Runtime state shared by the view and commands.

    Concrete implementations are wired by the composition root (cli/bootstrap.py).
    """

    # Kept loosely typed so tests can pass a SimpleNamespace.
    settings: Any

    store: RemoteStore
    board: TaskBoard
    reveal: EmptyStateReveal

    offline: bool = False

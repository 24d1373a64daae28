# src/taskboard/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

TaskId = int | str
# Opaque: assigned by the remote store, never by the board.

# Column that holds the completed flag in the hosted table.
COMPLETED_COLUMN = "iscompleted"


@dataclass(frozen=True, slots=True)
class Task:
    id: TaskId
    title: str
    completed: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Task:
        """
        Build a Task from a table row.

        Notes:
        - unknown columns (created_at, ...) are ignored
        - the flag is read from `iscompleted`, falling back to `completed`
        """
        if "id" not in row or row["id"] is None:
            raise ValueError(f"row has no id: {dict(row)!r}")

        raw_done = row.get(COMPLETED_COLUMN, row.get("completed", False))
        return cls(
            id=row["id"],
            title=str(row.get("title") or ""),
            completed=bool(raw_done),
        )


def fields_to_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map model field names (title, completed) to table columns."""
    out: dict[str, Any] = {}
    for key, value in fields.items():
        if key == "completed":
            out[COMPLETED_COLUMN] = bool(value)
        else:
            out[key] = value
    return out


@dataclass(frozen=True, slots=True)
class EditSession:
    """The single task currently in edit mode plus its unsaved text buffer."""

    task_id: TaskId
    text: str

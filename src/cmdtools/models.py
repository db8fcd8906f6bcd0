"""Data models for the todo manager.

A Task is one todo entry and converts to and from the JSON record the
todo file stores. Record keys stay capitalized ("Task", "Done",
"CreatedAt", "CompletedAt") so files written by earlier versions of the
tool load unchanged.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

# Zero time written for a task that has not been completed yet.
ZERO_TIME = "0001-01-01T00:00:00"


@dataclass
class Task:
    """A single todo entry.

    Fields:
        description: Free text, not validated.
        done: True once completed.
        created_at: Creation time, never changed after the task is added.
        completed_at: Completion time (None until completed).
    """
    description: str
    done: bool = False
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Task': self.description,
            'Done': self.done,
            'CreatedAt': _format_time(self.created_at),
            'CompletedAt': _format_time(self.completed_at),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        return cls(
            description=str(raw.get('Task', '')),
            done=bool(raw.get('Done', False)),
            created_at=_parse_time(raw.get('CreatedAt')),
            completed_at=_parse_time(raw.get('CompletedAt')),
        )


def _format_time(value: Optional[datetime]) -> str:
    if value is None:
        return ZERO_TIME
    return value.isoformat()


def _parse_time(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp; empty or zero time -> None.

    A trailing "Z" is accepted for files produced by other writers.
    """
    if not value:
        return None
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    dt = datetime.fromisoformat(text)
    if dt.year == 1:
        return None
    return dt

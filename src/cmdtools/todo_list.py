"""Task list logic: ordered tasks, 1-based index mutation, and rendering.

External indexes are positional: deleting a task shifts every later task
down by one, so an index is only meaningful against the current list.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional
from cmdtools.errors import ItemNotFoundError
from cmdtools.models import Task

Clock = Callable[[], datetime]


def format_ansic(value: datetime) -> str:
    """Format like "Mon Jan  2 15:04:05 2006" (day padded with a space)."""
    return f"{value:%a %b} {value.day:2d} {value:%H:%M:%S %Y}"


class TaskList:
    def __init__(self, tasks: Optional[Iterable[Task]] = None, now: Optional[Clock] = None):
        self.tasks: List[Task] = list(tasks) if tasks else []
        self._now: Clock = now or datetime.now

    # -------------------- loading --------------------
    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], now: Optional[Clock] = None) -> "TaskList":
        return cls([Task.from_dict(raw) for raw in records], now=now)

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __getitem__(self, position: int) -> Task:
        return self.tasks[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self.tasks == other.tasks

    def _position(self, index: int) -> int:
        if index <= 0 or index > len(self.tasks):
            raise ItemNotFoundError(index)
        return index - 1

    # -------------------- task operations --------------------
    def add(self, description: str) -> Task:
        task = Task(description=description, created_at=self._now())
        self.tasks.append(task)
        return task

    def complete(self, index: int) -> Task:
        task = self.tasks[self._position(index)]
        task.done = True
        task.completed_at = self._now()
        return task

    def delete(self, index: int) -> Task:
        return self.tasks.pop(self._position(index))

    # -------------------- serialization --------------------
    def to_records(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self.tasks]

    # -------------------- display --------------------
    def render(self, verbose: bool = False, hide_completed: bool = False) -> str:
        """One line per task; numbering always follows full-list position."""
        lines: List[str] = []
        for number, task in enumerate(self.tasks, start=1):
            if hide_completed and task.done:
                continue
            prefix = 'X ' if task.done else ' '
            line = f"{prefix}{number}: {task.description}"
            if verbose and task.created_at is not None:
                line += f" - {format_ansic(task.created_at)}"
            lines.append(line + '\n')
        return ''.join(lines)

    def __str__(self) -> str:
        return self.render()

"""Persistence helpers (load/save) for the todo list.

The file is a JSON array of task records. The path is resolved by the
caller (see config.todo_file_path) and passed in explicitly.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union
from cmdtools.errors import StorageError
from cmdtools.todo_list import TaskList

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Storage:
    @staticmethod
    def load_tasks(path: PathLike) -> TaskList:
        """Load the task list from disk.

        Missing file -> empty list. Empty file -> empty list.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.debug("no todo file at %s, starting empty", path)
            return TaskList()
        except UnicodeDecodeError as exc:
            raise StorageError(f"invalid todo file {path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc
        if not text.strip():
            return TaskList()
        try:
            records = json.loads(text)
            if not isinstance(records, list):
                raise ValueError("expected a JSON array of tasks")
            task_list = TaskList.from_records(records)
        except (ValueError, TypeError, AttributeError) as exc:
            raise StorageError(f"invalid todo file {path}: {exc}") from exc
        logger.debug("loaded %d tasks from %s", len(task_list), path)
        return task_list

    @staticmethod
    def save_tasks(task_list: TaskList, path: PathLike) -> None:
        """Persist the whole list.

        Written to a sibling temp file, then moved over the target, so the
        previous content survives any failure.
        """
        path = Path(path)
        payload = json.dumps(task_list.to_records(), indent=4)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp', dir=path.parent)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StorageError(f"cannot write {path}: {exc}") from exc
        logger.debug("saved %d tasks to %s", len(task_list), path)

"""Loading and saving the todo file."""

import json
import os

import pytest

from cmdtools.errors import StorageError
from cmdtools.storage import Storage
from cmdtools.todo_list import TaskList


def test_missing_file_is_empty_list(tmp_path):
    assert len(Storage.load_tasks(tmp_path / "absent.json")) == 0


def test_empty_file_is_empty_list(tmp_path):
    path = tmp_path / "todo.json"
    path.write_text("")
    assert len(Storage.load_tasks(path)) == 0


def test_save_then_load_reproduces_list(tmp_path, clock):
    path = tmp_path / "todo.json"
    task_list = TaskList(now=clock)
    task_list.add("New Task")
    task_list.add("Other Task")
    task_list.complete(2)
    Storage.save_tasks(task_list, path)
    loaded = Storage.load_tasks(path)
    assert loaded == task_list
    assert loaded[1].completed_at == task_list[1].completed_at
    assert loaded[0].completed_at is None


def test_saved_document_shape(tmp_path, clock):
    path = tmp_path / "todo.json"
    task_list = TaskList(now=clock)
    task_list.add("New Task")
    Storage.save_tasks(task_list, path)
    assert json.loads(path.read_text()) == [
        {
            "Task": "New Task",
            "Done": False,
            "CreatedAt": "2021-03-07T09:05:30",
            "CompletedAt": "0001-01-01T00:00:00",
        }
    ]


def test_loads_timestamps_with_offsets(tmp_path):
    path = tmp_path / "todo.json"
    path.write_text(json.dumps([
        {
            "Task": "from elsewhere",
            "Done": True,
            "CreatedAt": "2021-03-07T09:05:30-05:00",
            "CompletedAt": "2021-03-08T10:00:00Z",
        }
    ]))
    task = Storage.load_tasks(path)[0]
    assert task.done is True
    assert task.created_at.utcoffset().total_seconds() == -5 * 3600
    assert task.completed_at.utcoffset().total_seconds() == 0


@pytest.mark.parametrize("content", ["{not json", '{"Task": "x"}', '[{"Task": "x", "CreatedAt": "yesterday"}]'])
def test_invalid_file_raises(tmp_path, content):
    path = tmp_path / "todo.json"
    path.write_text(content)
    with pytest.raises(StorageError):
        Storage.load_tasks(path)


def test_failed_save_keeps_previous_content(tmp_path, clock, monkeypatch):
    path = tmp_path / "todo.json"
    task_list = TaskList(now=clock)
    task_list.add("kept")
    Storage.save_tasks(task_list, path)
    before = path.read_text()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("cmdtools.storage.os.replace", broken_replace)
    task_list.add("lost")
    with pytest.raises(StorageError, match="disk full"):
        Storage.save_tasks(task_list, path)
    assert path.read_text() == before
    assert os.listdir(tmp_path) == ["todo.json"]


def test_save_into_missing_directory_fails(tmp_path):
    with pytest.raises(StorageError):
        Storage.save_tasks(TaskList(), tmp_path / "nope" / "todo.json")


def test_non_utf8_file_raises(tmp_path):
    path = tmp_path / "todo.json"
    path.write_bytes(b'[{"Task": "caf\xe9"}]')
    with pytest.raises(StorageError, match="invalid todo file"):
        Storage.load_tasks(path)

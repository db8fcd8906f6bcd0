from datetime import datetime, timedelta

import pytest


class FakeClock:
    """Deterministic clock: each call advances one minute."""

    def __init__(self, start: datetime = datetime(2021, 3, 7, 9, 5, 30)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def todo_file(tmp_path, monkeypatch):
    path = tmp_path / "todo.json"
    monkeypatch.setenv("TODO_FILENAME", str(path))
    return path

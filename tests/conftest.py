"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bao_cli.config import Config, ConfigModel  # noqa: E402
from bao_cli.domain import Task, TaskList  # noqa: E402
from bao_cli.storage import StorageError, TaskStore  # noqa: E402
from bao_cli.ui import OutputSink  # noqa: E402


class RecordingUi(OutputSink):
    """Output sink that keeps every message."""

    def __init__(self):
        self.messages: List[str] = []
        self.exit_shown = False

    def show(self, message: str) -> None:
        self.messages.append(message)

    def show_exit_message(self) -> None:
        self.exit_shown = True
        super().show_exit_message()

    def clear(self) -> None:
        self.messages.clear()


class RecordingStore(TaskStore):
    """Task store that keeps snapshots in memory and can be told to fail."""

    def __init__(self, tasks: Sequence[Task] = (), fail: bool = False):
        self.saved: List[List[Task]] = []
        self.initial = list(tasks)
        self.fail = fail

    def save(self, tasks: Sequence[Task]) -> None:
        if self.fail:
            raise StorageError("disk unavailable")
        self.saved.append(list(tasks))

    def load(self) -> List[Task]:
        return list(self.initial)

    @property
    def save_count(self) -> int:
        return len(self.saved)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test's data directory inside tmp_path."""
    home = tmp_path / "bao-home"
    monkeypatch.setenv("BAO_HOME", str(home))
    Config._instance = None
    yield home
    Config._instance = None


@pytest.fixture
def config(isolated_home) -> ConfigModel:
    return ConfigModel(data_dir=str(isolated_home))


@pytest.fixture
def ui() -> RecordingUi:
    return RecordingUi()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def tasks() -> TaskList:
    return TaskList()

# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_tool.manager import TodoManager


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    # Nested so that save() has to create the directory
    return tmp_path / "state" / "todo.json"


@pytest.fixture()
def manager(todo_file: Path) -> TodoManager:
    return TodoManager(todo_file=todo_file)


@pytest.fixture()
def two_tasks(manager: TodoManager) -> TodoManager:
    """Scenario A: two fresh incomplete tasks, nothing active."""
    manager.set_tasks("Buy milk\nWalk dog")
    return manager



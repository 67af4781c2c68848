"""
TODO TOOL - Persistent Task List for Agents
===========================================

A single JSON document holds an ordered task list and an optional active
task. Callers refer to tasks by index plus a prefix of their text, so a
stale reference fails instead of touching the wrong task.

Usage:
    from todo_tool import TodoManager

    manager = TodoManager("todo.json")
    manager.set_tasks("Buy milk\\nWalk dog")

    # Same commands an external caller runs through the CLI
    print(manager.dispatch("UpdateTaskStates", {
        "active_task_id": {"index": 0, "text_prefix": "Buy"}
    }))
"""

from .schema import (
    Task,
    TaskListState,
    TaskReference,
    StatusUpdate,
    ActiveTaskAction,
    ActiveTaskChange,
    TOOL_DEFINITIONS
)

from .errors import (
    TodoToolError,
    NotFound,
    PrefixMismatch,
    InvalidActivation,
    UnknownCommand,
    MalformedInput,
    StorageFailure
)

from .manager import TodoManager

__version__ = "1.0.0"
__all__ = [
    "TodoManager",
    "Task",
    "TaskListState",
    "TaskReference",
    "StatusUpdate",
    "ActiveTaskAction",
    "ActiveTaskChange",
    "TOOL_DEFINITIONS",
    "TodoToolError",
    "NotFound",
    "PrefixMismatch",
    "InvalidActivation",
    "UnknownCommand",
    "MalformedInput",
    "StorageFailure"
]

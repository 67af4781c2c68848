"""
TODO TOOL - Task Schema Definition
==================================
Persisted task list document, caller-supplied task references and the
parameter payloads of the three tool commands.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, model_validator


class Task(BaseModel):
    """Individual task"""
    text: str = Field(min_length=1)
    is_complete: bool = False


class TaskListState(BaseModel):
    """Complete task list as persisted on disk"""
    # Position in this list is the task's index; order is load-bearing
    tasks: List[Task] = Field(default_factory=list)
    active_task_index: Optional[int] = None

    @property
    def progress_pct(self) -> int:
        if not self.tasks:
            return 0
        completed = sum(1 for t in self.tasks if t.is_complete)
        return int((completed / len(self.tasks)) * 100)

    @property
    def active_task(self) -> Optional[Task]:
        """The active task, or None when the marker is unset or dangling"""
        index = self.active_task_index
        if index is None or not 0 <= index < len(self.tasks):
            return None
        return self.tasks[index]


class TaskReference(BaseModel):
    """Positional task ID, verified against the task's current text"""
    index: StrictInt                # 0-based position in the list
    text_prefix: StrictStr          # Expected prefix of the task's text


class StatusUpdate(BaseModel):
    """New completion status for one task"""
    id: TaskReference
    is_complete: StrictBool


class ActiveTaskAction(str, Enum):
    """What UpdateTaskStates does to the active task marker"""
    UNSET = "unset"         # active_task_id omitted: leave marker as is
    CLEAR = "clear"         # active_task_id is null: no active task
    ACTIVATE = "activate"   # active_task_id is a reference: make it active


class ActiveTaskChange(BaseModel):
    """A reference is carried exactly when the action is ACTIVATE"""
    action: ActiveTaskAction = ActiveTaskAction.UNSET
    ref: Optional[TaskReference] = None

    @model_validator(mode="after")
    def _ref_matches_action(self) -> "ActiveTaskChange":
        if self.action == ActiveTaskAction.ACTIVATE and self.ref is None:
            raise ValueError("ACTIVATE requires a task reference")
        if self.action != ActiveTaskAction.ACTIVATE and self.ref is not None:
            raise ValueError(f"{self.action.value.upper()} does not take a task reference")
        return self


class SetTasksParams(BaseModel):
    """Parameters of SetTasks"""
    tasks_text: Optional[str] = None


class UpdateTaskStatesParams(BaseModel):
    """Parameters of UpdateTaskStates"""
    status_updates: Optional[List[StatusUpdate]] = None
    active_task_id: Optional[TaskReference] = None

    @property
    def active_task_change(self) -> ActiveTaskChange:
        """
        Tri-state view of active_task_id.

        An explicit null and an omitted key both leave the field as None,
        so presence is read from model_fields_set.
        """
        if "active_task_id" not in self.model_fields_set:
            return ActiveTaskChange(action=ActiveTaskAction.UNSET)
        if self.active_task_id is None:
            return ActiveTaskChange(action=ActiveTaskAction.CLEAR)
        return ActiveTaskChange(action=ActiveTaskAction.ACTIVATE, ref=self.active_task_id)


# ============================================================
# TOOL DISCOVERY SCHEMA
# ============================================================

DISCOVER_COMMAND = "discover"

_TASK_ID_PROPERTIES: Dict[str, Any] = {
    "index": {
        "type": "NUMBER",
        "description": "Required. The 0-based index of the task in the list.",
    },
    "text_prefix": {
        "type": "STRING",
        "description": (
            "Required. A prefix of the task's text for verification. "
            "Example: 'Buy milk' would be valid for the task 'Buy milk from the store'"
        ),
    },
}

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "ListTasks",
        "description": (
            "Lists all tasks in Markdown format. This is the primary way to get the "
            "current state of the to-do list, including task text, index, completion "
            "status, and the currently active task."
        ),
        "parameters": {"type": "OBJECT", "properties": {}},
    },
    {
        "name": "SetTasks",
        "description": (
            "Replaces the entire task list with a new set of tasks and returns the "
            "updated list. This is useful for initialization or bulk replacement. All "
            "new tasks will be marked as incomplete, and the active task will be reset."
        ),
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "tasks_text": {
                    "type": "STRING",
                    "description": (
                        "Required. A string where each line represents the text of a new, "
                        "incomplete task. Example: 'Buy milk\nWalk the dog. Do not include "
                        "Markdown bullet or checkbox syntax; just the tasks, one per line.'"
                    ),
                },
            },
            "required": ["tasks_text"],
        },
    },
    {
        "name": "UpdateTaskStates",
        "description": (
            "Atomically updates the completion status of specified tasks and/or sets a "
            "new active task, then returns the updated list. This is the main tool for "
            "modifying tasks."
        ),
        "parameters": {
            "type": "OBJECT",
            "required": ["status_updates", "active_task_id"],
            "properties": {
                "status_updates": {
                    "type": "ARRAY",
                    "description": (
                        "Optional. A list of objects, each specifying a task to update "
                        "and its new completion status."
                    ),
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "id": {
                                "type": "OBJECT",
                                "properties": _TASK_ID_PROPERTIES,
                                "required": ["index", "text_prefix"],
                            },
                            "is_complete": {"type": "BOOLEAN"},
                        },
                        "required": ["id", "is_complete"],
                    },
                },
                "active_task_id": {
                    "description": (
                        "Optional. The ID of the task to set as active. The task must be "
                        "incomplete. Use `null` to set no task as active."
                    ),
                    "type": "OBJECT",
                    "properties": _TASK_ID_PROPERTIES,
                    "required": ["index", "text_prefix"],
                },
            },
        },
    },
]

COMMAND_NAMES: List[str] = [tool["name"] for tool in TOOL_DEFINITIONS]

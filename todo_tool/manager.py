"""
TODO TOOL - Task Manager
========================
Handles persistence, task identification, rendering and the three
commands (ListTasks, SetTasks, UpdateTaskStates).

Each command loads the document, works on that in-memory copy and saves
once at the end, so a failed command never touches the file.
"""

import json
from pathlib import Path
from typing import Optional, List, Dict, Any, Type, TypeVar, Union
import logging

from pydantic import BaseModel, ValidationError

from .errors import (
    NotFound, PrefixMismatch, InvalidActivation,
    UnknownCommand, MalformedInput, StorageFailure
)
from .schema import (
    Task, TaskListState, TaskReference, StatusUpdate,
    ActiveTaskAction, ActiveTaskChange,
    SetTasksParams, UpdateTaskStatesParams
)

logger = logging.getLogger("todo_tool")

DEFAULT_TODO_FILE = "todo.json"

ParamsModel = TypeVar("ParamsModel", bound=BaseModel)


class TodoManager:
    """
    Task list manager backed by a single JSON document.

    Storage: todo_file (default ./todo.json)

    No locking: concurrent invocations on the same file are last writer wins.
    """

    def __init__(self, todo_file: Union[str, Path] = DEFAULT_TODO_FILE):
        self.todo_file = Path(todo_file)

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> TaskListState:
        """Load task list from file; a missing file is an empty list"""
        try:
            with open(self.todo_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug(f"No task list at {self.todo_file}, starting empty")
            return TaskListState()
        except (OSError, ValueError) as e:
            raise StorageFailure(f"Cannot read task list {self.todo_file}: {e}") from e

        try:
            state = TaskListState.model_validate(data)
        except ValidationError as e:
            raise StorageFailure(f"Task list {self.todo_file} is malformed: {e}") from e

        logger.debug(f"📂 Loaded task list: {self.todo_file} ({len(state.tasks)} tasks)")
        return state

    def save(self, state: TaskListState) -> None:
        """Overwrite the task list file, creating its directory if needed"""
        try:
            self.todo_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.todo_file, 'w', encoding='utf-8') as f:
                json.dump(state.model_dump(mode='json'), f, indent=2)
        except OSError as e:
            raise StorageFailure(f"Cannot write task list {self.todo_file}: {e}") from e

        logger.info(
            f"✅ Saved task list: {self.todo_file} "
            f"({len(state.tasks)} tasks, {state.progress_pct}% complete)"
        )

    # ========================================
    # TASK IDENTIFICATION
    # ========================================

    def resolve(self, state: TaskListState, ref: TaskReference) -> Task:
        """
        Find the task a reference points at.

        The prefix check catches references built from an older snapshot of
        the list. The returned task is the one inside state, so callers can
        mutate it in place.
        """
        if not 0 <= ref.index < len(state.tasks):
            raise NotFound(f"Task with index {ref.index} not found.")

        task = state.tasks[ref.index]
        if not task.text.startswith(ref.text_prefix):
            raise PrefixMismatch(
                f"Task text for index {ref.index} does not match prefix "
                f"\"{ref.text_prefix}\". Expected: \"{task.text}\""
            )
        return task

    # ========================================
    # REPORTING
    # ========================================

    def render(self, state: TaskListState) -> str:
        """Render the task list as Markdown"""
        if not state.tasks:
            return "There are no tasks."

        lines = ["Tasks:", ""]
        for i, task in enumerate(state.tasks):
            checkbox = "[x]" if task.is_complete else "[ ]"
            lines.append(f"{i + 1}. {checkbox} {task.text}")
        lines.append("")

        active = state.active_task
        if active is not None:
            lines.append(f"The active task is: \"{state.active_task_index + 1}. {active.text}\"")
        else:
            lines.append("There is no active task.")

        return "\n".join(lines)

    # ========================================
    # COMMANDS
    # ========================================

    def list_tasks(self) -> str:
        return self.render(self.load())

    def set_tasks(self, tasks_text: str) -> str:
        """Replace the whole list; every line that is not blank becomes a task"""
        tasks = [
            Task(text=line)
            for line in tasks_text.split("\n")
            if line.strip() != ""
        ]
        state = TaskListState(tasks=tasks, active_task_index=None)
        self.save(state)

        logger.info(f"🚀 Replaced task list with {len(tasks)} tasks")
        return self.render(state)

    def update_task_states(
        self,
        status_updates: Optional[List[StatusUpdate]] = None,
        active_task: Optional[ActiveTaskChange] = None
    ) -> str:
        """
        Apply completion updates, then the active task change, then save.

        Completing the active task clears the marker straight away, so the
        activation check sees the state after all updates in the batch.
        Repeated updates to the same index apply in order.
        """
        active_task = active_task or ActiveTaskChange()
        state = self.load()

        for update in status_updates or []:
            task = self.resolve(state, update.id)
            task.is_complete = update.is_complete

            if update.id.index == state.active_task_index and update.is_complete:
                logger.info(f"Active task {update.id.index} completed, clearing marker")
                state.active_task_index = None

        if active_task.action == ActiveTaskAction.ACTIVATE:
            ref = active_task.ref
            task = self.resolve(state, ref)
            if task.is_complete:
                raise InvalidActivation(
                    f"Cannot set a complete task as active (index: {ref.index})."
                )
            state.active_task_index = ref.index
        elif active_task.action == ActiveTaskAction.CLEAR:
            state.active_task_index = None

        # A loaded document may carry a marker that is dangling or on a completed task
        if state.active_task_index is not None and (
            state.active_task is None or state.active_task.is_complete
        ):
            logger.warning(f"Dropping invalid active task index {state.active_task_index}")
            state.active_task_index = None

        self.save(state)
        return self.render(state)

    # ========================================
    # DISPATCH
    # ========================================

    def dispatch(self, command: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Run a command by its external name with a JSON-style parameter dict"""
        params = params or {}
        logger.debug(f"▶️ {command} {params}")

        if command == "ListTasks":
            return self.list_tasks()

        if command == "SetTasks":
            parsed = _parse_params(SetTasksParams, command, params)
            return self.set_tasks(parsed.tasks_text or "")

        if command == "UpdateTaskStates":
            parsed = _parse_params(UpdateTaskStatesParams, command, params)
            return self.update_task_states(
                status_updates=parsed.status_updates,
                active_task=parsed.active_task_change
            )

        raise UnknownCommand(
            f"Unknown tool: {command}. The first argument should be the tool name."
        )


def _parse_params(model: Type[ParamsModel], command: str, params: Dict[str, Any]) -> ParamsModel:
    try:
        return model.model_validate(params)
    except ValidationError as e:
        logger.warning(f"Invalid parameters for {command}: {e.error_count()} error(s)")
        raise MalformedInput(f"Invalid parameters for {command}: {e}") from e

# tests/test_schema.py

from __future__ import annotations

import pytest
from pydantic import ValidationError

from todo_tool.schema import (
    COMMAND_NAMES,
    TOOL_DEFINITIONS,
    ActiveTaskAction,
    ActiveTaskChange,
    Task,
    TaskReference,
    TaskListState,
    UpdateTaskStatesParams,
)


def test_new_task_is_incomplete() -> None:
    assert Task(text="Buy milk").is_complete is False


def test_task_text_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        Task(text="")


def test_empty_state_defaults() -> None:
    state = TaskListState()
    assert state.tasks == []
    assert state.active_task_index is None
    assert state.progress_pct == 0
    assert state.model_dump(mode="json") == {"tasks": [], "active_task_index": None}


def test_progress_pct_counts_completed_tasks() -> None:
    state = TaskListState(
        tasks=[Task(text="a", is_complete=True), Task(text="b"), Task(text="c"), Task(text="d")]
    )
    assert state.progress_pct == 25


@pytest.mark.parametrize("index", [None, 2, -1])
def test_active_task_is_none_when_unset_or_dangling(index) -> None:
    state = TaskListState(tasks=[Task(text="a"), Task(text="b")], active_task_index=index)
    assert state.active_task is None


def test_active_task_returns_task_at_index() -> None:
    state = TaskListState(tasks=[Task(text="a"), Task(text="b")], active_task_index=1)
    assert state.active_task is state.tasks[1]


def test_omitted_active_task_id_leaves_marker_alone() -> None:
    params = UpdateTaskStatesParams.model_validate({"status_updates": []})
    change = params.active_task_change
    assert change.action == ActiveTaskAction.UNSET
    assert change.ref is None


def test_explicit_null_active_task_id_clears_marker() -> None:
    params = UpdateTaskStatesParams.model_validate({"active_task_id": None})
    assert params.active_task_change.action == ActiveTaskAction.CLEAR


def test_reference_active_task_id_activates() -> None:
    params = UpdateTaskStatesParams.model_validate(
        {"active_task_id": {"index": 1, "text_prefix": "Walk"}}
    )
    change = params.active_task_change
    assert change.action == ActiveTaskAction.ACTIVATE
    assert change.ref.index == 1
    assert change.ref.text_prefix == "Walk"


def test_activate_requires_a_reference() -> None:
    with pytest.raises(ValidationError, match="requires a task reference"):
        ActiveTaskChange(action=ActiveTaskAction.ACTIVATE)


@pytest.mark.parametrize("action", [ActiveTaskAction.UNSET, ActiveTaskAction.CLEAR])
def test_unset_and_clear_reject_a_reference(action: ActiveTaskAction) -> None:
    with pytest.raises(ValidationError, match="does not take a task reference"):
        ActiveTaskChange(action=action, ref=TaskReference(index=0, text_prefix="Buy"))


@pytest.mark.parametrize(
    "payload",
    [
        {"status_updates": [{"id": {"index": "0", "text_prefix": "Buy"}, "is_complete": True}]},
        {"status_updates": [{"id": {"index": 0, "text_prefix": "Buy"}, "is_complete": "yes"}]},
        {"status_updates": [{"id": {"index": 0, "text_prefix": "Buy"}, "is_complete": "false"}]},
        {"status_updates": [{"id": {"index": True, "text_prefix": "Buy"}, "is_complete": True}]},
        {"active_task_id": {"index": 0, "text_prefix": 7}},
    ],
)
def test_reference_and_status_fields_are_not_coerced(payload: dict) -> None:
    with pytest.raises(ValidationError):
        UpdateTaskStatesParams.model_validate(payload)


def test_status_update_requires_reference_fields() -> None:
    with pytest.raises(ValidationError):
        UpdateTaskStatesParams.model_validate(
            {"status_updates": [{"id": {"index": 0}, "is_complete": True}]}
        )


def test_tool_definitions_expose_the_three_commands() -> None:
    assert COMMAND_NAMES == ["ListTasks", "SetTasks", "UpdateTaskStates"]
    for tool in TOOL_DEFINITIONS:
        assert tool["description"]
        assert tool["parameters"]["type"] == "OBJECT"


def test_update_task_states_schema_describes_task_ids() -> None:
    update = next(t for t in TOOL_DEFINITIONS if t["name"] == "UpdateTaskStates")
    props = update["parameters"]["properties"]
    assert props["status_updates"]["items"]["required"] == ["id", "is_complete"]
    assert props["active_task_id"]["required"] == ["index", "text_prefix"]
    assert set(props["active_task_id"]["properties"]) == {"index", "text_prefix"}

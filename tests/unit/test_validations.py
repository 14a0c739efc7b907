# tests/unit/test_validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from types import SimpleNamespace

import pytest

from fsmkit.core.errors import DuplicateStateError, StateNotFoundError, ValidationError
from fsmkit.core.events import Event
from fsmkit.core.states import State
from fsmkit.core.transitions import TransitionTable
from fsmkit.core.validations import Validator


@pytest.fixture
def validator():
    return Validator()


def test_validate_states_indexes_by_name(validator):
    idle, running = State("idle"), State("running")
    assert validator.validate_states([idle, running]) == {"idle": idle, "running": running}


def test_validate_states_empty(validator):
    with pytest.raises(ValidationError, match="at least one state"):
        validator.validate_states([])


def test_validate_states_duplicate(validator):
    with pytest.raises(DuplicateStateError) as exc_info:
        validator.validate_states([State("idle"), State("running"), State("idle")])
    assert exc_info.value.identifier == "idle"


def test_validate_states_rejects_non_states(validator):
    with pytest.raises(ValidationError):
        validator.validate_states([State("idle"), object()])


def test_validate_state_name(validator):
    validator.validate_state_name("idle", {"idle"})
    with pytest.raises(StateNotFoundError) as exc_info:
        validator.validate_state_name("ghost", {"running", "idle"})
    assert exc_info.value.identifier == "ghost"
    assert exc_info.value.valid_identifiers == ("idle", "running")
    assert "ghost" in str(exc_info.value)


def test_validate_transitions(validator):
    table = TransitionTable({"idle": {"go": "ghost"}})
    with pytest.raises(StateNotFoundError):
        validator.validate_transitions(table, {"idle"})


def test_validate_event(validator):
    validator.validate_event(Event("go"))
    with pytest.raises(ValidationError):
        validator.validate_event(SimpleNamespace(name="", id="1"))
    with pytest.raises(ValidationError):
        validator.validate_event(object())


class _NamedState:
    def __init__(self, name):
        self.name = name

    async def handle(self, event):
        return None


@pytest.mark.parametrize("name", [None, "", 7, ["a"]])
def test_validate_states_rejects_bad_names(validator, name):
    with pytest.raises(ValidationError, match="non-empty string name"):
        validator.validate_states([State("idle"), _NamedState(name)])


def test_validate_states_accepts_duck_typed_state(validator):
    custom = _NamedState("custom")
    assert validator.validate_states([custom]) == {"custom": custom}


def test_validate_event_requires_id(validator):
    with pytest.raises(ValidationError, match="must carry an id") as exc_info:
        validator.validate_event(SimpleNamespace(name="go"))
    assert exc_info.value.identifier == "go"

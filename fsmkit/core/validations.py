# fsmkit/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import AbstractSet, Dict, Iterable

from fsmkit.core.errors import DuplicateStateError, StateNotFoundError, ValidationError
from fsmkit.core.transitions import TransitionTable
from fsmkit.interfaces.protocols import EventProtocol, StateProtocol
from fsmkit.interfaces.types import StateName


class Validator:
    """
    Performs construction-time and runtime validation of the state machine,
    ensuring states, transitions, and state assignments conform to defined rules.
    """

    def __init__(self) -> None:
        self._rules = _DefaultValidationRules

    def validate_states(self, states: Iterable[StateProtocol]) -> Dict[StateName, StateProtocol]:
        """
        Check the supplied states and index them by name.

        :param states: The states of a machine.
        :return: A new ``name -> state`` dictionary.
        :raises ValidationError: If the collection is empty or holds a non-state.
        :raises DuplicateStateError: If two states share a name.
        """
        return self._rules.validate_states(states)

    def validate_state_name(self, state_name: StateName, known_state_names: AbstractSet[StateName]) -> None:
        """
        :raises StateNotFoundError: If ``state_name`` is not a known state.
        """
        self._rules.validate_state_name(state_name, known_state_names)

    def validate_transitions(self, transitions: TransitionTable, known_state_names: AbstractSet[StateName]) -> None:
        """
        :raises StateNotFoundError: If a source or target is not a known state.
        """
        self._rules.validate_transitions(transitions, known_state_names)

    def validate_event(self, event: EventProtocol) -> None:
        """
        :raises ValidationError: If the event carries no usable name.
        """
        self._rules.validate_event(event)


class _DefaultValidationRules:
    """
    Built-in rules ensuring basic correctness of a machine's topology.
    """

    @staticmethod
    def validate_states(states: Iterable[StateProtocol]) -> Dict[StateName, StateProtocol]:
        by_name: Dict[StateName, StateProtocol] = {}
        for state in states:
            if not isinstance(state, StateProtocol):
                raise ValidationError(f"{state!r} does not implement the state protocol.")
            if not isinstance(state.name, str) or not state.name:
                raise ValidationError(
                    f"State {state!r} must have a non-empty string name.", identifier=state.name
                )
            if state.name in by_name:
                raise DuplicateStateError(
                    f"Duplicate state name '{state.name}'.",
                    identifier=state.name,
                    valid_identifiers=sorted(by_name),
                )
            by_name[state.name] = state
        if not by_name:
            raise ValidationError("A state machine needs at least one state.")
        return by_name

    @staticmethod
    def validate_state_name(state_name: StateName, known_state_names: AbstractSet[StateName]) -> None:
        if state_name not in known_state_names:
            valid = sorted(known_state_names)
            raise StateNotFoundError(
                f"Cannot set state '{state_name}'; must be one of {valid}",
                identifier=state_name,
                valid_identifiers=valid,
            )

    @staticmethod
    def validate_transitions(transitions: TransitionTable, known_state_names: AbstractSet[StateName]) -> None:
        transitions.validate(known_state_names)

    @staticmethod
    def validate_event(event: EventProtocol) -> None:
        name = getattr(event, "name", None)
        if not isinstance(name, str) or not name:
            raise ValidationError("Event must have a non-empty name.", identifier=name)
        if not hasattr(event, "id"):
            raise ValidationError(f"Event '{name}' must carry an id.", identifier=name)

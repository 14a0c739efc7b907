# fsmkit/core/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from fsmkit.core.errors import ValidationError
from fsmkit.core.machine import Machine
from fsmkit.core.validations import Validator
from fsmkit.interfaces.protocols import StateProtocol
from fsmkit.interfaces.types import EventName, StateName


class MachineBuilder:
    """
    Fluent assembler for :class:`Machine`.

    Every method except ``build`` returns the builder, so a machine reads
    top to bottom::

        machine = (
            MachineBuilder()
            .states([idle, running])
            .transition("idle", "start", "running")
            .transition("running", "stop", "idle")
            .initial_state_name("idle")
            .build()
        )

    Validation happens in ``build``; the accumulating calls never fail.
    """

    def __init__(self) -> None:
        self._states: List[StateProtocol] = []
        self._transitions: Dict[StateName, Dict[EventName, StateName]] = {}
        self._initial_state_name: Optional[StateName] = None
        self._validator: Optional[Validator] = None

    def states(self, states: Iterable[StateProtocol]) -> "MachineBuilder":
        """Replace the accumulated states with ``states``."""
        self._states = list(states)
        return self

    def state(self, state: StateProtocol) -> "MachineBuilder":
        """Append a single state."""
        self._states.append(state)
        return self

    def transition(self, state_name: StateName, event_name: EventName, next_state_name: StateName) -> "MachineBuilder":
        """
        Add the edge ``state_name --event_name--> next_state_name``.
        A later call for the same (state, event) pair overrides an earlier one.
        """
        self._transitions.setdefault(state_name, {})[event_name] = next_state_name
        return self

    def initial_state_name(self, initial_state_name: StateName) -> "MachineBuilder":
        self._initial_state_name = initial_state_name
        return self

    def validator(self, validator: Validator) -> "MachineBuilder":
        self._validator = validator
        return self

    def build(self) -> Machine:
        """
        Build a validated machine. Each call returns an independent machine.

        :raises ValidationError: If no initial state was given or the topology is invalid.
        """
        if self._initial_state_name is None:
            raise ValidationError(
                "Initial state name must be set before build()",
                valid_identifiers=sorted(s.name for s in self._states),
            )
        return Machine(
            self._states,
            self._transitions,
            self._initial_state_name,
            validator=self._validator,
        )

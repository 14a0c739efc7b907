# fsmkit/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import contextvars
import logging
from contextlib import asynccontextmanager
from types import MappingProxyType
from typing import Any, AsyncIterator, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from fsmkit.core.errors import ReentrantDispatchError
from fsmkit.core.transitions import TransitionTable
from fsmkit.core.validations import Validator
from fsmkit.interfaces.protocols import EventProtocol, StateProtocol
from fsmkit.interfaces.types import StateName, TransitionMapping

logger = logging.getLogger(__name__)

# (machine, task) pairs whose handler is running in the current context.
_Dispatch = Tuple["Machine", "asyncio.Task[Any]"]
_active_dispatches: contextvars.ContextVar[Tuple[_Dispatch, ...]] = contextvars.ContextVar(
    "fsmkit_active_dispatches", default=()
)


class Machine:
    """
    A finite state machine composed of named states, a transition table and
    the name of the current state.

    The topology (states and transitions) is fixed at construction; only the
    current state name changes afterwards. Calls to ``handle`` are serialized
    per machine: a second call waits until the first has applied its transition.
    """

    def __init__(
        self,
        states: Iterable[StateProtocol],
        transitions: Union[TransitionMapping, TransitionTable, None],
        initial_state_name: StateName,
        validator: Optional[Validator] = None,
    ) -> None:
        """
        :param states: The states of the machine; names must be unique.
        :param transitions: ``state name -> {event name -> next state name}``.
        :param initial_state_name: Name of the state the machine starts in.
        :param validator: Optional validator for structure checks.
        :raises ValidationError: If the topology or the initial state is invalid.
        """
        self._validator = validator or Validator()
        self._states: Mapping[StateName, StateProtocol] = MappingProxyType(self._validator.validate_states(states))
        self._validator.validate_state_name(initial_state_name, self.state_names)
        # Always copy so two machines never share a table.
        self._transitions = TransitionTable(transitions)
        self._validator.validate_transitions(self._transitions, self.state_names)

        self._initial_state_name = initial_state_name
        self._current_state_name = initial_state_name
        self._dispatch_lock = asyncio.Lock()

    @property
    def states(self) -> Mapping[StateName, StateProtocol]:
        """Read-only ``name -> state`` mapping."""
        return self._states

    @property
    def state_names(self) -> FrozenSet[StateName]:
        return frozenset(self._states)

    @property
    def transitions(self) -> TransitionTable:
        return self._transitions

    @property
    def initial_state_name(self) -> StateName:
        return self._initial_state_name

    @property
    def current_state_name(self) -> StateName:
        """Name of the current state."""
        return self._current_state_name

    @current_state_name.setter
    def current_state_name(self, state_name: StateName) -> None:
        """
        Move the machine to ``state_name`` without dispatching an event.

        :raises StateNotFoundError: If the name is unknown; the current state is left unchanged.
        """
        self._validator.validate_state_name(state_name, self.state_names)
        logger.debug("State set from '%s' to '%s'", self._current_state_name, state_name)
        self._current_state_name = state_name

    @property
    def current_state(self) -> StateProtocol:
        """The current state object."""
        return self._states[self._current_state_name]

    @property
    def dispatch_lock(self) -> asyncio.Lock:
        """
        Lock held for the duration of each ``handle`` call. Prefer
        :meth:`exclusive`, which also works from inside a handler.
        """
        return self._dispatch_lock

    def in_dispatch(self) -> bool:
        """
        Return True when called from a handler this machine is running in the
        current task. Tasks spawned by a handler are not part of its dispatch.
        """
        active = _active_dispatches.get()
        if not active:
            return False
        task = asyncio.current_task()
        return any(machine is self and owner is task for machine, owner in active)

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator["Machine"]:
        """
        Hold the machine so no dispatch runs inside the block.

        From inside one of this machine's handlers the running dispatch
        already holds the lock, so the block runs without acquiring it and
        sees the pre-transition state.
        """
        if self.in_dispatch():
            yield self
            return
        async with self._dispatch_lock:
            yield self

    def reset(self) -> None:
        """Return the machine to its initial state."""
        self.current_state_name = self._initial_state_name

    async def handle(self, event: EventProtocol) -> Any:
        """
        Dispatch an event to the current state and follow the transition table.

        The next state is chosen before the handler runs, and applied only after
        the handler completes. An event with no edge leaves the state unchanged.
        If the handler raises, the exception propagates and no transition occurs.

        :param event: The event to dispatch.
        :return: The current state's handler result, or None if unhandled.
        :raises ReentrantDispatchError: If called from one of this machine's handlers.
        """
        self._validator.validate_event(event)
        if self.in_dispatch():
            raise ReentrantDispatchError(
                f"Event '{event.name}' dispatched from inside a handler of the same machine",
                details={"state": self._current_state_name, "event_id": event.id},
            )
        event_name, event_id = event.name, event.id
        async with self._dispatch_lock:
            current = self._current_state_name
            next_state_name = self._transitions.next_state_name(current, event_name)
            if next_state_name is None:
                next_state_name = current
            token = _active_dispatches.set(_active_dispatches.get() + ((self, asyncio.current_task()),))
            try:
                result = await self._states[current].handle(event)
            except Exception:
                logger.warning(
                    "Handler for event '%s' (%s) in state '%s' failed; transition to '%s' discarded",
                    event_name,
                    event_id,
                    current,
                    next_state_name,
                )
                raise
            finally:
                _active_dispatches.reset(token)
            self._current_state_name = next_state_name
            logger.debug("Event '%s' (%s): '%s' -> '%s'", event_name, event_id, current, next_state_name)
            return result

    def __repr__(self) -> str:
        return f"Machine(states={sorted(self._states)!r}, current_state_name={self._current_state_name!r})"

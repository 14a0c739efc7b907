# fsmkit/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

from fsmkit.core.errors import ValidationError
from fsmkit.interfaces.protocols import EventProtocol
from fsmkit.interfaces.types import EventName, Handler


class State:
    """
    A named unit of behaviour. A state maps event names to handlers; states
    differ from one another only in which events they handle and how.

    The handler set is fixed at construction. Transitions are not a concern
    of the state; the owning Machine decides where to go next.
    """

    def __init__(self, name: str, handlers: Optional[Mapping[EventName, Handler]] = None) -> None:
        """
        :param name: Identifier of this state, unique within a Machine.
        :param handlers: Mapping of event name to a callable taking the event.
                         Coroutine functions are awaited.
        """
        if not isinstance(name, str) or not name:
            raise ValidationError("State must have a non-empty name.", identifier=name)
        handlers = dict(handlers or {})
        for event_name, handler in handlers.items():
            if not callable(handler):
                raise ValidationError(
                    f"Handler for event '{event_name}' in state '{name}' must be callable.",
                    identifier=event_name,
                )
        self._name = name
        self._handlers: Mapping[EventName, Handler] = MappingProxyType(handlers)

    @property
    def name(self) -> str:
        """The identifier of the state."""
        return self._name

    @property
    def handlers(self) -> Mapping[EventName, Handler]:
        """Read-only view of the registered handlers."""
        return self._handlers

    @property
    def event_names(self) -> FrozenSet[EventName]:
        return frozenset(self._handlers)

    def handles(self, event_name: EventName) -> bool:
        """Return True if a handler is registered for ``event_name``."""
        return event_name in self._handlers

    async def handle(self, event: EventProtocol) -> Any:
        """
        Run the handler registered for ``event.name``.

        :param event: The event being dispatched.
        :return: The handler's result, or None if the event is not handled here.
        """
        handler = self._handlers.get(event.name)
        if handler is None:
            return None
        result = handler(event)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, events={sorted(self._handlers)!r})"

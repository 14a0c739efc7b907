# fsmkit/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable

from fsmkit.interfaces.types import EventID, EventName, StateName


@runtime_checkable
class EventProtocol(Protocol):
    """
    Event protocol for type checking.

    Runtime Invariants:
    - Events are immutable after creation.
    - ``id`` is unique per occurrence; ``name`` is the dispatch key.
    """

    @property
    def id(self) -> EventID: ...

    @property
    def name(self) -> EventName: ...


@runtime_checkable
class StateProtocol(Protocol):
    """
    The capability every state registered in a Machine must expose.

    Methods:
        handle(event): awaitable; returns the handler result, or None when
        the state does not handle ``event.name``.

    Error Handling:
    - Handler failures propagate to the caller of ``Machine.handle``.
    - An unhandled event is not an error.
    """

    name: StateName

    async def handle(self, event: EventProtocol) -> Any: ...

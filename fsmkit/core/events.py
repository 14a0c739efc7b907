# fsmkit/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable

from fsmkit.core.errors import ValidationError


def _new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, eq=False)
class Event:
    """
    Represents one occurrence of a signal sent to the state machine. The name
    selects handlers and transitions; the id only identifies the occurrence.
    """

    name: str
    id: str = field(default_factory=_new_event_id)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("Event must have a non-empty name.", identifier=self.name)

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Events are equal if they carry the same id."""
        if not isinstance(other, Event):
            return NotImplemented
        return self.id == other.id

    @classmethod
    def create(cls, name: str) -> "Event":
        """
        Create an event with a freshly generated id.

        :param name: The dispatch key of the event.
        """
        return cls(name=name)


def event_factory(name: str) -> Callable[[], Event]:
    """
    Return a zero-argument callable producing a new Event named ``name``
    (with a fresh id) on every call.
    """
    if not isinstance(name, str) or not name:
        raise ValidationError("Event must have a non-empty name.", identifier=name)

    def _generate() -> Event:
        return Event.create(name)

    return _generate

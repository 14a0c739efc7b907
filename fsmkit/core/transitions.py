# fsmkit/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import AbstractSet, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from fsmkit.core.errors import StateNotFoundError, ValidationError
from fsmkit.interfaces.types import EventName, StateName, TransitionMapping


class TransitionTable(MappingABC):
    """
    Read-only mapping of ``state name -> {event name -> next state name}``.

    The table is copied on construction so that later changes to the source
    dictionaries are not observed. Each (state, event) pair has at most one
    target, which keeps dispatch deterministic.
    """

    def __init__(self, transitions: Optional[TransitionMapping] = None) -> None:
        table: Dict[StateName, Mapping[EventName, StateName]] = {}
        for state_name, edges in (transitions or {}).items():
            if not isinstance(edges, MappingABC):
                raise ValidationError(
                    f"Transitions from '{state_name}' must map event names to state names, got {edges!r}",
                    identifier=state_name,
                )
            table[state_name] = MappingProxyType(dict(edges))
        self._table = table

    def __getitem__(self, state_name: StateName) -> Mapping[EventName, StateName]:
        return self._table[state_name]

    def __iter__(self) -> Iterator[StateName]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        plain = {source: dict(edges) for source, edges in self._table.items()}
        return f"TransitionTable({plain!r})"

    def next_state_name(self, state_name: StateName, event_name: EventName) -> Optional[StateName]:
        """
        Look up the target of the edge labelled ``event_name`` leaving ``state_name``.

        :return: The target state name, or None if no such edge exists.
        """
        edges = self._table.get(state_name)
        if edges is None:
            return None
        return edges.get(event_name)

    def edges(self) -> Iterator[Tuple[StateName, EventName, StateName]]:
        """Yield every ``(source, event, target)`` triple in the table."""
        for source, edges in self._table.items():
            for event_name, target in edges.items():
                yield source, event_name, target

    def state_names(self) -> FrozenSet[StateName]:
        """All state names referenced as a source or a target."""
        names = set(self._table)
        for _, _, target in self.edges():
            names.add(target)
        return frozenset(names)

    def validate(self, known_state_names: AbstractSet[StateName]) -> None:
        """
        Check that every source and target is a known state.

        :param known_state_names: Names of the states of the owning machine.
        :raises StateNotFoundError: On the first unknown name found.
        """
        valid = sorted(known_state_names)
        for source, edges in self._table.items():
            if source not in known_state_names:
                raise StateNotFoundError(
                    f"Transition source '{source}' is not a valid state; must be one of {valid}",
                    identifier=source,
                    valid_identifiers=valid,
                )
            for event_name, target in edges.items():
                if target not in known_state_names:
                    raise StateNotFoundError(
                        f"Transition target '{target}' (from '{source}' on '{event_name}') "
                        f"is not a valid state; must be one of {valid}",
                        identifier=target,
                        valid_identifiers=valid,
                    )

# fsmkit/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Iterable, Optional, Tuple


class FSMError(Exception):
    """
    Base exception class for errors within the finite state machine library.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(FSMError):
    """
    Raised when validation detects configuration or runtime constraint violations.

    :param identifier: The offending identifier, if any.
    :param valid_identifiers: The identifiers that would have been accepted.
    """

    def __init__(
        self,
        message: str,
        identifier: Optional[str] = None,
        valid_identifiers: Iterable[str] = (),
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.identifier = identifier
        self.valid_identifiers: Tuple[str, ...] = tuple(valid_identifiers)


class StateNotFoundError(ValidationError):
    """
    Raised when a referenced state name does not exist in the machine.
    """


class DuplicateStateError(ValidationError):
    """
    Raised when two states supplied to one machine share a name.
    """


class ReentrantDispatchError(FSMError):
    """
    Raised when ``handle`` is called on a machine from inside one of its own
    handlers. The nested call could never acquire the dispatch lock.
    """

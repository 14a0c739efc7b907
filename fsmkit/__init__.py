"""fsmkit: a small finite state machine runtime

A machine is built from named states, each holding handlers keyed by event
name, and a transition table keyed by (state name, event name). Dispatching
an event runs the current state's handler and then follows the table.

Responsibilities:
    - State and transition definition
    - Validated construction (directly or through MachineBuilder)
    - Serialized asynchronous event dispatch
    - Persistence of the current state name

Cross-cutting Concerns:
    Concurrency:
        - One dispatch in flight per machine, enforced by an asyncio lock
        - No shared mutable state between machines

    Error Handling:
        - Topology problems fail at construction with ValidationError
        - Handler failures propagate and cancel the pending transition
        - Unhandled events are not errors

    Logging:
        - Standard library logging, one logger per module
        - The library never configures handlers
"""

from fsmkit.core.builder import MachineBuilder
from fsmkit.core.errors import (
    DuplicateStateError,
    FSMError,
    ReentrantDispatchError,
    StateNotFoundError,
    ValidationError,
)
from fsmkit.core.events import Event, event_factory
from fsmkit.core.machine import Machine
from fsmkit.core.states import State
from fsmkit.core.transitions import TransitionTable
from fsmkit.core.validations import Validator
from fsmkit.interfaces.protocols import EventProtocol, StateProtocol
from fsmkit.persistence.serializer import dump_state, load_state, reload_state, save_state

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Event",
    "event_factory",
    "State",
    "TransitionTable",
    "Machine",
    "MachineBuilder",
    "Validator",
    # Protocols
    "EventProtocol",
    "StateProtocol",
    # Errors
    "FSMError",
    "ValidationError",
    "StateNotFoundError",
    "DuplicateStateError",
    "ReentrantDispatchError",
    # Persistence
    "dump_state",
    "load_state",
    "save_state",
    "reload_state",
]

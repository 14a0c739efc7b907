# fsmkit/persistence/serializer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Persistence of a machine's current state name.

Only the name of the current state is stored: the sink holds its raw UTF-8
bytes with no header, framing or version tag. The topology is never
serialized, so a machine must be rebuilt with the same states and
transitions before ``reload_state`` is applied to it.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Union

from fsmkit.core.machine import Machine
from fsmkit.interfaces.types import StateName

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

PathType = Union[str, "os.PathLike[str]"]


def dump_state(machine: Machine) -> bytes:
    """Encode the machine's current state name."""
    return machine.current_state_name.encode(ENCODING)


def load_state(machine: Machine, data: bytes) -> StateName:
    """
    Decode ``data`` and make it the machine's current state.

    :raises UnicodeDecodeError: If ``data`` is not valid UTF-8.
    :raises StateNotFoundError: If the decoded name is not a state of ``machine``.
    :return: The new current state name.
    """
    state_name = data.decode(ENCODING)
    machine.current_state_name = state_name
    return state_name


async def save_state(machine: Machine, path: PathType) -> None:
    """
    Overwrite the file at ``path`` with the machine's current state name.

    Waits for any in-flight dispatch to finish first; called from one of the
    machine's own handlers it saves the state that handler runs in.
    I/O errors propagate.
    """
    async with machine.exclusive():
        state_name = machine.current_state_name
        await asyncio.to_thread(Path(path).write_bytes, dump_state(machine))
    logger.debug("Saved state '%s' to %s", state_name, path)


async def reload_state(machine: Machine, path: PathType) -> StateName:
    """
    Read the whole file at ``path`` and restore it as the current state name.

    Called from one of the machine's own handlers, the restored name is
    replaced by the transition that dispatch applies when it completes.

    :raises OSError: If the file cannot be read.
    :raises StateNotFoundError: If the stored name is not a state of ``machine``.
    :return: The restored state name.
    """
    async with machine.exclusive():
        data = await asyncio.to_thread(Path(path).read_bytes)
        state_name = load_state(machine, data)
    logger.debug("Reloaded state '%s' from %s", state_name, path)
    return state_name

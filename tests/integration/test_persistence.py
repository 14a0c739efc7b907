# tests/integration/test_persistence.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio

import pytest

from fsmkit.core.errors import StateNotFoundError
from fsmkit.core.events import Event
from fsmkit.core.machine import Machine
from fsmkit.core.states import State
from fsmkit.persistence.serializer import reload_state, save_state
from tests.utils import THREE_IN_A_ROW, build_scenario_machine


@pytest.mark.asyncio
async def test_round_trip_between_machines(scenario_machine, event1, state_file):
    await scenario_machine.handle(event1())
    await scenario_machine.handle(event1())
    await save_state(scenario_machine, state_file)

    restored = build_scenario_machine()
    await reload_state(restored, state_file)
    assert restored.current_state_name == scenario_machine.current_state_name == "S2"
    assert await restored.handle(event1()) == THREE_IN_A_ROW


@pytest.mark.asyncio
async def test_reload_into_different_topology_fails(scenario_machine, state_file):
    await save_state(scenario_machine, state_file)
    other = Machine([State("idle")], {}, "idle")
    with pytest.raises(StateNotFoundError) as exc_info:
        await reload_state(other, state_file)
    assert exc_info.value.identifier == "S0"
    assert other.current_state_name == "idle"


@pytest.mark.asyncio
async def test_save_waits_for_in_flight_dispatch(state_file):
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow(event):
        started.set()
        await release.wait()

    machine = Machine([State("a", {"go": slow}), State("b")], {"a": {"go": "b"}}, "a")
    dispatch = asyncio.create_task(machine.handle(Event("go")))
    await started.wait()
    save = asyncio.create_task(save_state(machine, state_file))
    await asyncio.sleep(0.01)
    assert not save.done()

    release.set()
    await dispatch
    await save
    assert state_file.read_bytes() == b"b"


@pytest.mark.asyncio
async def test_handler_can_save_its_own_machine(state_file):
    machine = None

    async def persist(event):
        await save_state(machine, state_file)
        return "saved"

    machine = Machine([State("a", {"go": persist}), State("b")], {"a": {"go": "b"}}, "a")
    assert await asyncio.wait_for(machine.handle(Event("go")), timeout=1) == "saved"
    # The handler runs before the transition is applied.
    assert state_file.read_bytes() == b"a"
    assert machine.current_state_name == "b"

    await save_state(machine, state_file)
    assert state_file.read_bytes() == b"b"


@pytest.mark.asyncio
async def test_handler_can_reload_its_own_machine(state_file):
    state_file.write_bytes(b"c")
    machine = None

    async def restore(event):
        return await reload_state(machine, state_file)

    machine = Machine([State("a", {"load": restore}), State("b"), State("c")], {}, "a")
    assert await asyncio.wait_for(machine.handle(Event("load")), timeout=1) == "c"
    # No edge for 'load', so the self-loop puts the machine back where the dispatch began.
    assert machine.current_state_name == "a"

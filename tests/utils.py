# tests/utils.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from fsmkit.core.builder import MachineBuilder
from fsmkit.core.states import State

THREE_IN_A_ROW = "Event1 was fired 3 times in a row!"

SCENARIO_EDGES = {
    "S0": {"event1": "S1"},
    "S1": {"event1": "S2", "event2": "S0"},
    "S2": {"event1": "S2", "event2": "S0"},
}


def scenario_states():
    async def report_streak(event):
        return THREE_IN_A_ROW

    return [State("S0"), State("S1"), State("S2", {"event1": report_streak})]


def build_scenario_machine(states=None):
    """
    Machine with states S0, S1, S2 where three consecutive event1's from S0
    reach S2 and make it report the streak; event2 always routes back to S0.
    """
    if states is None:
        states = scenario_states()
    return (
        MachineBuilder()
        .states(states)
        .transition("S0", "event1", "S1")
        .transition("S1", "event1", "S2")
        .transition("S1", "event2", "S0")
        .transition("S2", "event1", "S2")
        .transition("S2", "event2", "S0")
        .initial_state_name("S0")
        .build()
    )

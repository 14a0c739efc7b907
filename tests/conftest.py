# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from fsmkit.core.events import event_factory
from tests.utils import build_scenario_machine


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def event1():
    """Generator of fresh 'event1' events."""
    return event_factory("event1")


@pytest.fixture
def event2():
    """Generator of fresh 'event2' events."""
    return event_factory("event2")


@pytest.fixture
def scenario_machine():
    return build_scenario_machine()


@pytest.fixture
def state_file(tmp_path):
    """Path of a not-yet-existing state sink."""
    return tmp_path / "machine.state"

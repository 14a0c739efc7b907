# fsmkit/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Awaitable, Callable, Mapping, Union

StateName = str
EventName = str
EventID = str

# Handlers may be plain callables or coroutine functions.
Handler = Callable[[Any], Union[Any, Awaitable[Any]]]
TransitionMapping = Mapping[StateName, Mapping[EventName, StateName]]

"""
Global sequencer - puts every control message in device order.

Purely a consolidation step: concatenate, then stable-sort by tick.
"""

from __future__ import annotations

from collections.abc import Iterable

from chuk_mcp_arduino_midi.errors import MergeInvariantViolationError
from chuk_mcp_arduino_midi.models.messages import ControlMessage


def sequence_messages(*groups: Iterable[ControlMessage]) -> list[ControlMessage]:
    """
    Concatenate message groups and sort them by tick position.

    The sort is stable, so equal ticks would keep insertion order, but
    equal ticks mean the merge pass failed and are rejected.

    Raises:
        MergeInvariantViolationError: If two messages share a tick position
    """
    merged: list[ControlMessage] = []
    for group in groups:
        merged.extend(group)
    merged.sort(key=lambda message: message.tick_position)

    for previous, current in zip(merged, merged[1:]):
        if previous.tick_position == current.tick_position:
            raise MergeInvariantViolationError(current.tick_position)

    return merged

"""
Timing resolver - second pass of the conversion.

Turns tick gaps between consecutive messages into microsecond waits while
following tempo changes. A tempo message changes only the intervals after
it; the interval leading into it still uses the previous tempo.
"""

from __future__ import annotations

from collections.abc import Sequence

from chuk_mcp_arduino_midi.constants import NO_NEXT_EVENT
from chuk_mcp_arduino_midi.core.tempo import TempoState
from chuk_mcp_arduino_midi.models.messages import ControlMessage


def resolve_timing(
    messages: Sequence[ControlMessage],
    ticks_per_quarter_note: int,
    initial_bpm: int,
) -> TempoState:
    """
    Fill in relative ticks, wait intervals and timestamps in place.

    Args:
        messages: Messages sorted by tick position
        ticks_per_quarter_note: Time division of the song
        initial_bpm: Tempo before the first tempo message

    Returns:
        The tempo state as it stands after the last message

    Raises:
        InvalidTempoError: If the initial or any later BPM is not positive
    """
    tempo = TempoState(ticks_per_quarter_note, initial_bpm)
    previous: ControlMessage | None = None

    for message in messages:
        if previous is None:
            message.relative_ticks = message.tick_position
            message.approx_timestamp_ms = 0
        else:
            message.relative_ticks = message.tick_position - previous.tick_position
            previous.wait_microseconds = tempo.interval_microseconds(message.relative_ticks)
            message.approx_timestamp_ms = (
                previous.approx_timestamp_ms + previous.wait_microseconds // 1000
            )

        if message.is_tempo and message.bpm is not None:
            tempo.set_tempo(message.bpm)

        previous = message

    if previous is not None:
        previous.wait_microseconds = NO_NEXT_EVENT

    return tempo

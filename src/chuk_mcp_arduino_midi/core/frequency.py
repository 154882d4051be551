"""
Frequency table - note number to oscillator half-period.

The table holds the full period of each note in microseconds. Only four
octaves (C1-B4, MIDI 24-71) are populated; everything else is zero,
which the device treats as silence.

A zero period is also what a note-off puts on the wire, so callers
cannot tell "silent note" apart from "unsupported note".
"""

from __future__ import annotations

from chuk_mcp_arduino_midi.constants import TIMER_RESOLUTION

# Silence / note-off period value
SILENCE = 0

# Lowest and highest populated note numbers
LOWEST_NOTE = 24  # C1
HIGHEST_NOTE = 71  # B4

_ZERO_OCTAVE = (0,) * 12

# fmt: off
MICRO_PERIODS: tuple[int, ...] = (
    *_ZERO_OCTAVE,
    *_ZERO_OCTAVE,
    30578, 28861, 27242, 25713, 24270, 22909, 21622, 20409, 19263, 18182, 17161, 16198,  # C1-B1
    15289, 14436, 13621, 12856, 12135, 11454, 10811, 10205, 9632, 9091, 8581, 8099,  # C2-B2
    7645, 7218, 6811, 6428, 6068, 5727, 5406, 5103, 4816, 4546, 4291, 4050,  # C3-B3
    3823, 3609, 3406, 3214, 3034, 2864, 2703, 2552, 2408, 2273, 2146, 2025,  # C4-B4
    *_ZERO_OCTAVE,
    *_ZERO_OCTAVE,
    *_ZERO_OCTAVE,
    *_ZERO_OCTAVE,
    *_ZERO_OCTAVE[:8],  # 120-127
)
# fmt: on


def period_for(note: int, resolution: int = TIMER_RESOLUTION) -> int:
    """
    Get the half-period of a note in hardware timer ticks.

    Args:
        note: MIDI note number
        resolution: Timer resolution in microseconds per timer tick

    Returns:
        table[note] // (2 * resolution), or 0 for notes outside the table
    """
    if not 0 <= note < len(MICRO_PERIODS):
        return SILENCE
    return MICRO_PERIODS[note] // (2 * resolution)


def encode_frame(channel: int, period: int) -> bytes:
    """
    Encode one 3-byte payload frame.

    Args:
        channel: 0-based MIDI channel (written 1-based)
        period: Half-period in timer ticks (0 = stop the channel)
    """
    return bytes(((channel + 1) & 0xFF, (period >> 8) & 0xFF, period & 0xFF))


def is_populated(note: int) -> bool:
    """Check whether a note has a non-zero table entry."""
    return 0 <= note < len(MICRO_PERIODS) and MICRO_PERIODS[note] != 0

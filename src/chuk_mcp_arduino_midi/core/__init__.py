"""
Core primitives - the lookup table and the tempo factor.

- MICRO_PERIODS / period_for: note number to half-period
- encode_frame: one (channel, period_hi, period_lo) wire frame
- TempoState: ticks to microseconds at the active tempo
"""

from chuk_mcp_arduino_midi.core.frequency import (
    HIGHEST_NOTE,
    LOWEST_NOTE,
    MICRO_PERIODS,
    SILENCE,
    encode_frame,
    is_populated,
    period_for,
)
from chuk_mcp_arduino_midi.core.tempo import TempoState

__all__ = [
    # Frequency
    "HIGHEST_NOTE",
    "LOWEST_NOTE",
    "MICRO_PERIODS",
    "SILENCE",
    "encode_frame",
    "is_populated",
    "period_for",
    # Tempo
    "TempoState",
]

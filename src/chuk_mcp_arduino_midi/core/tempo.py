"""
Tempo state - the live tick-to-time scaling factor.

The time division is fixed for a whole conversion; the BPM changes
whenever a tempo message is passed during the timing pass.
"""

from __future__ import annotations

from chuk_mcp_arduino_midi.constants import ErrorMessages
from chuk_mcp_arduino_midi.errors import InvalidTempoError


class TempoState:
    """
    Active tempo plus the derived seconds-per-tick factor.

    Example:
        state = TempoState(ticks_per_quarter_note=480, bpm=120)
        state.interval_microseconds(480)  # 500000
    """

    __slots__ = ("_bpm", "_seconds_per_tick", "ticks_per_quarter_note")

    def __init__(self, ticks_per_quarter_note: int, bpm: int):
        if ticks_per_quarter_note <= 0:
            raise InvalidTempoError(
                bpm,
                ErrorMessages.INVALID_TIME_DIVISION.format(ticks=ticks_per_quarter_note),
            )
        self.ticks_per_quarter_note = ticks_per_quarter_note
        self._bpm = 0
        self._seconds_per_tick = 0.0
        self.set_tempo(bpm)

    @property
    def bpm(self) -> int:
        """Currently active tempo."""
        return self._bpm

    @property
    def seconds_per_tick(self) -> float:
        """Duration of one tick at the active tempo."""
        return self._seconds_per_tick

    def set_tempo(self, bpm: int) -> None:
        """
        Switch to a new tempo.

        Raises:
            InvalidTempoError: If bpm is zero or negative
        """
        if bpm <= 0:
            raise InvalidTempoError(bpm)
        self._bpm = bpm
        seconds_per_beat = 60.0 / bpm
        self._seconds_per_tick = seconds_per_beat / self.ticks_per_quarter_note

    def interval_microseconds(self, relative_ticks: int) -> int:
        """Wall-clock length of a tick gap, truncated to whole microseconds."""
        return int(relative_ticks * self._seconds_per_tick * 1000 * 1000)

    def __repr__(self) -> str:
        return (
            f"TempoState(ticks_per_quarter_note={self.ticks_per_quarter_note}, bpm={self._bpm})"
        )

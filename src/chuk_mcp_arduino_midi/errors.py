"""
Conversion errors.

Every failure is terminal for the whole conversion: there is no
best-effort output.
"""

from __future__ import annotations

from chuk_mcp_arduino_midi.constants import ErrorMessages


class ConversionError(ValueError):
    """Base class for errors that abort a conversion."""


class InvalidTempoError(ConversionError):
    """A zero or negative BPM (or time division) reached the tempo state."""

    def __init__(self, bpm: float, message: str | None = None):
        self.bpm = bpm
        super().__init__(message or ErrorMessages.INVALID_TEMPO.format(bpm=bpm))


class MergeInvariantViolationError(ConversionError):
    """
    More than one control message claims the same tick position.

    The timeline builder keeps one message per tick, so this always
    points at a builder bug rather than bad input.
    """

    def __init__(self, tick: int):
        self.tick = tick
        super().__init__(ErrorMessages.DUPLICATE_TICK.format(tick=tick))

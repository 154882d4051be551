"""
Constants and enums for the converter.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal

# Hardware timer resolution in microseconds per timer tick.
# Half-periods are divided by 2 * TIMER_RESOLUTION before hitting the wire.
TIMER_RESOLUTION = 40

# Tempo used when a file carries no set_tempo meta message (MIDI default)
DEFAULT_BPM = 120

# Wait interval carried by a message with no successor
NO_NEXT_EVENT = 0

# Bytes per payload frame: (channel, period_hi, period_lo)
FRAME_SIZE = 3


class MessageKind(str, Enum):
    """Tag of a control message slot."""

    PLAIN = "plain"
    TEMPO = "tempo"


# Output schema version - frozen for v1
SchemaVersion = Literal["control_messages/v1"]
SCHEMA_VERSION: SchemaVersion = "control_messages/v1"


class ErrorMessages:
    """Standardized error messages."""

    INVALID_TEMPO = "Invalid tempo: {bpm}. BPM must be greater than zero."
    INVALID_TIME_DIVISION = (
        "Invalid time division: {ticks}. Ticks per quarter note must be greater than zero."
    )
    DUPLICATE_TICK = "Duplicate control messages at tick {tick} after merge."
    FILE_NOT_FOUND = "MIDI file not found: {path}"

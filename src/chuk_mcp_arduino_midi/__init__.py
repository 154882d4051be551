"""
CHUK Arduino MIDI - MIDI timelines to timed tone-control messages.

Converts parsed MIDI tracks into one ordered list of control messages,
each a payload of (channel, period_hi, period_lo) frames plus the
microseconds a microcontroller must wait before the next message.
"""

from chuk_mcp_arduino_midi.compiler import TrackConverter, convert_midi_file, convert_song
from chuk_mcp_arduino_midi.config import ConverterConfig, load_config
from chuk_mcp_arduino_midi.errors import (
    ConversionError,
    InvalidTempoError,
    MergeInvariantViolationError,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConverterConfig",
    "InvalidTempoError",
    "MergeInvariantViolationError",
    "TrackConverter",
    "convert_midi_file",
    "convert_song",
    "load_config",
]

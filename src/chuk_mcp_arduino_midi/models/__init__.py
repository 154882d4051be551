"""
Models for the converter.

This module provides:
- MidiSong / FileHeader / Track: the parsed input
- NoteOnEvent / NoteOffEvent / TempoChangeEvent / OtherEvent: source events
- ControlMessage / ConvertedTrack: the output
"""

from chuk_mcp_arduino_midi.models.events import (
    FileHeader,
    MidiSong,
    NoteOffEvent,
    NoteOnEvent,
    OtherEvent,
    SourceEvent,
    TempoChangeEvent,
    Track,
)
from chuk_mcp_arduino_midi.models.messages import ControlMessage, ConvertedTrack

__all__ = [
    "ControlMessage",
    "ConvertedTrack",
    "FileHeader",
    "MidiSong",
    "NoteOffEvent",
    "NoteOnEvent",
    "OtherEvent",
    "SourceEvent",
    "TempoChangeEvent",
    "Track",
]

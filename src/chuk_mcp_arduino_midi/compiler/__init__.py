"""
Conversion pipeline - transforms MIDI timelines into control messages.

The pipeline:
    MIDI file → MidiSong (mido import)
    → TimelineBuilder (same-tick events merged)
    → sequence_messages (chronological order)
    → resolve_timing (wait intervals)
    → ConvertedTrack
"""

from chuk_mcp_arduino_midi.compiler.converter import (
    TrackConverter,
    convert_midi_file,
    convert_song,
)
from chuk_mcp_arduino_midi.compiler.midi import (
    TICKS_PER_BEAT,
    create_test_midi,
    load_midi_file,
    song_from_midi,
)
from chuk_mcp_arduino_midi.compiler.sequencer import sequence_messages
from chuk_mcp_arduino_midi.compiler.timeline import (
    MessageIndex,
    TimelineBuilder,
    build_timeline,
)
from chuk_mcp_arduino_midi.compiler.timing import resolve_timing

__all__ = [
    # Converter
    "TrackConverter",
    "convert_midi_file",
    "convert_song",
    # MIDI
    "TICKS_PER_BEAT",
    "create_test_midi",
    "load_midi_file",
    "song_from_midi",
    # Passes
    "MessageIndex",
    "TimelineBuilder",
    "build_timeline",
    "resolve_timing",
    "sequence_messages",
]

"""
Track converter - runs the whole conversion pipeline.

The pipeline:
    MidiSong (tracks of delta-timed events)
    → TimelineBuilder (one message per tick position)
    → sequence_messages (device order)
    → resolve_timing (microsecond waits, tempo tracking)
    → ConvertedTrack

Conversion is deterministic: same song → same messages. Any error aborts
the whole conversion; there is no partial output.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chuk_mcp_arduino_midi.compiler.midi import load_midi_file
from chuk_mcp_arduino_midi.compiler.sequencer import sequence_messages
from chuk_mcp_arduino_midi.compiler.timeline import TimelineBuilder
from chuk_mcp_arduino_midi.compiler.timing import resolve_timing
from chuk_mcp_arduino_midi.config import ConverterConfig
from chuk_mcp_arduino_midi.core.tempo import TempoState
from chuk_mcp_arduino_midi.models.events import MidiSong
from chuk_mcp_arduino_midi.models.messages import ConvertedTrack

logger = logging.getLogger(__name__)


class TrackConverter:
    """
    Converts a parsed song into timed control messages.

    Each call to convert() uses fresh pass state, so one converter can be
    reused across songs.
    """

    def __init__(self, config: ConverterConfig | None = None):
        """
        Initialize the converter.

        Args:
            config: Converter settings (defaults if omitted)
        """
        self.config = config or ConverterConfig()

    def convert(self, song: MidiSong) -> ConvertedTrack:
        """
        Convert a song.

        Args:
            song: The parsed song

        Returns:
            ConvertedTrack with messages in device order

        Raises:
            InvalidTempoError: If the song or a tempo change has a non-positive BPM
            MergeInvariantViolationError: If two messages end up on one tick
        """
        header = song.header

        # Fail on a bad starting tempo before doing any work
        TempoState(header.ticks_per_quarter_note, header.initial_bpm)

        builder = TimelineBuilder(self.config.timer_resolution)
        built = builder.build(song.tracks)
        logger.debug(f"Timeline pass: {len(built)} messages from {len(song.tracks)} tracks")

        messages = sequence_messages(built)

        final_tempo = resolve_timing(
            messages,
            ticks_per_quarter_note=header.ticks_per_quarter_note,
            initial_bpm=header.initial_bpm,
        )
        logger.debug(f"Timing pass: final tempo {final_tempo.bpm} BPM")

        converted = ConvertedTrack(
            initial_bpm=header.initial_bpm,
            messages=messages,
            ticks_per_quarter_note=header.ticks_per_quarter_note,
            source=song,
        )
        logger.info(
            f"Converted {song.event_count} events into {len(messages)} messages "
            f"({converted.total_microseconds() // 1000} ms)"
        )
        return converted


def convert_song(song: MidiSong, config: ConverterConfig | None = None) -> ConvertedTrack:
    """Convert a parsed song with a one-off converter."""
    return TrackConverter(config).convert(song)


def convert_midi_file(path: Path, config: ConverterConfig | None = None) -> ConvertedTrack:
    """Read a MIDI file and convert it."""
    song = load_midi_file(path, config)
    return TrackConverter(config).convert(song)

"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_arduino_midi.models.events import (
    FileHeader,
    MidiSong,
    NoteOffEvent,
    NoteOnEvent,
    TempoChangeEvent,
    Track,
)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def simple_song() -> MidiSong:
    """
    Two tracks: a melody with a tempo change at tick 960 and a bass line.

    Melody (channel 0): A3 on at 0, off at 480, C4 on at 480, off at 960.
    Bass (channel 1): A1 on at 0, off at 960.
    """
    melody = Track(
        name="melody",
        events=[
            NoteOnEvent(delta_ticks=0, channel=0, note=57),
            NoteOffEvent(delta_ticks=480, channel=0, note=57),
            NoteOnEvent(delta_ticks=0, channel=0, note=60),
            NoteOffEvent(delta_ticks=480, channel=0, note=60),
            TempoChangeEvent(delta_ticks=0, bpm=60),
        ],
    )
    bass = Track(
        name="bass",
        events=[
            NoteOnEvent(delta_ticks=0, channel=1, note=33),
            NoteOffEvent(delta_ticks=960, channel=1, note=33),
            NoteOnEvent(delta_ticks=480, channel=1, note=33),
            NoteOffEvent(delta_ticks=480, channel=1, note=33),
        ],
    )
    return MidiSong(
        header=FileHeader(ticks_per_quarter_note=480, initial_bpm=120),
        tracks=[melody, bass],
    )

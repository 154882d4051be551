"""
MIDI import - the front of the pipeline.

Reads standard MIDI files with mido and reshapes them into the song
model the converter consumes. Delta times are kept exactly as stored,
including those of events the converter ignores.
"""

from __future__ import annotations

from pathlib import Path

import mido
from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_arduino_midi.config import ConverterConfig
from chuk_mcp_arduino_midi.constants import DEFAULT_BPM, ErrorMessages
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

# Resolution used by create_test_midi
TICKS_PER_BEAT = 480


def tempo_to_bpm(tempo: int) -> int:
    """Convert microseconds per beat to a whole BPM."""
    return round(mido.tempo2bpm(tempo))


def find_initial_bpm(mid: MidiFile, default: int = DEFAULT_BPM) -> int:
    """
    Get the tempo in effect at tick zero.

    Uses the first set_tempo found at the very start of any track,
    in track order.
    """
    for track in mid.tracks:
        tick = 0
        for msg in track:
            tick += msg.time
            if tick > 0:
                break
            if msg.type == "set_tempo":
                return tempo_to_bpm(msg.tempo)
    return default


def convert_message(msg: Message | MetaMessage, config: ConverterConfig) -> SourceEvent:
    """Map one mido message to a source event, keeping its delta."""
    if msg.type == "note_on":
        if msg.velocity == 0 and config.zero_velocity_note_on_is_off:
            return NoteOffEvent(delta_ticks=msg.time, channel=msg.channel, note=msg.note)
        return NoteOnEvent(delta_ticks=msg.time, channel=msg.channel, note=msg.note)
    if msg.type == "note_off":
        return NoteOffEvent(delta_ticks=msg.time, channel=msg.channel, note=msg.note)
    if msg.type == "set_tempo":
        return TempoChangeEvent(delta_ticks=msg.time, bpm=tempo_to_bpm(msg.tempo))
    return OtherEvent(delta_ticks=msg.time, description=msg.type)


def song_from_midi(
    mid: MidiFile,
    path: Path | None = None,
    config: ConverterConfig | None = None,
) -> MidiSong:
    """
    Convert a mido MidiFile to a MidiSong.

    Args:
        mid: The parsed MIDI file
        path: Where the file came from, kept as a back-reference
        config: Converter settings (defaults if omitted)

    Returns:
        A MidiSong with one Track per MIDI track
    """
    config = config or ConverterConfig()
    tracks = [
        Track(
            name=track.name,
            events=[convert_message(msg, config) for msg in track],
        )
        for track in mid.tracks
    ]
    header = FileHeader(
        ticks_per_quarter_note=mid.ticks_per_beat,
        initial_bpm=find_initial_bpm(mid, config.default_bpm),
    )
    return MidiSong(header=header, tracks=tracks, source_path=path)


def load_midi_file(path: Path, config: ConverterConfig | None = None) -> MidiSong:
    """
    Read a MIDI file from disk.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(ErrorMessages.FILE_NOT_FOUND.format(path=path))
    return song_from_midi(MidiFile(str(path)), path=path, config=config)


def create_test_midi(tempo_bpm: int = 120, ticks_per_beat: int = TICKS_PER_BEAT) -> MidiFile:
    """
    Create a small two-track MIDI file.

    Track 0 carries the tempo map (doubling the tempo after one bar);
    track 1 plays a C major arpeggio in the populated range, one note
    per beat, on channel 0, with a bass C2 on channel 1 on every downbeat.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)

    tempo_track = MidiTrack()
    tempo_track.append(MetaMessage("track_name", name="tempo", time=0))
    tempo_track.append(MetaMessage("set_tempo", tempo=mido.bpm2tempo(tempo_bpm), time=0))
    tempo_track.append(
        MetaMessage("set_tempo", tempo=mido.bpm2tempo(tempo_bpm * 2), time=ticks_per_beat * 4)
    )
    tempo_track.append(MetaMessage("end_of_track", time=0))
    mid.tracks.append(tempo_track)

    notes = MidiTrack()
    notes.append(MetaMessage("track_name", name="arpeggio", time=0))
    notes.append(Message("program_change", program=80, channel=0, time=0))
    for _ in range(2):
        for beat, pitch in enumerate((48, 52, 55, 60)):
            if beat == 0:
                notes.append(Message("note_on", channel=1, note=36, velocity=90, time=0))
            notes.append(Message("note_on", channel=0, note=pitch, velocity=100, time=0))
            notes.append(
                Message("note_off", channel=0, note=pitch, velocity=0, time=ticks_per_beat)
            )
            if beat == 3:
                notes.append(Message("note_off", channel=1, note=36, velocity=0, time=0))
    notes.append(MetaMessage("end_of_track", time=0))
    mid.tracks.append(notes)

    return mid

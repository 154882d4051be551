"""
Source event model - what the MIDI parser hands over.

A song is a header plus tracks; each track is an ordered chain of events
whose delta_ticks count from the previous event in the same track.
The converter assumes this structure is already well-formed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chuk_mcp_arduino_midi.constants import DEFAULT_BPM


class NoteOnEvent(BaseModel):
    """Start a tone on a channel."""

    kind: Literal["note_on"] = "note_on"
    delta_ticks: int = Field(0, ge=0, description="Ticks since the previous event in the track")
    channel: int = Field(0, description="MIDI channel (0-15)")
    note: int = Field(..., description="MIDI note number (0-127)")

    model_config = {"frozen": True}


class NoteOffEvent(BaseModel):
    """Stop the tone on a channel."""

    kind: Literal["note_off"] = "note_off"
    delta_ticks: int = Field(0, ge=0, description="Ticks since the previous event in the track")
    channel: int = Field(0, description="MIDI channel (0-15)")
    note: int = Field(0, description="MIDI note number (0-127)")

    model_config = {"frozen": True}


class TempoChangeEvent(BaseModel):
    """Switch the song tempo. BPM is checked by the tempo state, not here."""

    kind: Literal["tempo_change"] = "tempo_change"
    delta_ticks: int = Field(0, ge=0, description="Ticks since the previous event in the track")
    bpm: int = Field(..., description="New tempo in beats per minute")

    model_config = {"frozen": True}


class OtherEvent(BaseModel):
    """
    Any event the converter does not act on.

    Kept in the chain so its delta still advances the tick position.
    """

    kind: Literal["other"] = "other"
    delta_ticks: int = Field(0, ge=0, description="Ticks since the previous event in the track")
    description: str = Field("", description="MIDI message type, for inspection")

    model_config = {"frozen": True}


SourceEvent = Annotated[
    NoteOnEvent | NoteOffEvent | TempoChangeEvent | OtherEvent,
    Field(discriminator="kind"),
]


class Track(BaseModel):
    """An ordered chain of source events. Tick accounting restarts per track."""

    name: str = Field("", description="Track name, if the file had one")
    events: list[SourceEvent] = Field(default_factory=list)

    @property
    def total_ticks(self) -> int:
        """Tick position of the last event."""
        return sum(event.delta_ticks for event in self.events)


class FileHeader(BaseModel):
    """Time division and starting tempo of a song."""

    ticks_per_quarter_note: int = Field(..., description="Time division")
    initial_bpm: int = Field(DEFAULT_BPM, description="Tempo before any tempo change")


class MidiSong(BaseModel):
    """A parsed MIDI file: header plus tracks."""

    header: FileHeader
    tracks: list[Track] = Field(default_factory=list)
    source_path: Path | None = Field(None, description="File the song was read from")

    @property
    def event_count(self) -> int:
        """Number of events across all tracks."""
        return sum(len(track.events) for track in self.tracks)

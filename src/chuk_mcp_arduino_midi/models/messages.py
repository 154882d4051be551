"""
Control messages - the unit of output.

Each message is one outbound packet: a payload of 3-byte frames
(channel 1-16, period_hi, period_lo) plus the time the device must wait
before the next packet. A slot is tagged PLAIN or TEMPO; a tempo slot
additionally carries the BPM that takes effect after it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chuk_mcp_arduino_midi.constants import (
    FRAME_SIZE,
    NO_NEXT_EVENT,
    SCHEMA_VERSION,
    MessageKind,
)

if TYPE_CHECKING:
    from chuk_mcp_arduino_midi.models.events import MidiSong


@dataclass
class ControlMessage:
    """
    One outbound message at a unique tick position.

    Created and merged by the timeline builder, ordered by the sequencer,
    then only its timing fields are written by the timing resolver.
    """

    tick_position: int
    payload: bytearray = field(default_factory=bytearray)
    kind: MessageKind = MessageKind.PLAIN
    bpm: int | None = None

    # Timing fields, filled in by the timing resolver
    relative_ticks: int = 0
    wait_microseconds: int = NO_NEXT_EVENT
    approx_timestamp_ms: int = 0

    @property
    def is_tempo(self) -> bool:
        """True if this slot marks a tempo change."""
        return self.kind is MessageKind.TEMPO

    def append_frame(self, frame: bytes) -> None:
        """Append one encoded frame to the payload."""
        self.payload.extend(frame)

    def upgrade_to_tempo(self, bpm: int) -> None:
        """Re-tag this slot as a tempo message, keeping its frames."""
        self.kind = MessageKind.TEMPO
        self.bpm = bpm

    def frames(self) -> list[tuple[int, int, int]]:
        """Split the payload into (channel, period_hi, period_lo) frames."""
        data = self.payload
        return [
            (data[i], data[i + 1], data[i + 2])
            for i in range(0, len(data) - FRAME_SIZE + 1, FRAME_SIZE)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: dict[str, Any] = {
            "tick_position": self.tick_position,
            "relative_ticks": self.relative_ticks,
            "wait_microseconds": self.wait_microseconds,
            "approx_timestamp_ms": self.approx_timestamp_ms,
            "payload": list(self.payload),
            "frames": [list(frame) for frame in self.frames()],
        }
        # Only include tempo data on tempo slots
        if self.is_tempo:
            d["bpm"] = self.bpm
        return d


@dataclass
class ConvertedTrack:
    """
    The converter's output: every message of a song in device order.

    `source` points back at the song the messages were built from.
    """

    initial_bpm: int
    messages: list[ControlMessage] = field(default_factory=list)
    ticks_per_quarter_note: int = 0
    source: MidiSong | None = field(default=None, repr=False, compare=False)

    def total_microseconds(self) -> int:
        """Sum of every wait interval."""
        return sum(message.wait_microseconds for message in self.messages)

    def payload_bytes(self) -> int:
        """Total payload size across all messages."""
        return sum(len(message.payload) for message in self.messages)

    def tempo_changes(self) -> list[ControlMessage]:
        """Messages that switch tempo."""
        return [message for message in self.messages if message.is_tempo]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a dictionary for JSON serialization.

        Messages are already in device order, so output is deterministic.
        """
        return {
            "schema": SCHEMA_VERSION,
            "initial_bpm": self.initial_bpm,
            "ticks_per_quarter_note": self.ticks_per_quarter_note,
            "messages": [message.to_dict() for message in self.messages],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def summary(self) -> dict[str, Any]:
        """Generate a summary for quick inspection."""
        source_path = self.source.source_path if self.source else None
        return {
            "initial_bpm": self.initial_bpm,
            "ticks_per_quarter_note": self.ticks_per_quarter_note,
            "total_messages": len(self.messages),
            "total_frames": self.payload_bytes() // FRAME_SIZE,
            "tempo_changes": [message.bpm for message in self.tempo_changes()],
            "duration_ms": self.total_microseconds() // 1000,
            "source": str(source_path) if source_path else None,
        }

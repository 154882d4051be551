"""
Timeline builder - first pass of the conversion.

Walks every track, accumulates the tick position from the event deltas and
merges everything that happens at one tick position into a single control
message. All tracks write into the same tick-keyed index, so events from
different tracks that land on the same numeric tick share a message even
though each track counts ticks from its own start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from chuk_mcp_arduino_midi.constants import TIMER_RESOLUTION
from chuk_mcp_arduino_midi.core.frequency import SILENCE, encode_frame, period_for
from chuk_mcp_arduino_midi.models.events import (
    NoteOffEvent,
    NoteOnEvent,
    SourceEvent,
    TempoChangeEvent,
    Track,
)
from chuk_mcp_arduino_midi.models.messages import ControlMessage

logger = logging.getLogger(__name__)


class MessageIndex:
    """
    Arena of control messages plus a tick-position index into it.

    The arena keeps insertion order; the index guarantees at most one
    message per tick position.
    """

    def __init__(self) -> None:
        self._arena: list[ControlMessage] = []
        self._by_tick: dict[int, ControlMessage] = {}

    def get(self, tick: int) -> ControlMessage | None:
        """Get the message at a tick position, if any."""
        return self._by_tick.get(tick)

    def create(self, tick: int) -> ControlMessage:
        """Create an empty message at a tick position that has none yet."""
        message = ControlMessage(tick_position=tick)
        self._arena.append(message)
        self._by_tick[tick] = message
        return message

    def get_or_create(self, tick: int) -> ControlMessage:
        """Get the message at a tick position, creating it if needed."""
        message = self._by_tick.get(tick)
        if message is None:
            message = self.create(tick)
        return message

    def messages(self) -> list[ControlMessage]:
        """All messages in insertion order."""
        return list(self._arena)

    def __len__(self) -> int:
        return len(self._arena)

    def __iter__(self) -> Iterator[ControlMessage]:
        return iter(self._arena)


class TimelineBuilder:
    """
    Merges source events into tick-keyed control messages.

    Example:
        builder = TimelineBuilder()
        builder.add_track(track)
        messages = builder.messages()
    """

    def __init__(self, resolution: int = TIMER_RESOLUTION):
        """
        Initialize the builder.

        Args:
            resolution: Hardware timer resolution used for note periods
        """
        self.resolution = resolution
        self.index = MessageIndex()

    def add_track(self, track: Track) -> int:
        """
        Walk one track and merge its events into the index.

        Args:
            track: The track to walk; its tick count starts at zero

        Returns:
            Tick position reached at the end of the track
        """
        tick = 0
        for event in track.events:
            tick += event.delta_ticks
            self.add_event(event, tick)
        return tick

    def add_event(self, event: SourceEvent, tick: int) -> None:
        """Merge a single event at an absolute tick position."""
        if isinstance(event, NoteOnEvent):
            period = period_for(event.note, self.resolution)
            self.index.get_or_create(tick).append_frame(encode_frame(event.channel, period))
        elif isinstance(event, NoteOffEvent):
            # A zero period stops the channel; never deduplicated against a note-on
            self.index.get_or_create(tick).append_frame(encode_frame(event.channel, SILENCE))
        elif isinstance(event, TempoChangeEvent):
            # Overwrites the BPM of a tempo slot, or re-tags a plain one;
            # merged frames stay in place either way
            self.index.get_or_create(tick).upgrade_to_tempo(event.bpm)

    def build(self, tracks: Iterable[Track]) -> list[ControlMessage]:
        """Add every track and return the merged messages in insertion order."""
        for number, track in enumerate(tracks):
            end_tick = self.add_track(track)
            logger.debug(
                f"Track {number} ({track.name or 'unnamed'}): "
                f"{len(track.events)} events, ends at tick {end_tick}"
            )
        return self.messages()

    def messages(self) -> list[ControlMessage]:
        """Merged messages in insertion order."""
        return self.index.messages()


def build_timeline(
    tracks: Iterable[Track], resolution: int = TIMER_RESOLUTION
) -> list[ControlMessage]:
    """Run the timeline pass over a set of tracks."""
    return TimelineBuilder(resolution).build(tracks)

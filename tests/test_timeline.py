"""
Tests for the timeline builder.

Covers tick accounting per track, same-tick merging of note frames,
and tempo messages (create, upgrade, overwrite).
"""

from chuk_mcp_arduino_midi.compiler.timeline import MessageIndex, TimelineBuilder, build_timeline
from chuk_mcp_arduino_midi.constants import MessageKind
from chuk_mcp_arduino_midi.core import period_for
from chuk_mcp_arduino_midi.models.events import (
    NoteOffEvent,
    NoteOnEvent,
    OtherEvent,
    TempoChangeEvent,
    Track,
)


def _by_tick(messages):
    return {message.tick_position: message for message in messages}


class TestMessageIndex:
    """Tests for the tick-keyed arena."""

    def test_get_missing(self) -> None:
        """Unknown tick gives None."""
        assert MessageIndex().get(10) is None

    def test_get_or_create_reuses(self) -> None:
        """Same tick, same message."""
        index = MessageIndex()
        first = index.get_or_create(10)
        second = index.get_or_create(10)
        assert first is second
        assert len(index) == 1

    def test_keeps_insertion_order(self) -> None:
        """Messages come back in creation order, not tick order."""
        index = MessageIndex()
        index.create(30)
        index.create(10)
        index.create(20)
        assert [m.tick_position for m in index] == [30, 10, 20]


class TestTickAccounting:
    """Tests for per-track tick positions."""

    def test_deltas_accumulate(self) -> None:
        """Tick position is the running sum of deltas."""
        track = Track(
            events=[
                NoteOnEvent(delta_ticks=100, note=60),
                NoteOffEvent(delta_ticks=50, note=60),
                NoteOnEvent(delta_ticks=25, note=62),
            ]
        )
        messages = build_timeline([track])
        assert [m.tick_position for m in messages] == [100, 150, 175]

    def test_add_track_returns_end_tick(self) -> None:
        """add_track reports where the track ended."""
        builder = TimelineBuilder()
        end = builder.add_track(
            Track(events=[NoteOnEvent(delta_ticks=10, note=60), OtherEvent(delta_ticks=90)])
        )
        assert end == 100

    def test_other_events_advance_ticks(self) -> None:
        """Ignored events still move the tick position."""
        track = Track(
            events=[
                OtherEvent(delta_ticks=240, description="control_change"),
                NoteOnEvent(delta_ticks=240, note=60),
            ]
        )
        messages = build_timeline([track])
        assert len(messages) == 1
        assert messages[0].tick_position == 480

    def test_other_events_create_no_messages(self) -> None:
        """A track of only ignored events produces nothing."""
        track = Track(events=[OtherEvent(delta_ticks=10), OtherEvent(delta_ticks=20)])
        assert build_timeline([track]) == []

    def test_each_track_restarts_at_zero(self) -> None:
        """Tick counting restarts for every track."""
        first = Track(events=[NoteOnEvent(delta_ticks=480, note=60)])
        second = Track(events=[NoteOnEvent(delta_ticks=240, note=62)])
        messages = build_timeline([first, second])
        assert sorted(m.tick_position for m in messages) == [240, 480]

    def test_cross_track_same_tick_merges(self) -> None:
        """Equal numeric ticks from different tracks share one message."""
        first = Track(events=[NoteOnEvent(delta_ticks=480, channel=0, note=60)])
        second = Track(events=[NoteOnEvent(delta_ticks=480, channel=1, note=64)])
        messages = build_timeline([first, second])
        assert len(messages) == 1
        assert messages[0].frames() == [
            (1, 0, period_for(60)),
            (2, 0, period_for(64)),
        ]


class TestNoteMerging:
    """Tests for note frames."""

    def test_single_note_on(self) -> None:
        """A note-on creates a message with one frame."""
        messages = build_timeline([Track(events=[NoteOnEvent(channel=2, note=57)])])
        assert len(messages) == 1
        assert bytes(messages[0].payload) == bytes([3, 0, 56])
        assert messages[0].kind is MessageKind.PLAIN

    def test_two_channels_same_tick(self) -> None:
        """Two note-ons at one tick: one message, 6 bytes, arrival order."""
        track = Track(
            events=[
                NoteOnEvent(delta_ticks=0, channel=1, note=60),
                NoteOnEvent(delta_ticks=0, channel=2, note=60),
            ]
        )
        messages = build_timeline([track])
        assert len(messages) == 1
        assert len(messages[0].payload) == 6
        assert messages[0].frames() == [(2, 0, 47), (3, 0, 47)]

    def test_large_period_splits_bytes(self) -> None:
        """Periods above 255 use the high byte."""
        messages = build_timeline([Track(events=[NoteOnEvent(note=24)])])
        # 30578 // 80 = 382 = 0x017E
        assert messages[0].frames() == [(1, 0x01, 0x7E)]

    def test_note_off_is_zero_period(self) -> None:
        """A note-off frame carries period 0."""
        messages = build_timeline([Track(events=[NoteOffEvent(channel=4, note=60)])])
        assert messages[0].frames() == [(5, 0, 0)]

    def test_note_on_and_off_same_channel_both_kept(self) -> None:
        """On and off at one tick for one channel are two frames."""
        track = Track(
            events=[
                NoteOffEvent(delta_ticks=0, channel=0, note=57),
                NoteOnEvent(delta_ticks=0, channel=0, note=60),
            ]
        )
        messages = build_timeline([track])
        assert messages[0].frames() == [(1, 0, 0), (1, 0, 47)]

    def test_out_of_range_note_encodes_as_silence(self) -> None:
        """An unpopulated note looks exactly like a note-off."""
        messages = build_timeline([Track(events=[NoteOnEvent(channel=0, note=100)])])
        assert messages[0].frames() == [(1, 0, 0)]

    def test_builder_resolution(self) -> None:
        """The builder uses its configured resolution."""
        builder = TimelineBuilder(resolution=20)
        builder.add_track(Track(events=[NoteOnEvent(note=60)]))
        assert builder.messages()[0].frames() == [(1, 0, 3823 // 40)]


class TestTempoMessages:
    """Tests for tempo change handling."""

    def test_tempo_alone_creates_empty_tempo_message(self) -> None:
        """A tempo change on an empty tick makes a payload-less tempo message."""
        messages = build_timeline([Track(events=[TempoChangeEvent(delta_ticks=960, bpm=90)])])
        assert len(messages) == 1
        assert messages[0].is_tempo
        assert messages[0].bpm == 90
        assert messages[0].payload == bytearray()

    def test_tempo_upgrades_plain_message(self) -> None:
        """A tempo change on a plain message keeps its payload verbatim."""
        track = Track(
            events=[
                NoteOnEvent(delta_ticks=0, channel=0, note=57),
                NoteOnEvent(delta_ticks=0, channel=1, note=60),
                TempoChangeEvent(delta_ticks=0, bpm=140),
            ]
        )
        builder = TimelineBuilder()
        builder.add_track(track)
        messages = builder.messages()
        assert len(messages) == 1
        assert messages[0].kind is MessageKind.TEMPO
        assert messages[0].bpm == 140
        assert bytes(messages[0].payload) == bytes([1, 0, 56, 2, 0, 47])

    def test_upgrade_keeps_same_slot(self) -> None:
        """The upgraded message is the same object in the index."""
        builder = TimelineBuilder()
        builder.add_track(Track(events=[NoteOnEvent(delta_ticks=10, note=60)]))
        before = builder.index.get(10)
        builder.add_track(Track(events=[TempoChangeEvent(delta_ticks=10, bpm=100)]))
        assert builder.index.get(10) is before
        assert before.is_tempo

    def test_second_tempo_overwrites_bpm(self) -> None:
        """Two tempo changes at one tick: the last one wins."""
        track = Track(
            events=[
                TempoChangeEvent(delta_ticks=0, bpm=100),
                TempoChangeEvent(delta_ticks=0, bpm=150),
            ]
        )
        messages = build_timeline([track])
        assert len(messages) == 1
        assert messages[0].bpm == 150

    def test_notes_after_tempo_join_tempo_message(self) -> None:
        """Frames merged after an upgrade land in the tempo message."""
        track = Track(
            events=[
                TempoChangeEvent(delta_ticks=0, bpm=100),
                NoteOnEvent(delta_ticks=0, channel=0, note=60),
            ]
        )
        messages = build_timeline([track])
        assert messages[0].is_tempo
        assert messages[0].frames() == [(1, 0, 47)]

    def test_builder_accepts_any_bpm(self) -> None:
        """BPM is checked later by the tempo state, not by the builder."""
        messages = build_timeline([Track(events=[TempoChangeEvent(bpm=0)])])
        assert messages[0].bpm == 0


class TestUniqueTicks:
    """The builder never produces two messages at one tick."""

    def test_one_message_per_tick(self, simple_song) -> None:
        """Tick positions are unique across tracks."""
        messages = build_timeline(simple_song.tracks)
        ticks = [m.tick_position for m in messages]
        assert len(ticks) == len(set(ticks))

    def test_simple_song_layout(self, simple_song) -> None:
        """Melody and bass merge into the expected payloads."""
        messages = _by_tick(build_timeline(simple_song.tracks))
        assert sorted(messages) == [0, 480, 960, 1440, 1920]
        assert messages[0].frames() == [(1, 0, 56), (2, 0, 227)]
        assert messages[480].frames() == [(1, 0, 0), (1, 0, 47)]
        assert messages[960].frames() == [(1, 0, 0), (2, 0, 0)]
        assert messages[960].is_tempo
        assert messages[960].bpm == 60
        assert messages[1440].frames() == [(2, 0, 227)]
        assert messages[1920].frames() == [(2, 0, 0)]

"""
Conversion tools - MCP tools for turning MIDI into control messages.

Tools for converting MIDI files or inline event lists, and for looking
up note periods.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chuk_mcp_arduino_midi.compiler import TrackConverter, load_midi_file
from chuk_mcp_arduino_midi.config import ConverterConfig
from chuk_mcp_arduino_midi.core import encode_frame, is_populated, period_for
from chuk_mcp_arduino_midi.errors import ConversionError
from chuk_mcp_arduino_midi.models.events import FileHeader, MidiSong, Track
from chuk_mcp_arduino_midi.models.messages import ConvertedTrack

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _converted_response(converted: ConvertedTrack, max_messages: int | None) -> str:
    messages = converted.messages
    if max_messages is not None:
        messages = messages[:max_messages]
    return json.dumps(
        {
            "status": "success",
            "summary": converted.summary(),
            "messages": [message.to_dict() for message in messages],
            "truncated": len(messages) < len(converted.messages),
            "message": f"Converted to {len(converted.messages)} control messages",
        }
    )


def register_conversion_tools(
    mcp: ChukMCPServer,
    config: ConverterConfig,
    base_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Register conversion tools with the MCP server.

    Args:
        mcp: The MCP server instance
        config: Converter settings shared by every tool
        base_dir: Directory relative MIDI paths are resolved against

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    converter = TrackConverter(config)
    root = base_dir or Path.cwd()

    @mcp.tool  # type: ignore[arg-type]
    async def arduino_convert_midi(
        path: str,
        max_messages: int | None = None,
    ) -> str:
        """
        Convert a MIDI file to timed control messages.

        Every message holds (channel, period_hi, period_lo) frames and the
        microseconds to wait before sending the next message.

        Args:
            path: Path to a .mid file (relative paths use the server directory)
            max_messages: Optional cap on the number of messages returned

        Returns:
            JSON string with a summary and the control messages

        Example:
            arduino_convert_midi(path="songs/tetris.mid", max_messages=20)
        """
        try:
            midi_path = Path(path)
            if not midi_path.is_absolute():
                midi_path = root / midi_path

            song = load_midi_file(midi_path, config)
            converted = converter.convert(song)
            return _converted_response(converted, max_messages)
        except (FileNotFoundError, ConversionError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to convert MIDI file")
            return json.dumps({"status": "error", "message": str(e)})

    tools["arduino_convert_midi"] = arduino_convert_midi

    @mcp.tool  # type: ignore[arg-type]
    async def arduino_convert_events(
        ticks_per_quarter_note: int,
        tracks: list[list[dict[str, Any]]],
        initial_bpm: int = config.default_bpm,
        max_messages: int | None = None,
    ) -> str:
        """
        Convert inline tracks of events to timed control messages.

        Each event is a dict with a "kind" of note_on, note_off,
        tempo_change or other, plus delta_ticks and the kind's fields.

        Args:
            ticks_per_quarter_note: Time division
            tracks: List of tracks, each a list of event dicts
            initial_bpm: Starting tempo
            max_messages: Optional cap on the number of messages returned

        Returns:
            JSON string with a summary and the control messages

        Example:
            arduino_convert_events(
                ticks_per_quarter_note=480,
                tracks=[[{"kind": "note_on", "note": 60, "channel": 0},
                         {"kind": "note_off", "note": 60, "delta_ticks": 480}]],
            )
        """
        try:
            song = MidiSong(
                header=FileHeader(
                    ticks_per_quarter_note=ticks_per_quarter_note,
                    initial_bpm=initial_bpm,
                ),
                tracks=[Track(events=events) for events in tracks],
            )
            converted = converter.convert(song)
            return _converted_response(converted, max_messages)
        except (ValidationError, ConversionError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to convert events")
            return json.dumps({"status": "error", "message": str(e)})

    tools["arduino_convert_events"] = arduino_convert_events

    @mcp.tool  # type: ignore[arg-type]
    async def arduino_note_period(note: int, channel: int = 0) -> str:
        """
        Look up the half-period a note is sent as.

        Notes outside the populated table range come back as period 0,
        which the device plays as silence.

        Args:
            note: MIDI note number (0-127)
            channel: MIDI channel (0-15) used to build the example frame

        Returns:
            JSON string with the period and the encoded frame

        Example:
            arduino_note_period(note=57)
        """
        period = period_for(note, config.timer_resolution)
        return json.dumps(
            {
                "status": "success",
                "note": note,
                "period": period,
                "populated": is_populated(note),
                "frame": list(encode_frame(channel, period)),
            }
        )

    tools["arduino_note_period"] = arduino_note_period

    return tools

#!/usr/bin/env python3
"""
Example: Convert a MIDI file to control messages.

This demonstrates the whole conversion pipeline, from a MIDI file on disk
to the frames and wait intervals a microcontroller plays back.

Usage:
    python examples/convert_midi.py [path/to/song.mid]
    # Without a path, converts a generated two-track test file
"""

import sys
from pathlib import Path

from chuk_mcp_arduino_midi import convert_midi_file
from chuk_mcp_arduino_midi.compiler import create_test_midi


def main() -> None:
    """Convert a MIDI file and print the message list."""
    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
    else:
        output_dir = Path(__file__).parent / "output"
        output_dir.mkdir(exist_ok=True)
        path = output_dir / "arpeggio.mid"
        create_test_midi(tempo_bpm=120).save(str(path))
        print(f"Generated {path}")

    converted = convert_midi_file(path)
    summary = converted.summary()

    print(f"\n{summary['total_messages']} messages, {summary['total_frames']} frames")
    print(f"  Start tempo: {summary['initial_bpm']} BPM")
    print(f"  Tempo changes: {summary['tempo_changes']}")
    print(f"  Duration: {summary['duration_ms']} ms\n")

    for message in converted.messages:
        frames = " ".join(f"[{ch:2d} {hi:3d} {lo:3d}]" for ch, hi, lo in message.frames())
        tempo = f" tempo={message.bpm}" if message.is_tempo else ""
        print(
            f"{message.approx_timestamp_ms:>7} ms  tick {message.tick_position:>6}  "
            f"wait {message.wait_microseconds:>8} us{tempo}  {frames}"
        )


if __name__ == "__main__":
    main()

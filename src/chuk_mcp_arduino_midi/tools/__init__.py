"""
MCP tools for the Arduino MIDI converter.

Tools are organized by domain:
- conversion: MIDI files and inline events to control messages
"""

from chuk_mcp_arduino_midi.tools.conversion import register_conversion_tools

__all__ = [
    "register_conversion_tools",
]

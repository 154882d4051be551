#!/usr/bin/env python3
"""
Async Arduino MIDI MCP Server using chuk-mcp-server

This server provides MCP tools for turning MIDI files into timed
tone-control messages for microcontroller buzzers and oscillators.

The server provides tools for:
- Converting MIDI files to control messages
- Converting inline event lists to control messages
- Looking up note periods
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_arduino_midi.config import load_config
from chuk_mcp_arduino_midi.tools import register_conversion_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-arduino-midi")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
CONFIG_PATH = Path(os.environ.get("ARDUINO_MIDI_CONFIG", BASE_PATH / "arduino_midi.yaml"))

config = load_config(CONFIG_PATH)

# Register all tools
conversion_tools = register_conversion_tools(mcp, config, BASE_PATH)

# Export tool functions for direct access
arduino_convert_midi = conversion_tools["arduino_convert_midi"]
arduino_convert_events = conversion_tools["arduino_convert_events"]
arduino_note_period = conversion_tools["arduino_note_period"]

logger.info("CHUK Arduino MIDI MCP Server initialized")
logger.info(f"  Base path: {BASE_PATH}")
logger.info(f"  Timer resolution: {config.timer_resolution}")

#!/usr/bin/env python3
"""
Async Tuning MCP Server using chuk-mcp-server

This server provides MCP tools for microtonal tuning with the MIDI Tuning
Standard. Scales come from Scala .scl files, keyboard layouts from .kbm
files, and tunings go out as SysEx.

The server provides tools for:
- Describing scales and computing the frequency of every key
- Building and decoding MTS Bulk Dump Reply messages
- Building MTS Note Change messages
- Listing MIDI ports and sending tunings to a synthesizer

Settings are read from $CHUK_TUNING_SETTINGS, or tuning.yaml in the
working directory, when present.
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tuning.config import load_settings
from chuk_mcp_tuning.tools import (
    register_device_tools,
    register_sysex_tools,
    register_tuning_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-tuning")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
SETTINGS_FILE = Path(os.environ.get("CHUK_TUNING_SETTINGS", BASE_PATH / "tuning.yaml"))
OUTPUT_DIR = BASE_PATH / "output"

settings = load_settings(SETTINGS_FILE if SETTINGS_FILE.exists() else None)

# Register all tools
tuning_tools = register_tuning_tools(mcp)
sysex_tools = register_sysex_tools(mcp, settings, OUTPUT_DIR)
device_tools = register_device_tools(mcp, settings)

# Export tool functions for direct access
tuning_describe_scale = tuning_tools["tuning_describe_scale"]
tuning_compute_frequencies = tuning_tools["tuning_compute_frequencies"]

tuning_build_bulk_dump = sysex_tools["tuning_build_bulk_dump"]
tuning_decode_bulk_dump = sysex_tools["tuning_decode_bulk_dump"]
tuning_build_note_changes = sysex_tools["tuning_build_note_changes"]

tuning_list_ports = device_tools["tuning_list_ports"]
tuning_send_tuning = device_tools["tuning_send_tuning"]

logger.info("CHUK Tuning MCP Server initialized")
logger.info(f"  Settings file: {SETTINGS_FILE}")
logger.info(f"  Output dir: {OUTPUT_DIR}")

"""
MCP tool implementations.

Tools are organized by domain:
- tuning - Scale description and key frequencies
- sysex - Bulk Dump Reply and Note Change messages
- devices - MIDI ports and sending
"""

from chuk_mcp_tuning.tools.devices import register_device_tools
from chuk_mcp_tuning.tools.sysex import register_sysex_tools
from chuk_mcp_tuning.tools.tuning import register_tuning_tools

__all__ = [
    "register_device_tools",
    "register_sysex_tools",
    "register_tuning_tools",
]

"""
Device tools - MCP tools for MIDI ports.

Tools for listing ports and sending a tuning to a synthesizer.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.config import TuningSettings
from chuk_mcp_tuning.constants import SuccessMessages
from chuk_mcp_tuning.devices import MidiOutputSink, list_ports
from chuk_mcp_tuning.pipeline import make_note_changes, resolve_keyboard_mapping, resolve_scale

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_device_tools(mcp: ChukMCPServer, settings: TuningSettings) -> dict[str, Any]:
    """
    Register MIDI device tools with the MCP server.

    Args:
        mcp: The MCP server instance
        settings: Default port, device id, preset and chunk size

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_list_ports() -> str:
        """
        List MIDI input and output ports.

        Returns:
            JSON string with sorted input and output port names

        Example:
            tuning_list_ports()
        """
        try:
            ports = list_ports()
            return json.dumps({"status": "success", **ports})
        except Exception as e:
            logger.exception("Failed to list ports")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_list_ports"] = tuning_list_ports

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_send_tuning(
        scl_path: str | None = None,
        scl_text: str | None = None,
        kbm_path: str | None = None,
        kbm_text: str | None = None,
        port: str | None = None,
        device_id: int | None = None,
        preset: int | None = None,
        chunk_size: int | None = None,
    ) -> str:
        """
        Retune a synthesizer with MTS Note Change messages.

        Messages are sent without waiting for any reply.

        Args:
            scl_path: Path to a .scl file
            scl_text: Inline .scl content (instead of scl_path)
            kbm_path: Optional path to a .kbm file
            kbm_text: Optional inline .kbm content
            port: MIDI output port name (default from settings)
            device_id: SysEx device id (0-127)
            preset: Tuning program (0-127)
            chunk_size: Note changes per message (1-127)

        Returns:
            JSON string with the number of messages sent

        Example:
            tuning_send_tuning(scl_path="carlos_super.scl", port="Synth MIDI 1")
        """
        try:
            opts = settings.merged(
                device_id=device_id, preset=preset, chunk_size=chunk_size, output_port=port
            )
            if opts.output_port is None:
                return json.dumps({"status": "error", "message": "No MIDI output port given"})

            scale = resolve_scale(scl_path, scl_text).scale
            keyboard_mapping = resolve_keyboard_mapping(kbm_path, kbm_text)
            messages, _ = make_note_changes(
                scale,
                keyboard_mapping,
                device_id=opts.device_id,
                preset=opts.preset,
                chunk_size=opts.chunk_size,
            )

            with MidiOutputSink(opts.output_port) as sink:
                for message in messages:
                    sink.send(message.to_message())

            return json.dumps(
                {
                    "status": "success",
                    "port": opts.output_port,
                    "message_count": len(messages),
                    "message": SuccessMessages.NOTE_CHANGES_SENT.format(
                        count=len(messages), port=opts.output_port
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to send tuning")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_send_tuning"] = tuning_send_tuning

    return tools

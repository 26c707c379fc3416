"""
SysEx tools - MCP tools for building and decoding MTS messages.

Built messages are returned as hex dumps and, when an output name is
given, written to .syx files in the output directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.config import TuningSettings
from chuk_mcp_tuning.constants import SuccessMessages
from chuk_mcp_tuning.formats.hex_dump import from_hex_dump, to_hex_dump
from chuk_mcp_tuning.formats.syx import read_syx_bytes, write_syx_file
from chuk_mcp_tuning.models.tuning_table import DecodedBulkDump
from chuk_mcp_tuning.pipeline import (
    make_bulk_dump_reply,
    make_note_changes,
    resolve_keyboard_mapping,
    resolve_scale,
)
from chuk_mcp_tuning.sysex.bulk_dump_reply import BulkDumpReply

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_sysex_tools(
    mcp: ChukMCPServer,
    settings: TuningSettings,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register SysEx encode/decode tools with the MCP server.

    Args:
        mcp: The MCP server instance
        settings: Default device id, preset, chunk size and preset name
        output_dir: Directory for .syx output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_build_bulk_dump(
        scl_path: str | None = None,
        scl_text: str | None = None,
        kbm_path: str | None = None,
        kbm_text: str | None = None,
        name: str | None = None,
        device_id: int | None = None,
        preset: int | None = None,
        output_name: str | None = None,
    ) -> str:
        """
        Build an MTS Bulk Dump Reply for a scale.

        The dump always covers all 128 keys and carries a checksum.

        Args:
            scl_path: Path to a .scl file
            scl_text: Inline .scl content (instead of scl_path)
            kbm_path: Optional path to a .kbm file
            kbm_text: Optional inline .kbm content
            name: Preset name, at most 16 ASCII characters
            device_id: SysEx device id (0-127)
            preset: Tuning program (0-127)
            output_name: Optional .syx filename (without extension) to write

        Returns:
            JSON string with the hex dump and, if written, the file path

        Example:
            tuning_build_bulk_dump(scl_path="carlos_super.scl", name="carlos", output_name="carlos")
        """
        try:
            opts = settings.merged(device_id=device_id, preset=preset, preset_name=name)
            scale = resolve_scale(scl_path, scl_text).scale
            keyboard_mapping = resolve_keyboard_mapping(kbm_path, kbm_text)
            reply = make_bulk_dump_reply(
                scale,
                keyboard_mapping,
                device_id=opts.device_id,
                preset=opts.preset,
                name=opts.preset_name,
            )

            result: dict[str, Any] = {
                "status": "success",
                "name": reply.name.as_str(),
                "device_id": int(reply.device_id),
                "preset": int(reply.preset),
                "size": len(reply.to_bytes()),
                "hex": to_hex_dump(reply.to_bytes(), opts.hex_columns),
            }

            if output_name:
                path = write_syx_file(output_dir / f"{output_name}.syx", [reply.to_message()])
                result["path"] = str(path)
                result["message"] = SuccessMessages.BULK_DUMP_WRITTEN.format(
                    name=reply.name, path=path
                )

            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to build bulk dump")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_build_bulk_dump"] = tuning_build_bulk_dump

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_decode_bulk_dump(
        syx_path: str | None = None,
        hex_dump: str | None = None,
    ) -> str:
        """
        Decode an MTS Bulk Dump Reply.

        Validates the header, sub-ids and checksum and returns the
        frequency of every key.

        Args:
            syx_path: Path to a .syx file
            hex_dump: The message as hex bytes, e.g. "F0 7E 00 08 01 ..."

        Returns:
            JSON string with name, device id, preset and 128 keys

        Example:
            tuning_decode_bulk_dump(syx_path="output/carlos.syx")
        """
        try:
            if (syx_path is None) == (hex_dump is None):
                return json.dumps(
                    {"status": "error", "message": "Provide exactly one of syx_path or hex_dump"}
                )

            if hex_dump is not None:
                data = from_hex_dump(hex_dump)
            else:
                data = read_syx_bytes(syx_path)  # type: ignore[arg-type]
            decoded = DecodedBulkDump.from_reply(BulkDumpReply.parse(data))

            return json.dumps({"status": "success", "bulk_dump": decoded.model_dump()})
        except Exception as e:
            logger.exception("Failed to decode bulk dump")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_decode_bulk_dump"] = tuning_decode_bulk_dump

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_build_note_changes(
        scl_path: str | None = None,
        scl_text: str | None = None,
        kbm_path: str | None = None,
        kbm_text: str | None = None,
        device_id: int | None = None,
        preset: int | None = None,
        chunk_size: int | None = None,
        output_name: str | None = None,
    ) -> str:
        """
        Build MTS Note Change messages for a scale.

        One entry per key in the keyboard mapping's range, split into
        messages of at most chunk_size entries.

        Args:
            scl_path: Path to a .scl file
            scl_text: Inline .scl content (instead of scl_path)
            kbm_path: Optional path to a .kbm file
            kbm_text: Optional inline .kbm content
            device_id: SysEx device id (0-127)
            preset: Tuning program (0-127)
            chunk_size: Note changes per message (1-127)
            output_name: Optional .syx filename (without extension) to write

        Returns:
            JSON string with one hex dump per message

        Example:
            tuning_build_note_changes(scl_path="carlos_super.scl", chunk_size=64)
        """
        try:
            opts = settings.merged(device_id=device_id, preset=preset, chunk_size=chunk_size)
            scale = resolve_scale(scl_path, scl_text).scale
            keyboard_mapping = resolve_keyboard_mapping(kbm_path, kbm_text)
            messages, frequencies = make_note_changes(
                scale,
                keyboard_mapping,
                device_id=opts.device_id,
                preset=opts.preset,
                chunk_size=opts.chunk_size,
            )

            result: dict[str, Any] = {
                "status": "success",
                "message_count": len(messages),
                "key_count": len(frequencies),
                "messages": [to_hex_dump(m.to_bytes(), opts.hex_columns) for m in messages],
            }

            if output_name:
                path = write_syx_file(
                    output_dir / f"{output_name}.syx", [m.to_message() for m in messages]
                )
                result["path"] = str(path)
                result["message"] = SuccessMessages.NOTE_CHANGES_WRITTEN.format(
                    count=len(messages), path=path
                )

            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to build note changes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_build_note_changes"] = tuning_build_note_changes

    return tools

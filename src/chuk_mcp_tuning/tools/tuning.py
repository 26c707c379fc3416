"""
Tuning tools - MCP tools for scales and key frequencies.

Tools for inspecting Scala scales and laying them out over the keyboard.
Scales and keyboard mappings can be given as file paths or inline content.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.pipeline import make_tuning_table, resolve_keyboard_mapping, resolve_scale

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_tuning_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register scale and frequency tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_describe_scale(
        scl_path: str | None = None,
        scl_text: str | None = None,
    ) -> str:
        """
        Describe a Scala scale.

        Lists each interval as written and in cents, plus the equave.

        Args:
            scl_path: Path to a .scl file
            scl_text: Inline .scl content (instead of scl_path)

        Returns:
            JSON string with the scale's description and intervals

        Example:
            tuning_describe_scale(scl_path="scales/carlos_super.scl")
        """
        try:
            scl_file = resolve_scale(scl_path, scl_text)
            scale = scl_file.scale

            return json.dumps(
                {
                    "status": "success",
                    "file_name": scl_file.file_name,
                    "description": scl_file.description,
                    "interval_count": scale.interval_count,
                    "intervals": [
                        {
                            "degree": i + 1,
                            "interval": str(interval),
                            "cents": round(interval.to_cents(), 6),
                            "ratio": interval.as_ratio(),
                        }
                        for i, interval in enumerate(scale.intervals)
                    ],
                    "equave": str(scale.equave),
                    "equave_ratio": scale.equave_ratio(),
                }
            )
        except Exception as e:
            logger.exception("Failed to describe scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_describe_scale"] = tuning_describe_scale

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_compute_frequencies(
        scl_path: str | None = None,
        scl_text: str | None = None,
        kbm_path: str | None = None,
        kbm_text: str | None = None,
    ) -> str:
        """
        Compute the frequency of every key for a scale.

        Without a keyboard mapping the scale is laid out linearly over
        all 128 keys with A4 (key 69) at 440 Hz.

        Args:
            scl_path: Path to a .scl file
            scl_text: Inline .scl content (instead of scl_path)
            kbm_path: Optional path to a .kbm file
            kbm_text: Optional inline .kbm content (instead of kbm_path)

        Returns:
            JSON string with one entry per key: frequency, degree and MTS bytes

        Example:
            tuning_compute_frequencies(scl_path="scales/12edo.scl")
        """
        try:
            scl_file = resolve_scale(scl_path, scl_text)
            keyboard_mapping = resolve_keyboard_mapping(kbm_path, kbm_text)
            _, table = make_tuning_table(scl_file, keyboard_mapping, scale_path=scl_path)

            return json.dumps(
                {
                    "status": "success",
                    "table": table.model_dump(),
                    "count": len(table.entries),
                }
            )
        except Exception as e:
            logger.exception("Failed to compute frequencies")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_compute_frequencies"] = tuning_compute_frequencies

    return tools

"""
Settings - defaults for sending and dumping tunings.

Loaded from an optional YAML file:

    device_id: 0
    preset: 8
    chunk_size: 1
    output_port: "Synth MIDI 1"
    preset_name: "my tuning"

Command-line flags override whatever the file says.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from chuk_mcp_tuning.constants import DEFAULT_PRESET, PRESET_NAME_LEN, ErrorMessages

logger = logging.getLogger(__name__)


class TuningSettings(BaseModel):
    """Defaults for MTS output."""

    device_id: int = Field(0, ge=0, le=127, description="SysEx device id (127 = all devices)")
    preset: int = Field(DEFAULT_PRESET, ge=0, le=127, description="Tuning program to write")
    chunk_size: int = Field(1, ge=1, le=127, description="Note changes per message")
    output_port: str | None = Field(None, description="Default MIDI output port")
    preset_name: str = Field("tuning", max_length=PRESET_NAME_LEN, description="Bulk dump name")
    hex_columns: int = Field(32, ge=1, description="Bytes per line in hex dumps")

    model_config = {"frozen": True}

    @field_validator("preset_name")
    @classmethod
    def validate_preset_name(cls, v: str) -> str:
        """Preset names go on the wire as 7-bit ASCII."""
        if not v.isascii():
            raise ValueError(f"Preset name must be ASCII: {v!r}")
        return v

    def merged(self, **overrides: Any) -> TuningSettings:
        """Copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return TuningSettings(**{**self.model_dump(), **updates})


def load_settings(path: Path | str | None = None) -> TuningSettings:
    """
    Load settings from a YAML file, or defaults when path is None.

    Raises:
        FileNotFoundError: path given but missing
        ValueError: the file is not a mapping
        pydantic.ValidationError: a value is out of range
    """
    if path is None:
        return TuningSettings()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(ErrorMessages.FILE_NOT_FOUND.format(path=path))

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    logger.debug(f"Loaded settings from {path}")
    return TuningSettings(**data)

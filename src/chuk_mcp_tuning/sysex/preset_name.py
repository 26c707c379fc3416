"""
Preset name - 16 fixed-width 7-bit ASCII characters.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_tuning.constants import PRESET_NAME_LEN
from chuk_mcp_tuning.core.u7 import Char7
from chuk_mcp_tuning.errors import InvalidPresetNameError

_PAD = Char7(ord(" "))


@dataclass(frozen=True)
class PresetName:
    """
    The name carried in a Bulk Dump Reply.

    Shorter names are padded with spaces to 16 characters.
    """

    chars: tuple[Char7, ...]

    def __post_init__(self) -> None:
        if len(self.chars) != PRESET_NAME_LEN:
            raise InvalidPresetNameError(
                f"Preset name must be {PRESET_NAME_LEN} characters, got {len(self.chars)}"
            )

    @classmethod
    def parse(cls, text: str) -> PresetName:
        """
        Build from text.

        Raises:
            InvalidPresetNameError: text is not ASCII or longer than 16 characters
        """
        if not text.isascii():
            raise InvalidPresetNameError(f"Preset name must be ASCII: {text!r}")
        if len(text) > PRESET_NAME_LEN:
            raise InvalidPresetNameError(
                f"Preset name must be at most {PRESET_NAME_LEN} characters: {text!r}"
            )
        chars = [Char7(ord(c)) for c in text]
        chars.extend([_PAD] * (PRESET_NAME_LEN - len(chars)))
        return cls(tuple(chars))

    @classmethod
    def from_chars(cls, chars: Sequence[Char7]) -> PresetName:
        return cls(tuple(chars))

    def as_str(self) -> str:
        """The name as text, trailing padding removed."""
        return "".join(chr(int(c)) for c in self.chars).rstrip(" ")

    def __str__(self) -> str:
        return self.as_str()

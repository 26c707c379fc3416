"""
Keyboard mapping layer - from scale degrees to per-key frequencies.
"""

from chuk_mcp_tuning.mapping.key_frequency import (
    KeyFrequencyMapping,
    ScaleDegree,
    compute_frequencies,
    select_degrees,
)
from chuk_mcp_tuning.mapping.keyboard_mapping import (
    LINEAR,
    UNMAPPED,
    CustomKeyMappings,
    DegreeMapping,
    KeyboardMapping,
    KeyMapping,
    KeyMappings,
    LinearKeyMappings,
    Unmapped,
)

__all__ = [
    # Key mappings
    "KeyMapping",
    "DegreeMapping",
    "Unmapped",
    "UNMAPPED",
    "KeyMappings",
    "LinearKeyMappings",
    "CustomKeyMappings",
    "LINEAR",
    "KeyboardMapping",
    # Frequencies
    "KeyFrequencyMapping",
    "ScaleDegree",
    "compute_frequencies",
    "select_degrees",
]

"""Format selection policy for catalog assets.

Assets usually come in several interchange formats. We download exactly one,
chosen by a fixed preference order, and skip Tilt Brush sketches entirely since
they cannot be used outside of Tilt Brush.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .model import FormatEntry

# Preferred model formats (in order)
PREFERRED_FORMATS = ("GLTF2", "GLTF", "FBX", "OBJ")

# Assets offering this format are skipped even if a preferred format exists
EXCLUDED_FORMAT = "TILT"


def pick_format(
    formats: Sequence[FormatEntry],
    preferred: Sequence[str] = PREFERRED_FORMATS,
) -> Optional[FormatEntry]:
    """Return the available format ranked highest in the preference order.

    Args:
        formats: Format entries offered by an asset (any order)
        preferred: Format types in descending priority

    Returns:
        The first entry matching the best preferred type, or None if no preferred type is offered
    """
    for format_type in preferred:
        for entry in formats:
            if entry.format_type == format_type:
                return entry
    return None


def is_excluded_format(formats: Sequence[FormatEntry], excluded: str = EXCLUDED_FORMAT) -> bool:
    """Check whether any offered format has the excluded type."""
    return any(entry.format_type == excluded for entry in formats)


__all__ = [
    "PREFERRED_FORMATS",
    "EXCLUDED_FORMAT",
    "pick_format",
    "is_excluded_format",
]

"""
Zone compliance: decides whether a crop may occupy a slot in a tuned bed.

Rules (evaluated in order, first match wins)
---------------------------------------------
    1. IN TUNE      : crop.frequency_hz == bed frequency         → not dissonant
    2. STRICT       : jazz mode off                              → dissonant
    3. STRUCTURAL   : slot is structural (Root)                  → dissonant
    4. JAZZ WAIVER  : guild_role == "Enhancer"                   → not dissonant
    5. OTHERWISE    : any other role, including missing         → dissonant

Rule 3 is its own branch so that adding new guild roles can never open the
Root slot to cross-zone crops.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from planting_engine.models.crop import Crop
from planting_engine.taxonomy.zone_taxonomy import (
    STRUCTURAL_INTERVALS,
    ChordInterval,
    GuildRole,
)

ConflictType = Literal["Vibrational"]


@dataclass(frozen=True)
class DissonanceCheck:
    """Outcome of a zone compliance check.

    Attributes:
        is_dissonant:  True if the placement breaks the zone rule.
        conflict_type: ``"Vibrational"`` when dissonant, else ``None``.
        message:       Display text; empty when the crop is in tune.
    """

    is_dissonant:  bool
    conflict_type: Optional[ConflictType]
    message:       str = ""


def is_structural_interval(interval: str) -> bool:
    """True for slots that never accept cross-zone crops."""
    return interval in STRUCTURAL_INTERVALS


def check_dissonance(
    crop:             Crop,
    bed_frequency_hz: int,
    slot_interval:    ChordInterval | str,
    jazz_mode:        bool = False,
) -> DissonanceCheck:
    """Check whether ``crop`` is out of tune with a bed for the given slot.

    Args:
        crop:             Candidate crop.
        bed_frequency_hz: Frequency the bed is tuned to. Unknown frequencies
                          are fine; they just never match.
        slot_interval:    Slot being filled.
        jazz_mode:        Relaxed mode that lets Enhancers cross zones in
                          non-structural slots.

    Returns:
        DissonanceCheck. Never raises.
    """
    if crop.frequency_hz == bed_frequency_hz:
        return DissonanceCheck(is_dissonant=False, conflict_type=None)

    interval = str(slot_interval)

    if jazz_mode and not is_structural_interval(interval):
        if crop.guild_role == GuildRole.ENHANCER:
            return DissonanceCheck(
                is_dissonant=False,
                conflict_type=None,
                message=(
                    f'Jazz mode: "{crop.display_name}" ({crop.frequency_hz}Hz) permitted '
                    f"as inter-zone voicing in this {bed_frequency_hz}Hz bed."
                ),
            )

    return DissonanceCheck(
        is_dissonant=True,
        conflict_type="Vibrational",
        message=(
            f'Dissonance: "{crop.display_name}" ({crop.frequency_hz}Hz) is out of tune '
            f"with this {bed_frequency_hz}Hz bed for the {interval} slot."
        ),
    )

"""
Guild composition: fills a bed's open slots around a chosen star crop.

Pipeline
--------
1. The star must be in tune with the bed (Root is structural).
2. For each slot in ``AUTO_FILL_INTERVALS`` order, candidates are the catalog
   crops labelled for that slot that pass zone compliance (jazz mode lets
   Enhancers cross zones).
3. ``rank_slot_candidates`` scores them against everything placed so far;
   the top result is placed. Placed crops are never offered again.
4. The finished guild is summarised: vertical diversity, shading notes, and
   whether the core chord (Root + 3rd + 5th + 7th) is complete.

The 9th and 11th slots are left to the grower (roots, fungal inoculants).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from planting_engine.models.crop import Crop, Slot
from planting_engine.models.recommendation import Recommendation
from planting_engine.recommendations.growth_layers import (
    ShadingWarning,
    guild_shading_warnings,
    vertical_diversity_score,
)
from planting_engine.recommendations.scorer import rank_slot_candidates
from planting_engine.recommendations.zone_compliance import check_dissonance
from planting_engine.taxonomy.zone_taxonomy import ChordInterval, HarmonicZone, get_zone

logger = logging.getLogger(__name__)

AUTO_FILL_INTERVALS: tuple[ChordInterval, ...] = (
    ChordInterval.THIRD,
    ChordInterval.FIFTH,
    ChordInterval.SEVENTH,
    ChordInterval.THIRTEENTH,
)

CORE_INTERVALS: frozenset[ChordInterval] = frozenset({
    ChordInterval.THIRD,
    ChordInterval.FIFTH,
    ChordInterval.SEVENTH,
})


@dataclass
class GuildComposition:
    """A star crop plus the best pick for each auto-filled slot.

    Attributes:
        star_crop:        The Root crop the guild is built around.
        bed_frequency_hz: Frequency the bed is tuned to.
        zone:             Zone metadata for the bed, ``None`` if unknown.
        picks:            One entry per ``AUTO_FILL_INTERVALS`` slot; ``None``
                          when no candidate qualified.
        diversity_score:  ``vertical_diversity_score`` over star + picks.
        shading_warnings: ``guild_shading_warnings`` over star + picks.
    """

    star_crop:        Crop
    bed_frequency_hz: int
    zone:             Optional[HarmonicZone]
    picks:            dict[ChordInterval, Optional[Recommendation]] = field(default_factory=dict)
    diversity_score:  float = 0.0
    shading_warnings: list[ShadingWarning] = field(default_factory=list)

    @property
    def crops(self) -> list[Crop]:
        """Star first, then picks in slot order."""
        return [self.star_crop] + [rec.crop for rec in self.picks.values() if rec is not None]

    @property
    def is_complete(self) -> bool:
        """True when the 3rd, 5th and 7th slots are all filled."""
        return all(self.picks.get(interval) is not None for interval in CORE_INTERVALS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bed_frequency_hz": self.bed_frequency_hz,
            "zone":             self.zone.identity if self.zone else None,
            "star":             {"crop_id": self.star_crop.id, "crop_name": self.star_crop.display_name},
            "slots": {
                str(interval): (rec.to_dict() if rec is not None else None)
                for interval, rec in self.picks.items()
            },
            "diversity_score":  self.diversity_score,
            "shading":          [w.message for w in self.shading_warnings],
            "is_complete":      self.is_complete,
        }


def _slot_candidates(catalog: Iterable[Crop], slot: Slot) -> list[Crop]:
    return [
        crop for crop in catalog
        if crop.chord_interval == slot.chord_interval
        and not check_dissonance(
            crop, slot.bed_frequency_hz, slot.chord_interval, slot.jazz_mode
        ).is_dissonant
    ]


def compose_guild(
    star_crop:        Crop,
    catalog:          Iterable[Crop],
    bed_frequency_hz: int,
    jazz_mode:        bool = False,
) -> GuildComposition:
    """Fill the 3rd, 5th, 7th and 13th slots around ``star_crop``.

    Args:
        star_crop:        Root crop; must share the bed's frequency.
        catalog:          Crops to choose from, in catalog order.
        bed_frequency_hz: Frequency the bed is tuned to.
        jazz_mode:        Let Enhancers from other zones fill non-structural slots.

    Returns:
        GuildComposition. Slots with no qualifying crop hold ``None``.

    Raises:
        ValueError: If ``star_crop`` is out of tune with the bed.
    """
    root_check = check_dissonance(star_crop, bed_frequency_hz, ChordInterval.ROOT, jazz_mode)
    if root_check.is_dissonant:
        raise ValueError(root_check.message)

    catalog = list(catalog)
    placed: list[Crop] = [star_crop]
    picks: dict[ChordInterval, Optional[Recommendation]] = {}

    for interval in AUTO_FILL_INTERVALS:
        slot = Slot(bed_frequency_hz=bed_frequency_hz, chord_interval=interval, jazz_mode=jazz_mode)
        ranked = rank_slot_candidates(
            _slot_candidates(catalog, slot),
            slot,
            existing_plantings=placed,
            star_crop=star_crop,
            limit=1,
        )
        best = ranked[0] if ranked else None
        picks[interval] = best
        if best is not None:
            placed.append(best.crop)

    composition = GuildComposition(
        star_crop=star_crop,
        bed_frequency_hz=bed_frequency_hz,
        zone=get_zone(bed_frequency_hz),
        picks=picks,
        diversity_score=vertical_diversity_score(placed),
        shading_warnings=guild_shading_warnings(placed),
    )
    logger.info(
        "Guild for %s @ %dHz: %d/%d slots filled, complete=%s",
        star_crop.id, bed_frequency_hz, len(placed) - 1, len(AUTO_FILL_INTERVALS),
        composition.is_complete,
    )
    return composition

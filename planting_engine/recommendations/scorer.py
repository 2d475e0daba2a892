"""
Compatibility scoring: how well a candidate crop fills one slot of a bed.

Score formula (additive, approximate range -60 to +35)
------------------------------------------------------
    total = zone_score + brix_score + sprinter_score + layer_score + companion_score

    Ineligible candidates (cross-zone in a structural slot) have total = -inf
    and are dropped by rank_slot_candidates().

Component explanations
----------------------
zone_score:
    +10  crop is tuned to the bed frequency.
     +5  crop crosses zones under the jazz waiver ("Jazz voicing").
     -5  crop is dissonant in a non-structural slot.

brix_score:
    +3 when brix_target_min >= 12, another +2 when brix_target_max >= 18.
    The two thresholds are independent and stack.

sprinter_score:
    harvest_days <= 45 → 3 × SPRINTER_SLOT_WEIGHT[slot] (7th/Signal weighs most).

layer_score:
    +4 when the candidate's layer is ideal for the slot given the star crop
    (explicit ``star_crop``, else the existing Root planting). No star → 0.

companion_score:
    See recommendations.companions: explicit companions, shared seasons and
    complementary habits add; antagonists subtract 15 each.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from planting_engine.models.crop import Crop, Slot
from planting_engine.models.recommendation import Recommendation
from planting_engine.recommendations.companions import companion_score, synergy_notes
from planting_engine.recommendations.growth_layers import (
    classify_layer,
    ideal_layers_for_slot,
    layer_match_score,
)
from planting_engine.recommendations.ranker import rank_recommendations
from planting_engine.recommendations.zone_compliance import (
    DissonanceCheck,
    check_dissonance,
    is_structural_interval,
)
from planting_engine.taxonomy.zone_taxonomy import SPRINTER_SLOT_WEIGHT, ChordInterval
from planting_engine.utils.numeric import at_least, at_most

logger = logging.getLogger(__name__)

IN_ZONE_BONUS       = 10.0
JAZZ_VOICING_BONUS  = 5.0
DISSONANCE_PENALTY  = -5.0
HIGH_BRIX_MIN       = 12.0
HIGH_BRIX_BONUS     = 3.0
EXCELLENT_BRIX_MAX  = 18.0
EXCELLENT_BRIX_BONUS = 2.0
SPRINTER_MAX_DAYS   = 45
SPRINTER_BASE       = 3.0


@dataclass
class CompatibilityComponents:
    """All components of a slot compatibility score.

    Attributes:
        zone_score:      In-zone bonus, jazz-voicing bonus, or dissonance penalty.
        brix_score:      Stacked nutrient-density bonus.
        sprinter_score:  Fast-turnover bonus scaled by slot weight.
        layer_score:     Ideal-layer bonus relative to the star crop.
        companion_score: Net companion / antagonist score vs existing plantings.
        eligible:        False when the crop may not occupy the slot at all.
        dissonance:      The underlying zone compliance result.
        in_zone:         True when the crop matches the bed frequency.
    """

    zone_score:      float
    brix_score:      float
    sprinter_score:  float
    layer_score:     float
    companion_score: float
    eligible:        bool
    dissonance:      DissonanceCheck
    in_zone:         bool = field(default=False)

    @property
    def total(self) -> float:
        """Sum of all components, or ``-inf`` for an ineligible candidate."""
        if not self.eligible:
            return float("-inf")
        return (
            self.zone_score
            + self.brix_score
            + self.sprinter_score
            + self.layer_score
            + self.companion_score
        )


def is_sprinter(crop: Crop) -> bool:
    """True when the crop is harvestable within 45 days (45 qualifies)."""
    return at_most(crop.harvest_days, SPRINTER_MAX_DAYS)


def find_star_crop(existing_plantings: Iterable[Crop]) -> Optional[Crop]:
    """Return the first existing planting filling the Root slot, if any."""
    for crop in existing_plantings:
        if crop.chord_interval == ChordInterval.ROOT:
            return crop
    return None


def compute_compatibility(
    candidate:          Crop,
    slot:               Slot,
    existing_plantings: Sequence[Crop] = (),
    star_crop:          Optional[Crop] = None,
) -> CompatibilityComponents:
    """Compute all compatibility components for one candidate in one slot.

    Args:
        candidate:          Crop being considered.
        slot:               Bed frequency, slot role and jazz flag.
        existing_plantings: Crops already in the bed.
        star_crop:          Crop whose layer drives the ideal-layer table;
                            defaults to the existing Root planting.

    Returns:
        CompatibilityComponents with all fields populated.
    """
    # ── Zone ──────────────────────────────────────────────────────────────────
    check = check_dissonance(
        candidate, slot.bed_frequency_hz, slot.chord_interval, slot.jazz_mode
    )
    in_zone = candidate.frequency_hz == slot.bed_frequency_hz
    eligible = True
    if in_zone:
        zone_score = IN_ZONE_BONUS
    elif not check.is_dissonant:
        zone_score = JAZZ_VOICING_BONUS
    elif is_structural_interval(slot.chord_interval):
        zone_score = 0.0
        eligible = False
    else:
        zone_score = DISSONANCE_PENALTY

    # ── Brix ──────────────────────────────────────────────────────────────────
    brix_score = 0.0
    if at_least(candidate.brix_target_min, HIGH_BRIX_MIN):
        brix_score += HIGH_BRIX_BONUS
    if at_least(candidate.brix_target_max, EXCELLENT_BRIX_MAX):
        brix_score += EXCELLENT_BRIX_BONUS

    # ── Sprinter ──────────────────────────────────────────────────────────────
    sprinter_score = 0.0
    if is_sprinter(candidate):
        sprinter_score = SPRINTER_BASE * SPRINTER_SLOT_WEIGHT[slot.chord_interval]

    # ── Layer ─────────────────────────────────────────────────────────────────
    star = star_crop if star_crop is not None else find_star_crop(existing_plantings)
    layer_score = 0.0
    if star is not None:
        layer_score = layer_match_score(
            candidate, slot.chord_interval, ideal_layers_for_slot(star)
        )

    return CompatibilityComponents(
        zone_score=zone_score,
        brix_score=brix_score,
        sprinter_score=sprinter_score,
        layer_score=layer_score,
        companion_score=companion_score(candidate, existing_plantings),
        eligible=eligible,
        dissonance=check,
        in_zone=in_zone,
    )


def compatibility_score(
    candidate:          Crop,
    slot:               Slot,
    existing_plantings: Sequence[Crop] = (),
    star_crop:          Optional[Crop] = None,
) -> float:
    """Total compatibility score; ``-inf`` when the candidate is ineligible."""
    return compute_compatibility(candidate, slot, existing_plantings, star_crop).total


def build_compatibility_reasons(
    components:         CompatibilityComponents,
    candidate:          Crop,
    slot:               Slot,
    existing_plantings: Sequence[Crop] = (),
) -> list[str]:
    """Build the reason strings for a scored candidate, in scoring order."""
    reasons: list[str] = []

    if not components.eligible:
        reasons.append(f"Not allowed in the {slot.chord_interval} slot (out of zone)")
        return reasons

    if components.in_zone:
        reasons.append(f"In zone ({slot.bed_frequency_hz}Hz)")
    elif not components.dissonance.is_dissonant:
        reasons.append("Jazz voicing")
    else:
        reasons.append(f"Out of zone ({candidate.frequency_hz}Hz)")

    if components.brix_score >= HIGH_BRIX_BONUS + EXCELLENT_BRIX_BONUS:
        reasons.append("High Brix")
        reasons.append("Excellent Brix")
    elif components.brix_score == HIGH_BRIX_BONUS:
        reasons.append("High Brix")
    elif components.brix_score == EXCELLENT_BRIX_BONUS:
        reasons.append("Excellent Brix")

    if components.sprinter_score > 0:
        reasons.append(f"Sprinter ({candidate.harvest_days}d)")

    if components.layer_score > 0:
        reasons.append(f"Ideal layer ({classify_layer(candidate).layer})")

    reasons.extend(note.message for note in synergy_notes(candidate, existing_plantings))
    return reasons


def rank_slot_candidates(
    candidates:         Iterable[Crop],
    slot:               Slot,
    existing_plantings: Sequence[Crop] = (),
    star_crop:          Optional[Crop] = None,
    limit:              Optional[int] = None,
) -> list[Recommendation]:
    """Score and rank candidates for a slot.

    Candidates already planted in the bed and ineligible candidates are
    dropped. Equal scores keep catalog order.
    """
    planted_ids = {c.id for c in existing_plantings}
    scored: list[Recommendation] = []
    skipped = 0

    for candidate in candidates:
        if candidate.id in planted_ids:
            continue
        components = compute_compatibility(candidate, slot, existing_plantings, star_crop)
        if not components.eligible:
            skipped += 1
            continue
        reasons = build_compatibility_reasons(components, candidate, slot, existing_plantings)
        scored.append(
            Recommendation(crop=candidate, score=components.total, reasons=tuple(reasons))
        )

    logger.debug(
        "Slot %s @ %dHz: %d scored, %d ineligible",
        slot.chord_interval, slot.bed_frequency_hz, len(scored), skipped,
    )
    return rank_recommendations(scored, limit=limit)

"""
Growth layers: vertical tier classification, shading risk, and layer fit.

Layer-match scoring
-------------------
    ideal = ideal_layers_for_slot(star)       # per-slot tuple of LayerTier
    bonus = 4 if classify_layer(candidate).layer in ideal[slot] else 0

Default ideal layers per slot (before star adjustments)
-------------------------------------------------------
    Root  → star's own layer      9th  → underground
    3rd   → understory, herbaceous 11th → ground, underground
    5th   → ground, herbaceous     13th → vine, canopy
    7th   → herbaceous, vine

Star adjustments
----------------
    canopy star          : 3rd → understory;              13th → vine
    herbaceous/ground    : 7th → herbaceous;              13th → vine, herbaceous
    vine star            : 3rd → herbaceous, understory;  13th → vine, herbaceous

Harvest stagger
---------------
    d = |candidate.harvest_days - nearest placed harvest_days|
    target-5 <= d <= target+10 → +4      10 <= d < target → +2
    d < 5                      → -2      otherwise        → +1
    Missing data on either side → 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Literal, Mapping, Optional, Sequence

from planting_engine.models.crop import Crop
from planting_engine.taxonomy.growth_taxonomy import (
    DEFAULT_HABIT,
    GROWTH_LAYER_MAP,
    SHADE_TOLERANT_LAYERS,
    SHADING_INFO_FT,
    SHADING_WARNING_FT,
    LayerInfo,
    LayerTier,
)
from planting_engine.taxonomy.zone_taxonomy import ChordInterval

LAYER_MATCH_BONUS = 4.0
LAYER_DIVERSITY_POINTS = 2.0
DEFAULT_STAGGER_DAYS = 20

ShadingSeverity = Literal["info", "warning"]


@dataclass(frozen=True)
class ShadingWarning:
    """A taller crop likely to shade a shorter, sun-loving neighbour."""

    severity:     ShadingSeverity
    message:      str
    taller_crop:  str
    shorter_crop: str


def classify_layer(crop: Crop) -> LayerInfo:
    """Return the layer classification for ``crop``; unknown habits fall back to herb."""
    habit = (crop.growth_habit or DEFAULT_HABIT).strip().lower()
    return GROWTH_LAYER_MAP.get(habit, GROWTH_LAYER_MAP[DEFAULT_HABIT])


def check_shading(taller_crop: Crop, shorter_crop: Crop) -> Optional[ShadingWarning]:
    """Return a shading note when ``taller_crop`` would shade ``shorter_crop``.

    ``None`` when the height difference is at most 4 ft, or when the shorter
    crop sits in a shade-tolerant layer (ground, underground).
    """
    taller = classify_layer(taller_crop)
    shorter = classify_layer(shorter_crop)
    diff = taller.height_ft - shorter.height_ft

    if diff <= SHADING_INFO_FT:
        return None
    if shorter.layer in SHADE_TOLERANT_LAYERS:
        return None

    taller_name = taller_crop.display_name
    shorter_name = shorter_crop.display_name

    if diff > SHADING_WARNING_FT:
        return ShadingWarning(
            severity="warning",
            message=(
                f"{taller_name} (~{taller.height_ft:g}ft) may heavily shade "
                f"{shorter_name} (~{shorter.height_ft:g}ft). Consider placing "
                f"{shorter_name} on the sun-facing side."
            ),
            taller_crop=taller_name,
            shorter_crop=shorter_name,
        )
    return ShadingWarning(
        severity="info",
        message=f"{taller_name} is taller than {shorter_name}. Ensure adequate sun exposure.",
        taller_crop=taller_name,
        shorter_crop=shorter_name,
    )


def guild_shading_warnings(crops: Sequence[Crop]) -> list[ShadingWarning]:
    """Check every pair in a guild, taller crop first; ties in height are skipped."""
    warnings: list[ShadingWarning] = []
    for a, b in combinations(crops, 2):
        ha = classify_layer(a).height_ft
        hb = classify_layer(b).height_ft
        if ha == hb:
            continue
        taller, shorter = (a, b) if ha > hb else (b, a)
        warning = check_shading(taller, shorter)
        if warning is not None:
            warnings.append(warning)
    return warnings


def ideal_layers_for_slot(star_crop: Crop) -> dict[ChordInterval, tuple[LayerTier, ...]]:
    """Return the acceptable layers for each slot, derived from the star crop's layer."""
    star_layer = classify_layer(star_crop).layer

    ideal: dict[ChordInterval, tuple[LayerTier, ...]] = {
        ChordInterval.ROOT:       (star_layer,),
        ChordInterval.THIRD:      (LayerTier.UNDERSTORY, LayerTier.HERBACEOUS),
        ChordInterval.FIFTH:      (LayerTier.GROUND, LayerTier.HERBACEOUS),
        ChordInterval.SEVENTH:    (LayerTier.HERBACEOUS, LayerTier.VINE),
        ChordInterval.NINTH:      (LayerTier.UNDERGROUND,),
        ChordInterval.ELEVENTH:   (LayerTier.GROUND, LayerTier.UNDERGROUND),
        ChordInterval.THIRTEENTH: (LayerTier.VINE, LayerTier.CANOPY),
    }

    if star_layer == LayerTier.CANOPY:
        ideal[ChordInterval.THIRD] = (LayerTier.UNDERSTORY,)
        ideal[ChordInterval.THIRTEENTH] = (LayerTier.VINE,)
    elif star_layer in (LayerTier.HERBACEOUS, LayerTier.GROUND):
        # Short star: no canopy companions.
        ideal[ChordInterval.THIRTEENTH] = (LayerTier.VINE, LayerTier.HERBACEOUS)
        ideal[ChordInterval.SEVENTH] = (LayerTier.HERBACEOUS,)
    elif star_layer == LayerTier.VINE:
        ideal[ChordInterval.THIRD] = (LayerTier.HERBACEOUS, LayerTier.UNDERSTORY)
        ideal[ChordInterval.THIRTEENTH] = (LayerTier.VINE, LayerTier.HERBACEOUS)

    return ideal


def layer_match_score(
    candidate:    Crop,
    slot_key:     ChordInterval | str,
    ideal_layers: Mapping[ChordInterval, Sequence[LayerTier]],
) -> float:
    """Fixed bonus when the candidate's layer is ideal for the slot; no partial credit."""
    ideal = ideal_layers.get(slot_key)
    if not ideal:
        return 0.0
    return LAYER_MATCH_BONUS if classify_layer(candidate).layer in ideal else 0.0


def vertical_diversity_score(crops: Iterable[Crop]) -> float:
    """Two points per distinct layer present in the guild."""
    layers = {classify_layer(c).layer for c in crops}
    return LAYER_DIVERSITY_POINTS * len(layers)


def harvest_stagger_score(
    candidate:      Crop,
    placed_crops:   Iterable[Crop],
    target_stagger: int = DEFAULT_STAGGER_DAYS,
) -> float:
    """Reward harvests spread about ``target_stagger`` days from the nearest placed harvest."""
    if candidate.harvest_days is None:
        return 0.0
    placed = [c.harvest_days for c in placed_crops if c.harvest_days is not None]
    if not placed:
        return 0.0

    min_dist = min(abs(candidate.harvest_days - d) for d in placed)

    if target_stagger - 5 <= min_dist <= target_stagger + 10:
        return 4.0
    if 10 <= min_dist < target_stagger:
        return 2.0
    if min_dist < 5:
        return -2.0
    return 1.0

"""
Succession planting: ranks follow-up crops for a bed after a harvest.

Pipeline
--------
1. Exclude the finished crop itself (by id).
2. Hardiness filter (when a zone is given; a missing bound is open).
3. Antagonist filter against every remaining bedmate.
4. Optional in-season filter: plantable this month or next.
5. Score, sort, truncate.

Score terms
-----------
    rotation          : +8 different genus ("Good rotation"), -5 same genus,
                        0 when either side has no genus
    season            : +6 plantable this month ("Plant now"),
                        +3 plantable next month ("Plant next month")
    quick harvest     : +4 at <= 45 days ("Quick harvest"), +2 at <= 75 days
    bedmate companion : +5 once, for the first bedmate it accompanies
    N-fixer           : +4 Nitrogen/Bio-Mass after a Sustenance crop
    follows well      : +3 explicit companion of the finished crop
    harvest stagger   : -2..+4 vs bedmate harvest days ("Staggered harvest" at +4)

Genus is the first token of the lower-cased scientific name. It is a rough
stand-in for plant family; crops without a scientific name fall back to their
lower-cased category, and crops with neither have no genus. Unlabelled
categories never earn the N-fixer bonus.

Ordering: score desc, then faster harvest (missing last), then catalog order.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from planting_engine.models.crop import Crop
from planting_engine.models.recommendation import Recommendation
from planting_engine.recommendations.companions import is_antagonist, is_explicit_companion
from planting_engine.recommendations.growth_layers import (
    DEFAULT_STAGGER_DAYS,
    harvest_stagger_score,
)
from planting_engine.recommendations.ranker import rank_recommendations
from planting_engine.taxonomy.zone_taxonomy import CropCategory
from planting_engine.utils.numeric import at_most, within_bounds
from planting_engine.utils.time_utils import next_month, plantable_in_month

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3

# Score weights
_ROTATION_BONUS      = 8.0
_SAME_GENUS_PENALTY  = -5.0
_PLANT_NOW_BONUS     = 6.0
_PLANT_NEXT_BONUS    = 3.0
_QUICK_HARVEST_DAYS  = 45
_QUICK_HARVEST_BONUS = 4.0
_MEDIUM_HARVEST_DAYS = 75
_MEDIUM_HARVEST_BONUS = 2.0
_BEDMATE_COMPANION   = 5.0
_NFIXER_BONUS        = 4.0
_FOLLOWS_WELL_BONUS  = 3.0
_BEST_STAGGER_SCORE  = 4.0


def genus_key(crop: Crop) -> str:
    """Rotation key: genus token of the scientific name, else the category, else ``""``."""
    if crop.scientific_name and crop.scientific_name.strip():
        return crop.scientific_name.strip().lower().split()[0]
    return (crop.category or "").strip().lower()


def fits_hardiness(crop: Crop, hardiness_zone: float) -> bool:
    """True if ``hardiness_zone`` lies within the crop's range; missing bounds are open."""
    return within_bounds(hardiness_zone, crop.hardiness_zone_min, crop.hardiness_zone_max)


def _score_candidate(
    candidate:           Crop,
    finished_crop:       Crop,
    bedmates:            Sequence[Crop],
    harvest_date:        Optional[date],
    stagger_target_days: int,
) -> tuple[float, list[str]]:
    score = 0.0
    reasons: list[str] = []

    # ── Rotation ──────────────────────────────────────────────────────────────
    candidate_genus = genus_key(candidate)
    finished_genus = genus_key(finished_crop)
    if candidate_genus and finished_genus:
        if candidate_genus != finished_genus:
            score += _ROTATION_BONUS
            reasons.append("Good rotation")
        else:
            score += _SAME_GENUS_PENALTY

    # ── Season ────────────────────────────────────────────────────────────────
    if harvest_date is not None:
        month = harvest_date.month
        if plantable_in_month(candidate.planting_season, month):
            score += _PLANT_NOW_BONUS
            reasons.append("Plant now")
        elif plantable_in_month(candidate.planting_season, next_month(month)):
            score += _PLANT_NEXT_BONUS
            reasons.append("Plant next month")

    # ── Harvest speed ─────────────────────────────────────────────────────────
    if at_most(candidate.harvest_days, _QUICK_HARVEST_DAYS):
        score += _QUICK_HARVEST_BONUS
        reasons.append("Quick harvest")
    elif at_most(candidate.harvest_days, _MEDIUM_HARVEST_DAYS):
        score += _MEDIUM_HARVEST_BONUS

    # ── Bedmate companion (counted once) ──────────────────────────────────────
    for mate in bedmates:
        if is_explicit_companion(candidate, mate):
            score += _BEDMATE_COMPANION
            reasons.append(f"Companion of {mate.display_name}")
            break

    # ── Soil building ─────────────────────────────────────────────────────────
    if (
        finished_crop.category == CropCategory.SUSTENANCE
        and candidate.category == CropCategory.NITROGEN_BIOMASS
    ):
        score += _NFIXER_BONUS
        reasons.append("N-fixer after feeder")

    if is_explicit_companion(finished_crop, candidate):
        score += _FOLLOWS_WELL_BONUS
        reasons.append("Follows well")

    # ── Harvest stagger ───────────────────────────────────────────────────────
    stagger = harvest_stagger_score(candidate, bedmates, stagger_target_days)
    score += stagger
    if stagger >= _BEST_STAGGER_SCORE:
        reasons.append("Staggered harvest")

    return score, reasons


def _harvest_tie_key(rec: Recommendation) -> tuple[bool, int]:
    days = rec.crop.harvest_days
    return (days is None, days or 0)


def suggest_succession(
    finished_crop:       Crop,
    candidate_pool:      Iterable[Crop],
    hardiness_zone:      Optional[float],
    bedmates:            Sequence[Crop] = (),
    harvest_date:        Optional[date] = None,
    limit:               Optional[int] = DEFAULT_LIMIT,
    require_in_season:   bool = False,
    stagger_target_days: int = DEFAULT_STAGGER_DAYS,
) -> list[Recommendation]:
    """Rank follow-up crops for a bed whose ``finished_crop`` was just harvested.

    Args:
        finished_crop:       Crop that was harvested.
        candidate_pool:      Catalog to choose from, in catalog order.
        hardiness_zone:      USDA zone of the garden; ``None`` skips the filter.
        bedmates:            Crops still growing in the same bed.
        harvest_date:        Date of the harvest; ``None`` makes the season
                             term neutral and disables ``require_in_season``.
        limit:               Maximum results; ``None`` = all, ``<= 0`` = none.
        require_in_season:   Drop candidates not plantable this month or next.
        stagger_target_days: Preferred harvest spacing against bedmates.

    Returns:
        Recommendations, best first. Empty when nothing survives the filters.
    """
    bedmates = [b for b in bedmates if b.id != finished_crop.id]
    month = harvest_date.month if harvest_date is not None else None

    scored: list[Recommendation] = []
    n_pool = n_hardiness = n_antagonist = n_season = 0

    for candidate in candidate_pool:
        n_pool += 1
        if candidate.id == finished_crop.id:
            continue
        if hardiness_zone is not None and not fits_hardiness(candidate, hardiness_zone):
            n_hardiness += 1
            continue
        if any(is_antagonist(candidate, mate) for mate in bedmates):
            n_antagonist += 1
            continue
        if require_in_season and month is not None:
            if not (
                plantable_in_month(candidate.planting_season, month)
                or plantable_in_month(candidate.planting_season, next_month(month))
            ):
                n_season += 1
                continue

        score, reasons = _score_candidate(
            candidate, finished_crop, bedmates, harvest_date, stagger_target_days
        )
        scored.append(Recommendation(crop=candidate, score=score, reasons=tuple(reasons)))

    logger.debug(
        "Succession after %s: pool=%d, hardiness-filtered=%d, antagonist-filtered=%d, "
        "season-filtered=%d, scored=%d",
        finished_crop.id, n_pool, n_hardiness, n_antagonist, n_season, len(scored),
    )
    return rank_recommendations(scored, limit=limit, tie_key=_harvest_tie_key)

"""
Companion planting: antagonist checks, explicit companions, and the companion
score used when placing a crop next to existing plantings.

Names are compared lower-cased using ``Crop.display_name`` (common name, else
catalog name). Matching is by substring, so ``"Bush Bean"`` hits the ``"bean"``
keyword.

Companion score per placed neighbour
------------------------------------
    antagonist          → -15 (nothing else counted for that neighbour)
    explicit companion  → +5
    shared seasons      → +1 each, capped at 3 (1 when either side is unknown)
    habit complement    → +2 complementary, +1 different, 0 same or unknown
                          (pairs match by keyword, so "climbing vine" counts as vine)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from planting_engine.models.crop import Crop
from planting_engine.taxonomy.companion_taxonomy import (
    ANTAGONIST_RULES,
    COMPLEMENTARY_HABITS,
)

ANTAGONIST_PENALTY = -15.0
EXPLICIT_COMPANION_BONUS = 5.0
MAX_SEASON_OVERLAP = 3

NoteKind = Literal["antagonist", "companion"]


@dataclass(frozen=True)
class SynergyNote:
    """One relationship between a crop and a neighbour, ready for display."""

    kind:       NoteKind
    other_id:   str
    other_name: str
    message:    str


def _match_name(crop: Crop) -> str:
    return crop.display_name.lower()


def _in_group(name: str, group: Sequence[str]) -> bool:
    return any(keyword in name for keyword in group)


def is_antagonist(a: Crop, b: Crop) -> bool:
    """True when ``a`` and ``b`` fall on opposite sides of any antagonist rule."""
    name_a = _match_name(a)
    name_b = _match_name(b)
    for rule in ANTAGONIST_RULES:
        if _in_group(name_a, rule.group_a) and _in_group(name_b, rule.group_b):
            return True
        if _in_group(name_a, rule.group_b) and _in_group(name_b, rule.group_a):
            return True
    return False


def _lists_as_companion(crop: Crop, other: Crop) -> bool:
    if not crop.companion_crops:
        return False
    other_name = _match_name(other)
    words = other_name.split()
    first_word = words[0] if words else ""
    for companion in crop.companion_crops:
        comp = companion.strip().lower()
        if not comp:
            continue
        if comp in other_name or (first_word and first_word in comp):
            return True
    return False


def is_explicit_companion(a: Crop, b: Crop) -> bool:
    """True when either crop lists the other in its ``companion_crops``."""
    return _lists_as_companion(a, b) or _lists_as_companion(b, a)


def season_overlap_score(a: Crop, b: Crop) -> float:
    if not a.planting_season or not b.planting_season:
        return 1.0
    seasons_a = {s.strip().lower() for s in a.planting_season}
    seasons_b = {s.strip().lower() for s in b.planting_season}
    return float(min(len(seasons_a & seasons_b), MAX_SEASON_OVERLAP))


def habit_complement_score(a: Crop, b: Crop) -> float:
    if not a.growth_habit or not b.growth_habit:
        return 0.0
    habit_a = a.growth_habit.strip().lower()
    habit_b = b.growth_habit.strip().lower()
    if habit_a == habit_b:
        return 0.0
    for x, y in COMPLEMENTARY_HABITS:
        if (x in habit_a and y in habit_b) or (y in habit_a and x in habit_b):
            return 2.0
    return 1.0


def companion_score(candidate: Crop, placed: Iterable[Crop]) -> float:
    """Sum the companion terms of ``candidate`` against every placed crop.

    The candidate itself is skipped if it appears in ``placed``.
    """
    score = 0.0
    for other in placed:
        if other.id == candidate.id:
            continue
        if is_antagonist(candidate, other):
            score += ANTAGONIST_PENALTY
            continue
        if is_explicit_companion(candidate, other):
            score += EXPLICIT_COMPANION_BONUS
        score += season_overlap_score(candidate, other)
        score += habit_complement_score(candidate, other)
    return score


def synergy_notes(crop: Crop, others: Iterable[Crop]) -> list[SynergyNote]:
    """List antagonist and companion relationships between ``crop`` and ``others``."""
    notes: list[SynergyNote] = []
    for other in others:
        if other.id == crop.id:
            continue
        name = other.display_name
        if is_antagonist(crop, other):
            notes.append(SynergyNote("antagonist", other.id, name, f"Avoid planting near {name}"))
        elif is_explicit_companion(crop, other):
            notes.append(SynergyNote("companion", other.id, name, f"Companion of {name}"))
    return notes

"""
Calendar helpers for succession planting.

Key concepts:
  - Season buckets: each calendar month maps to exactly one ``Season``
    (meteorological seasons, northern hemisphere).
  - Month matching: a catalog ``planting_season`` entry such as ``"Early spring"``,
    ``"Autumn"``, ``"March"`` or ``"Sep-Oct"`` is matched against a month by
    season keyword, full month name, or three-letter abbreviation.

All functions take month numbers in the ``datetime.date.month`` convention
(1 = January … 12 = December).
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from planting_engine.taxonomy.zone_taxonomy import SEASON_KEYWORDS, Season

MONTH_NAMES: tuple[str, ...] = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)


def season_for_month(month: int) -> Season:
    """Return the season bucket for a 1-based month.

    Mar–May → spring, Jun–Aug → summer, Sep–Nov → fall, Dec–Feb → winter.

    Raises:
        ValueError: If ``month`` is outside 1..12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}.")
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


def next_month(month: int) -> int:
    """Return the month after ``month``, wrapping December → January."""
    return month % 12 + 1


def plantable_in_month(planting_season: Optional[Iterable[str]], month: int) -> bool:
    """Return True if any ``planting_season`` entry covers ``month``.

    Missing or empty season data never matches.
    """
    if not planting_season:
        return False
    keywords = SEASON_KEYWORDS[season_for_month(month)]
    month_name = MONTH_NAMES[month - 1]
    short_month = month_name[:3]

    for entry in planting_season:
        lower = entry.lower()
        if any(kw in lower for kw in keywords):
            return True
        if month_name in lower or short_month in lower:
            return True
    return False


def season_for_date(check_date: date) -> Season:
    """Return the season bucket for a calendar date."""
    return season_for_month(check_date.month)

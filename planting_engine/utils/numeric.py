"""
Null-aware comparisons for optional catalog numbers.

Catalog fields such as ``harvest_days``, ``brix_target_min`` and the hardiness
bounds are frequently missing. Scoring code never compares them directly;
it goes through these helpers so the rule is stated once:

    A missing value never meets a threshold, so its score term contributes 0.

Range checks are the exception: a missing bound is treated as open.
"""

from __future__ import annotations

from typing import Optional


def at_least(value: Optional[float], threshold: float) -> bool:
    """True if ``value`` is present and ``>= threshold``."""
    return value is not None and value >= threshold


def at_most(value: Optional[float], ceiling: float) -> bool:
    """True if ``value`` is present and ``<= ceiling``."""
    return value is not None and value <= ceiling


def within_bounds(
    value: float,
    lower: Optional[float],
    upper: Optional[float],
) -> bool:
    """True if ``value`` lies in ``[lower, upper]``; a missing bound is open."""
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True

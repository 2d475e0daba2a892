"""
Recommendation ranker: orders scored candidates and flattens them for output.

Usage flow
----------
1. rank_recommendations(scored, limit=3, tie_key=...)
   -> list[Recommendation]  (best first)

2. recommendations_to_rows(ranked)
   -> list[dict]  (1-based ``rank`` plus ``Recommendation.to_dict()`` fields)

Ordering
--------
Score descending, then the optional ``tie_key`` ascending, then input order
(``sorted`` is stable, so catalog order is the final tie-break).

Truncation
----------
    limit is None → everything
    limit <= 0    → empty list
    otherwise     → first ``limit`` entries
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from planting_engine.models.recommendation import Recommendation

TieKey = Callable[[Recommendation], Any]


def truncate(items: list[Recommendation], limit: Optional[int]) -> list[Recommendation]:
    if limit is None:
        return items
    if limit <= 0:
        return []
    return items[:limit]


def rank_recommendations(
    scored:  Iterable[Recommendation],
    limit:   Optional[int] = None,
    tie_key: Optional[TieKey] = None,
) -> list[Recommendation]:
    """Sort recommendations best-first and apply ``limit``.

    Args:
        scored:  Recommendations in catalog order.
        limit:   Maximum entries to return; see module docstring.
        tie_key: Secondary ascending key applied between equal scores.

    Returns:
        New list; the input is not modified.
    """
    if tie_key is None:
        ordered = sorted(scored, key=lambda r: -r.score)
    else:
        ordered = sorted(scored, key=lambda r: (-r.score, tie_key(r)))
    return truncate(ordered, limit)


def recommendations_to_rows(recs: Iterable[Recommendation]) -> list[dict[str, Any]]:
    """Flatten recommendations to JSON-ready dicts with a 1-based ``rank``."""
    return [{"rank": i, **rec.to_dict()} for i, rec in enumerate(recs, start=1)]

"""
Tests for planting_engine/recommendations/ranker.py.

What we test
------------
rank_recommendations():
  - Sorts by score descending; input list is not modified.
  - tie_key orders equal scores; input order breaks remaining ties.
  - limit: None → all, <= 0 → empty, otherwise first N.
recommendations_to_rows():
  - 1-based rank plus Recommendation.to_dict() fields.
"""

from __future__ import annotations

import pytest

from planting_engine.models.recommendation import Recommendation
from planting_engine.recommendations.ranker import rank_recommendations, recommendations_to_rows


@pytest.fixture
def recs(make_crop) -> list[Recommendation]:
    return [
        Recommendation(crop=make_crop(id="a", name="A", harvest_days=60), score=5.0),
        Recommendation(crop=make_crop(id="b", name="B", harvest_days=30), score=9.0),
        Recommendation(crop=make_crop(id="c", name="C", harvest_days=20), score=5.0),
        Recommendation(crop=make_crop(id="d", name="D"), score=-1.0),
    ]


class TestRankRecommendations:
    def test_score_descending_stable(self, recs):
        assert [r.crop.id for r in rank_recommendations(recs)] == ["b", "a", "c", "d"]

    def test_input_not_modified(self, recs):
        before = list(recs)
        rank_recommendations(recs, limit=1)
        assert recs == before

    def test_tie_key(self, recs):
        ranked = rank_recommendations(recs, tie_key=lambda r: r.crop.harvest_days or 0)
        assert [r.crop.id for r in ranked] == ["b", "c", "a", "d"]

    @pytest.mark.parametrize("limit, expected", [(None, 4), (2, 2), (10, 4), (0, 0), (-3, 0)])
    def test_limit(self, recs, limit, expected):
        assert len(rank_recommendations(recs, limit=limit)) == expected

    def test_empty(self):
        assert rank_recommendations([]) == []


class TestRecommendationsToRows:
    def test_rows(self, recs):
        rows = recommendations_to_rows(rank_recommendations(recs, limit=2))
        assert [row["rank"] for row in rows] == [1, 2]
        assert rows[0] == {"rank": 1, "crop_id": "b", "crop_name": "B", "score": 9.0, "reasons": []}

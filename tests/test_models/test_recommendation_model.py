"""Tests for planting_engine/models/recommendation.py."""

from __future__ import annotations

from planting_engine.models.recommendation import Recommendation


class TestRecommendation:
    def test_defaults_to_no_reasons(self, make_crop):
        rec = Recommendation(crop=make_crop(name="Kale"), score=3.0)
        assert rec.reasons == ()

    def test_to_dict(self, make_crop):
        crop = make_crop(id="kale-01", name="Kale", common_name="Curly Kale")
        rec = Recommendation(crop=crop, score=12.5, reasons=("Good rotation", "Plant now"))
        assert rec.to_dict() == {
            "crop_id": "kale-01",
            "crop_name": "Curly Kale",
            "score": 12.5,
            "reasons": ["Good rotation", "Plant now"],
        }

    def test_keeps_crop_unchanged(self, make_crop):
        crop = make_crop(name="Kale", harvest_days=50)
        rec = Recommendation(crop=crop, score=1.0)
        assert rec.crop == crop

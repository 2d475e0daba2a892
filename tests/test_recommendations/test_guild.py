"""
Tests for planting_engine/recommendations/guild.py.

What we test
------------
  - Each open slot gets the top-ranked in-tune crop labelled for it.
  - Strict mode leaves a slot open when only cross-zone crops are labelled for it;
    jazz mode fills it with a cross-zone Enhancer but never a Builder.
  - A star out of tune with the bed is rejected.
  - is_complete tracks the 3rd, 5th and 7th slots only.
  - Diversity and shading summarise star + picks.
  - to_dict() gives the JSON shape used by the CLI.
"""

from __future__ import annotations

import pytest

from planting_engine.recommendations.growth_layers import (
    guild_shading_warnings,
    vertical_diversity_score,
)
from planting_engine.recommendations.guild import AUTO_FILL_INTERVALS, compose_guild
from planting_engine.taxonomy.zone_taxonomy import ChordInterval


@pytest.fixture
def star(make_crop):
    return make_crop(
        name="Tomato", frequency_hz=396, chord_interval="Root (Lead)",
        growth_habit="vine", companion_crops=("Basil",),
    )


@pytest.fixture
def guild_catalog(make_crop, star):
    return [
        star,
        make_crop(name="Marigold", frequency_hz=396, chord_interval="3rd (Triad)", growth_habit="herb"),
        make_crop(name="Basil", frequency_hz=396, chord_interval="3rd (Triad)", growth_habit="herb"),
        make_crop(name="Bush Bean", frequency_hz=396, chord_interval="5th (Stabilizer)", growth_habit="bush"),
        make_crop(
            name="Radish", frequency_hz=396, chord_interval="7th (Signal)",
            guild_role="Enhancer", growth_habit="root",
        ),
        make_crop(
            name="Pole Bean", frequency_hz=528, chord_interval="13th (Top Note)",
            guild_role="Enhancer", growth_habit="vine",
        ),
    ]


class TestComposeGuild:
    def test_fills_each_slot_in_order(self, star, guild_catalog):
        comp = compose_guild(star, guild_catalog, bed_frequency_hz=396)
        assert list(comp.picks) == list(AUTO_FILL_INTERVALS)
        assert comp.picks[ChordInterval.THIRD].crop.id == "basil"
        assert comp.picks[ChordInterval.FIFTH].crop.id == "bush-bean"
        assert comp.picks[ChordInterval.SEVENTH].crop.id == "radish"

    def test_strict_leaves_cross_zone_slot_open(self, star, guild_catalog):
        comp = compose_guild(star, guild_catalog, bed_frequency_hz=396)
        assert comp.picks[ChordInterval.THIRTEENTH] is None
        assert comp.is_complete

    def test_jazz_fills_with_cross_zone_enhancer(self, star, guild_catalog):
        comp = compose_guild(star, guild_catalog, bed_frequency_hz=396, jazz_mode=True)
        assert comp.picks[ChordInterval.THIRTEENTH].crop.id == "pole-bean"
        assert "Jazz voicing" in comp.picks[ChordInterval.THIRTEENTH].reasons

    def test_jazz_does_not_admit_cross_zone_builder(self, make_crop, star):
        clover = make_crop(
            name="Clover", frequency_hz=528, chord_interval="5th (Stabilizer)", guild_role="Builder",
        )
        comp = compose_guild(star, [clover], bed_frequency_hz=396, jazz_mode=True)
        assert comp.picks[ChordInterval.FIFTH] is None
        assert not comp.is_complete

    def test_star_out_of_tune_rejected(self, star, guild_catalog):
        with pytest.raises(ValueError, match="Dissonance"):
            compose_guild(star, guild_catalog, bed_frequency_hz=528, jazz_mode=True)

    def test_empty_catalog(self, star):
        comp = compose_guild(star, [], bed_frequency_hz=396)
        assert all(rec is None for rec in comp.picks.values())
        assert comp.crops == [star]
        assert not comp.is_complete
        assert comp.diversity_score == 2.0
        assert comp.shading_warnings == []

    def test_summary_covers_star_and_picks(self, make_crop):
        apple = make_crop(
            name="Apple", frequency_hz=963, chord_interval="Root (Lead)", growth_habit="tree",
        )
        mint = make_crop(name="Mint", frequency_hz=963, chord_interval="3rd (Triad)", growth_habit="herb")
        comp = compose_guild(apple, [apple, mint], bed_frequency_hz=963)
        assert comp.crops == [apple, mint]
        assert comp.diversity_score == vertical_diversity_score([apple, mint])
        assert comp.shading_warnings == guild_shading_warnings([apple, mint])
        assert comp.shading_warnings

    def test_to_dict(self, star, guild_catalog):
        data = compose_guild(star, guild_catalog, bed_frequency_hz=396).to_dict()
        assert data["zone"] == "Foundation"
        assert data["star"]["crop_id"] == "tomato"
        assert data["slots"]["3rd (Triad)"]["crop_id"] == "basil"
        assert data["slots"]["13th (Top Note)"] is None
        assert data["is_complete"] is True

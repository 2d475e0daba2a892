"""
Tests for planting_engine/recommendations/zone_compliance.py.

What we test
------------
check_dissonance():
  - A crop is never dissonant in a bed tuned to its own frequency (any slot, either mode).
  - Strict mode: any frequency mismatch is dissonant with conflict_type "Vibrational".
  - Jazz mode: only Enhancers are waived, and never in the Root slot.
  - Missing guild_role counts as non-Enhancer.
  - Slot intervals may be passed as plain strings.
is_structural_interval():
  - Only the Root slot is structural.
"""

from __future__ import annotations

import pytest

from planting_engine.recommendations.zone_compliance import (
    check_dissonance,
    is_structural_interval,
)
from planting_engine.taxonomy.zone_taxonomy import VALID_FREQUENCIES_HZ, ChordInterval, GuildRole


class TestInTune:
    @pytest.mark.parametrize("interval", list(ChordInterval))
    @pytest.mark.parametrize("jazz", [False, True])
    def test_own_frequency_never_dissonant(self, make_crop, interval, jazz):
        for hz in sorted(VALID_FREQUENCIES_HZ):
            crop = make_crop(name="Kale", frequency_hz=hz, guild_role="Lead")
            result = check_dissonance(crop, crop.frequency_hz, interval, jazz_mode=jazz)
            assert result.is_dissonant is False
            assert result.conflict_type is None

    def test_unknown_frequency_matches_itself(self, make_crop):
        crop = make_crop(name="Oddity", frequency_hz=400)
        assert not check_dissonance(crop, 400, ChordInterval.THIRD).is_dissonant


class TestStrictMode:
    @pytest.mark.parametrize("role", [r.value for r in GuildRole] + [None])
    @pytest.mark.parametrize("interval", list(ChordInterval))
    def test_mismatch_always_dissonant(self, make_crop, role, interval):
        crop = make_crop(name="Kale", frequency_hz=396, guild_role=role)
        result = check_dissonance(crop, 528, interval)
        assert result.is_dissonant is True
        assert result.conflict_type == "Vibrational"
        assert "out of tune" in result.message


class TestJazzMode:
    def test_enhancer_waived_in_non_structural_slot(self, make_crop):
        crop = make_crop(name="Basil", frequency_hz=396, guild_role="Enhancer")
        result = check_dissonance(crop, 528, ChordInterval.SEVENTH, jazz_mode=True)
        assert result.is_dissonant is False
        assert result.conflict_type is None
        assert result.message.startswith("Jazz mode")

    def test_lead_still_dissonant_in_same_slot(self, make_crop):
        crop = make_crop(name="Tomato", frequency_hz=396, guild_role="Lead")
        result = check_dissonance(crop, 528, ChordInterval.SEVENTH, jazz_mode=True)
        assert result.is_dissonant is True
        assert result.conflict_type == "Vibrational"

    @pytest.mark.parametrize("role", ["Builder", "Sentinel", "Miner", "enhancer", "", None])
    def test_other_roles_not_waived(self, make_crop, role):
        crop = make_crop(name="Kale", frequency_hz=396, guild_role=role)
        assert check_dissonance(crop, 528, ChordInterval.THIRD, jazz_mode=True).is_dissonant

    def test_root_slot_rejects_enhancer(self, make_crop):
        crop = make_crop(name="Basil", frequency_hz=396, guild_role="Enhancer")
        result = check_dissonance(crop, 528, ChordInterval.ROOT, jazz_mode=True)
        assert result.is_dissonant is True
        assert result.conflict_type == "Vibrational"

    def test_string_interval_accepted(self, make_crop):
        crop = make_crop(name="Basil", frequency_hz=396, guild_role="Enhancer")
        assert not check_dissonance(crop, 528, "7th (Signal)", jazz_mode=True).is_dissonant
        assert check_dissonance(crop, 528, "Root (Lead)", jazz_mode=True).is_dissonant


class TestStructuralInterval:
    def test_only_root_is_structural(self):
        assert is_structural_interval(ChordInterval.ROOT)
        assert is_structural_interval("Root (Lead)")
        for interval in ChordInterval:
            if interval is not ChordInterval.ROOT:
                assert not is_structural_interval(interval)

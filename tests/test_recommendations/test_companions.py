"""
Tests for planting_engine/recommendations/companions.py.

What we test
------------
is_antagonist():          symmetric substring matching on display names.
is_explicit_companion():  either direction, substring and first-word matching.
season_overlap_score():   shared seasons capped at 3; unknown → 1.
habit_complement_score(): complementary 2 (by keyword), different 1, same or unknown 0.
companion_score():        antagonist short-circuits to -15 per neighbour.
synergy_notes():          skips self, reports antagonists before companions.
"""

from __future__ import annotations

import pytest

from planting_engine.recommendations.companions import (
    companion_score,
    habit_complement_score,
    is_antagonist,
    is_explicit_companion,
    season_overlap_score,
    synergy_notes,
)


class TestIsAntagonist:
    @pytest.mark.parametrize(
        "a, b",
        [
            ("Onion", "Bush Bean"),
            ("Garlic", "Pea"),
            ("Tomato", "Potato"),
            ("Cherry Tomato", "Fennel"),
            ("Mint", "Parsley"),
        ],
    )
    def test_known_pairs_symmetric(self, make_crop, a, b):
        ca, cb = make_crop(name=a), make_crop(name=b)
        assert is_antagonist(ca, cb)
        assert is_antagonist(cb, ca)

    def test_friendly_pair(self, make_crop):
        assert not is_antagonist(make_crop(name="Tomato"), make_crop(name="Basil"))

    def test_uses_common_name(self, make_crop):
        allium = make_crop(id="a1", name="Allium sativum", common_name="Garlic")
        legume = make_crop(id="p1", name="Pisum sativum", common_name="Snap Pea")
        assert is_antagonist(allium, legume)

    def test_case_insensitive(self, make_crop):
        assert is_antagonist(make_crop(name="ONION"), make_crop(name="bean"))


class TestIsExplicitCompanion:
    def test_listed_on_either_side(self, make_crop):
        tomato = make_crop(name="Tomato", companion_crops=("Basil",))
        basil = make_crop(name="Sweet Basil")
        assert is_explicit_companion(tomato, basil)
        assert is_explicit_companion(basil, tomato)

    def test_first_word_match(self, make_crop):
        corn = make_crop(name="Corn", companion_crops=("beans",))
        bean = make_crop(name="Bean")
        assert is_explicit_companion(corn, bean)

    def test_no_lists(self, make_crop):
        assert not is_explicit_companion(make_crop(name="Tomato"), make_crop(name="Basil"))

    def test_unrelated_list(self, make_crop):
        tomato = make_crop(name="Tomato", companion_crops=("Marigold",))
        assert not is_explicit_companion(tomato, make_crop(name="Basil"))


class TestSeasonOverlap:
    def test_shared_seasons_counted(self, make_crop):
        a = make_crop(name="A", planting_season=("Spring", "Summer"))
        b = make_crop(name="B", planting_season=("spring", "Fall"))
        assert season_overlap_score(a, b) == 1.0

    def test_capped_at_three(self, make_crop):
        seasons = ("Spring", "Summer", "Fall", "Winter")
        a = make_crop(name="A", planting_season=seasons)
        b = make_crop(name="B", planting_season=seasons)
        assert season_overlap_score(a, b) == 3.0

    def test_unknown_is_one(self, make_crop):
        assert season_overlap_score(make_crop(name="A"), make_crop(name="B", planting_season=("Fall",))) == 1.0

    def test_disjoint_is_zero(self, make_crop):
        a = make_crop(name="A", planting_season=("Spring",))
        b = make_crop(name="B", planting_season=("Fall",))
        assert season_overlap_score(a, b) == 0.0


class TestHabitComplement:
    @pytest.mark.parametrize(
        "habit_a, habit_b, expected",
        [
            ("vine", "herb", 2.0),
            ("herb", "vine", 2.0),
            ("tree", "ground cover", 2.0),
            ("tree", "herb", 1.0),
            ("climbing vine", "herb", 2.0),
            ("dwarf tree", "low ground cover", 2.0),
            ("herb", "herb", 0.0),
            ("Herb", "herb ", 0.0),
            (None, "herb", 0.0),
        ],
    )
    def test_scores(self, make_crop, habit_a, habit_b, expected):
        a = make_crop(name="A", growth_habit=habit_a)
        b = make_crop(name="B", growth_habit=habit_b)
        assert habit_complement_score(a, b) == expected


class TestCompanionScore:
    def test_antagonist_penalty_only(self, make_crop):
        onion = make_crop(name="Onion", growth_habit="bulb", companion_crops=("Bean",))
        bean = make_crop(name="Bush Bean", growth_habit="bush")
        assert companion_score(onion, [bean]) == -15.0

    def test_companion_with_season_and_habit(self, make_crop):
        basil = make_crop(name="Basil", growth_habit="herb", planting_season=("Spring",))
        tomato = make_crop(
            name="Tomato", growth_habit="vine", planting_season=("Spring",),
            companion_crops=("Basil",),
        )
        # 5 companion + 1 shared season + 2 vine/herb
        assert companion_score(basil, [tomato]) == 8.0

    def test_skips_self_and_empty(self, make_crop):
        basil = make_crop(name="Basil")
        assert companion_score(basil, []) == 0.0
        assert companion_score(basil, [basil]) == 0.0

    def test_sums_over_neighbours(self, make_crop):
        kale = make_crop(name="Kale")
        placed = [make_crop(name="Chard"), make_crop(name="Beet")]
        # unknown seasons → 1 each; same/unknown habit → 0
        assert companion_score(kale, placed) == 2.0


class TestSynergyNotes:
    def test_notes(self, make_crop):
        tomato = make_crop(name="Tomato", companion_crops=("Basil",))
        notes = synergy_notes(
            tomato,
            [tomato, make_crop(name="Basil"), make_crop(name="Potato"), make_crop(name="Lettuce")],
        )
        assert [n.message for n in notes] == ["Companion of Basil", "Avoid planting near Potato"]
        assert [n.kind for n in notes] == ["companion", "antagonist"]
        assert notes[1].other_id == "potato"

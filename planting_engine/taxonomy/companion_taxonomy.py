"""
Companion and antagonist reference tables.

``ANTAGONIST_RULES`` lists keyword groups of crops that should not share a bed.
A crop matches a group when its lower-cased display name *contains* one of the
group's keywords, so ``"Cherry Tomato"`` matches ``"tomato"``. Rules are
symmetric: a crop in ``group_a`` conflicts with a crop in ``group_b`` and
vice versa.

``COMPLEMENTARY_HABITS`` lists growth-habit pairs that stack well vertically.

This module has NO imports from any other ``planting_engine`` package.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AntagonistRule:
    """Two keyword groups whose members inhibit each other when planted adjacently."""

    group_a: tuple[str, ...]
    group_b: tuple[str, ...]


ANTAGONIST_RULES: tuple[AntagonistRule, ...] = (
    # Alliums vs legumes
    AntagonistRule(("onion", "garlic", "shallot", "leek", "chive", "scallion"),
                   ("bean", "pea", "lentil", "chickpea", "lima")),
    AntagonistRule(("tomato",), ("potato",)),
    AntagonistRule(("tomato",), ("corn",)),
    AntagonistRule(("tomato",), ("fennel",)),
    AntagonistRule(("cabbage", "broccoli", "kale", "cauliflower", "brussels"),
                   ("tomato", "pepper", "strawberry")),
    AntagonistRule(("fennel",), ("bean", "pepper", "eggplant", "carrot")),
    # Juglone
    AntagonistRule(("walnut", "black walnut"),
                   ("tomato", "pepper", "eggplant", "potato", "blueberry")),
    AntagonistRule(("dill", "coriander", "cilantro", "parsnip"), ("carrot",)),
    AntagonistRule(("sage",), ("cucumber",)),
    AntagonistRule(("mint",), ("parsley",)),
    AntagonistRule(("sunflower",), ("potato",)),
    AntagonistRule(("potato",), ("squash", "cucumber", "zucchini", "pumpkin")),
    AntagonistRule(("bean",), ("pepper",)),
    AntagonistRule(("corn",), ("celery",)),
    AntagonistRule(("onion",), ("asparagus",)),
    AntagonistRule(("pepper",), ("fennel",)),
    AntagonistRule(("pepper",), ("kohlrabi",)),
    AntagonistRule(("squash", "zucchini", "pumpkin"), ("potato",)),
    AntagonistRule(("cucumber",), ("potato",)),
    AntagonistRule(("cucumber", "squash", "zucchini"), ("melon",)),
    AntagonistRule(("eggplant",), ("fennel",)),
    AntagonistRule(("eggplant",), ("pepper",)),
    AntagonistRule(("celery",), ("parsnip", "parsley")),
)

COMPLEMENTARY_HABITS: tuple[tuple[str, str], ...] = (
    ("tree", "ground cover"),
    ("vine", "herb"),
    ("shrub", "ground cover"),
    ("upright", "spreading"),
    ("vine", "upright"),
)

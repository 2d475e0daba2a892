"""
Growth-habit → vertical layer taxonomy.

``LayerTier`` lists the 6 vertical strata used for polyculture design.
``GROWTH_LAYER_MAP`` maps a normalized (lower-cased) catalog ``growth_habit``
string to its tier, a representative mature height in feet, and a display icon.

Integrity contract:
  - ``DEFAULT_HABIT`` is a key of ``GROWTH_LAYER_MAP``.
  - Every ``LayerTier`` is reachable from at least one habit.
  - All keys are lower-case.

This module has NO imports from any other ``planting_engine`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class LayerTier(StrEnum):
    """Vertical layer tier, tallest first (``vine`` climbs whatever it is given)."""

    CANOPY      = "canopy"
    UNDERSTORY  = "understory"
    HERBACEOUS  = "herbaceous"
    GROUND      = "ground"
    UNDERGROUND = "underground"
    VINE        = "vine"


@dataclass(frozen=True)
class LayerInfo:
    """Classification of one growth habit.

    Attributes:
        layer:     Vertical tier.
        height_ft: Representative mature height in feet.
        icon:      Display glyph for renderers.
    """

    layer:     LayerTier
    height_ft: float
    icon:      str


GROWTH_LAYER_MAP: Mapping[str, LayerInfo] = MappingProxyType({
    "tree":         LayerInfo(LayerTier.CANOPY,      25.0, "🌳"),
    "shrub":        LayerInfo(LayerTier.UNDERSTORY,   6.0, "🫐"),
    "bush":         LayerInfo(LayerTier.UNDERSTORY,   5.0, "🌿"),
    "vine":         LayerInfo(LayerTier.VINE,        12.0, "🧗"),
    "epiphyte":     LayerInfo(LayerTier.VINE,         8.0, "🌺"),
    "herb":         LayerInfo(LayerTier.HERBACEOUS,   2.0, "🌱"),
    "grass":        LayerInfo(LayerTier.HERBACEOUS,   3.0, "🌾"),
    "succulent":    LayerInfo(LayerTier.HERBACEOUS,   1.0, "🪴"),
    "ground cover": LayerInfo(LayerTier.GROUND,       0.5, "🍀"),
    "fungus":       LayerInfo(LayerTier.GROUND,       0.3, "🍄"),
    "aquatic":      LayerInfo(LayerTier.GROUND,       0.5, "💧"),
    "root":         LayerInfo(LayerTier.UNDERGROUND,  0.5, "🥕"),
    "tuber":        LayerInfo(LayerTier.UNDERGROUND,  0.5, "🥔"),
    "bulb":         LayerInfo(LayerTier.UNDERGROUND,  1.0, "🧄"),
    "rhizome":      LayerInfo(LayerTier.UNDERGROUND,  1.0, "🫚"),
    "underground":  LayerInfo(LayerTier.UNDERGROUND,  0.5, "⬇️"),
})

DEFAULT_HABIT = "herb"

# Layers that tolerate shade from taller neighbours.
SHADE_TOLERANT_LAYERS: frozenset[LayerTier] = frozenset({
    LayerTier.GROUND,
    LayerTier.UNDERGROUND,
})

# Height differences (feet) that trigger shading notes.
SHADING_INFO_FT    = 4.0
SHADING_WARNING_FT = 10.0

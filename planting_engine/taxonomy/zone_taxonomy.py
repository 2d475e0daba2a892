"""
Zone and slot-role taxonomy for guild composition.

Four dimensions describe where a crop belongs:
  - ``HARMONIC_ZONES`` — the *where*: which of the 7 frequency zones a bed is tuned to.
  - ``ChordInterval``  — the *what*:  which ecological role a slot in the bed plays.
  - ``GuildRole``      — the *how*:   a crop's own role label from the catalog.
  - ``CropCategory``   — the *why*:   the crop's primary use (food, N-fixer, ...).

``Season`` buckets are used by succession planting to match a harvest month to
catalog ``planting_season`` strings.

The zone table is the single source of truth for frequency → zone metadata.
Its integrity contract:
  - Exactly 7 zones, numbered 1..7.
  - Frequencies are unique and strictly increasing.
  - Notes run C through B.

Run ``tests/test_taxonomy/test_zone_taxonomy.py`` to verify this contract.

This module has NO imports from any other ``planting_engine`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class HarmonicZone:
    """One of the 7 frequency zones that partition the crop catalog.

    Attributes:
        zone:            1-based zone number.
        note:            Musical note, C through B.
        frequency_hz:    Canonical zone frequency.
        identity:        Zone identity label shown in the UI.
        color_hex:       Display colour.
        dominant_mineral: Primary mineral focus for the bed's soil mix.
        mineral_symbol:  Chemical symbol of ``dominant_mineral``.
        element:         Classical element correspondence.
    """

    zone:             int
    note:             str
    frequency_hz:     int
    identity:         str
    color_hex:        str
    dominant_mineral: str
    mineral_symbol:   str
    element:          str


HARMONIC_ZONES: tuple[HarmonicZone, ...] = (
    HarmonicZone(1, "C", 396, "Foundation", "#FF0000", "Phosphorus",      "P",   "Earth"),
    HarmonicZone(2, "D", 417, "Flow",       "#FF7F00", "Hydrogen/Carbon", "H/C", "Water"),
    HarmonicZone(3, "E", 528, "Alchemy",    "#FFFF00", "Nitrogen",        "N",   "Fire"),
    HarmonicZone(4, "F", 639, "Heart",      "#00FF00", "Calcium",         "Ca",  "Air"),
    HarmonicZone(5, "G", 741, "Signal",     "#0000FF", "Potassium",       "K",   "Ether"),
    HarmonicZone(6, "A", 852, "Vision",     "#4B0082", "Silica",          "Si",  "Light"),
    HarmonicZone(7, "B", 963, "Source",     "#8B00FF", "Sulfur",          "S",   "Spirit"),
)

_ZONES_BY_HZ: Mapping[int, HarmonicZone] = MappingProxyType(
    {z.frequency_hz: z for z in HARMONIC_ZONES}
)

VALID_FREQUENCIES_HZ: frozenset[int] = frozenset(_ZONES_BY_HZ)


def get_zone(frequency_hz: int) -> Optional[HarmonicZone]:
    """Return the zone for ``frequency_hz``, or ``None`` for an unknown frequency."""
    return _ZONES_BY_HZ.get(frequency_hz)


class ChordInterval(StrEnum):
    """Slot role within a bed's 7-interval guild.

    Values match the ``chord_interval`` strings stored in the crop catalog.
    """

    ROOT = "Root (Lead)"
    """Main harvest crop; the guild's star."""

    THIRD = "3rd (Triad)"
    """Pest defense support planted close to the star."""

    FIFTH = "5th (Stabilizer)"
    """Deep mineral puller / nitrogen support."""

    SEVENTH = "7th (Signal)"
    """Pollinator and aromatic signal plants; fast-turnover filler."""

    NINTH = "9th (Sub-bass)"
    """Root and tuber layer."""

    ELEVENTH = "11th (Tension)"
    """Fungal / sentinel layer (alliums, inoculants)."""

    THIRTEENTH = "13th (Top Note)"
    """Aerial layer: climbers and trailing vines."""


STRUCTURAL_INTERVALS: frozenset[ChordInterval] = frozenset({ChordInterval.ROOT})
"""Slots that never accept a cross-zone crop, jazz mode or not."""


class GuildRole(StrEnum):
    """Catalog ``guild_role`` labels."""

    LEAD     = "Lead"
    ENHANCER = "Enhancer"
    BUILDER  = "Builder"
    SENTINEL = "Sentinel"
    MINER    = "Miner"


class CropCategory(StrEnum):
    """Catalog ``category`` labels."""

    SUSTENANCE = "Sustenance"
    """Food crops; heavy feeders in succession logic."""

    SENTINEL_MINER = "Sentinel/Miner"
    """Pest defense and mineral accumulators."""

    NITROGEN_BIOMASS = "Nitrogen/Bio-Mass"
    """Nitrogen fixers and cover crops."""

    DYE_FIBER_AROMATIC = "Dye/Fiber/Aromatic"
    """Pollinator, dye and fiber plants."""


class Season(StrEnum):
    """Planting season bucket derived from a calendar month."""

    SPRING = "spring"
    SUMMER = "summer"
    FALL   = "fall"
    WINTER = "winter"


# Keywords that a free-text planting_season entry may use for each bucket.
SEASON_KEYWORDS: Mapping[Season, tuple[str, ...]] = MappingProxyType({
    Season.SPRING: ("spring",),
    Season.SUMMER: ("summer",),
    Season.FALL:   ("fall", "autumn"),
    Season.WINTER: ("winter",),
})


# Multiplier on the sprinter bonus: how well each slot suits fast turnover.
SPRINTER_SLOT_WEIGHT: Mapping[ChordInterval, float] = MappingProxyType({
    ChordInterval.ROOT:       0.5,
    ChordInterval.THIRD:      1.0,
    ChordInterval.FIFTH:      1.0,
    ChordInterval.SEVENTH:    2.0,
    ChordInterval.NINTH:      0.5,
    ChordInterval.ELEVENTH:   0.5,
    ChordInterval.THIRTEENTH: 1.0,
})

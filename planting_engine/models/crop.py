"""
Crop catalog and slot models.

``Crop`` mirrors one row of the crop catalog. Field names match the catalog's
column names so exported rows can be passed straight to ``Crop.model_validate``;
columns the engine does not read (``zone_name``, ``spacing_inches``, ...) are
ignored.

``chord_interval`` and ``guild_role`` stay plain strings at this boundary. The
engine compares them against ``ChordInterval`` / ``GuildRole`` values, so an
unrecognised label is simply non-matching rather than a load failure. The same
applies to ``frequency_hz``: an unknown frequency is accepted and never matches
a bed.

``Slot`` describes the position being filled. Unlike ``Crop`` it is built by
the caller, so its ``chord_interval`` is validated against ``ChordInterval``.

Both models are frozen; the engine never mutates catalog records.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from planting_engine.taxonomy.zone_taxonomy import ChordInterval

BRIX_SCALE_MAX = 24.0


class Crop(BaseModel):
    """A catalog entry describing one species or variety.

    Attributes:
        id: Opaque catalog key; identity for self-exclusion.
        name: Catalog name.
        common_name: Common name used for companion / antagonist matching;
            falls back to ``name`` when absent.
        scientific_name: Binomial name; its first token (genus) drives the
            rotation heuristic.
        frequency_hz: Zone frequency the crop is tuned to.
        chord_interval: Slot role label, e.g. ``"Root (Lead)"``.
        guild_role: Role label, e.g. ``"Lead"`` or ``"Enhancer"``.
        category: Primary use, e.g. ``"Sustenance"``; ``None`` when unlabelled.
        growth_habit: Habit string mapped to a layer tier (default ``herb``).
        harvest_days: Days from planting to harvest.
        brix_target_min: Lower nutrient-density target (0–24 °Bx).
        brix_target_max: Upper nutrient-density target (0–24 °Bx).
        companion_crops: Common names of known companions.
        planting_season: Free-text planting windows, e.g. ``("Spring", "Fall")``.
        hardiness_zone_min: Coldest USDA zone (8.5 = 8b).
        hardiness_zone_max: Warmest USDA zone.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    common_name: Optional[str] = None
    scientific_name: Optional[str] = None
    frequency_hz: int
    chord_interval: Optional[str] = None
    guild_role: Optional[str] = None
    category: Optional[str] = None
    growth_habit: Optional[str] = None
    harvest_days: Optional[int] = None
    brix_target_min: Optional[float] = None
    brix_target_max: Optional[float] = None
    companion_crops: Optional[tuple[str, ...]] = None
    planting_season: Optional[tuple[str, ...]] = None
    hardiness_zone_min: Optional[float] = None
    hardiness_zone_max: Optional[float] = None

    @property
    def display_name(self) -> str:
        """Common name when known, otherwise the catalog name."""
        return self.common_name or self.name

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Crop id must not be empty.")
        return v

    @field_validator("harvest_days")
    @classmethod
    def validate_harvest_days(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"harvest_days must be a positive integer, got {v}.")
        return v

    @field_validator("brix_target_min", "brix_target_max")
    @classmethod
    def validate_brix_scale(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= BRIX_SCALE_MAX:
            raise ValueError(
                f"Brix target must be in [0, {BRIX_SCALE_MAX:g}], got {v}."
            )
        return v

    @model_validator(mode="after")
    def validate_hardiness_order(self) -> "Crop":
        lo, hi = self.hardiness_zone_min, self.hardiness_zone_max
        if lo is not None and hi is not None and lo > hi:
            raise ValueError(
                f"hardiness_zone_min ({lo}) must not exceed hardiness_zone_max ({hi})."
            )
        return self


class Slot(BaseModel):
    """A planting position being evaluated.

    Accepts both snake_case and the catalog UI's camelCase field names
    (``bedFrequencyHz``, ``chordInterval``, ``jazzMode``).

    Attributes:
        bed_frequency_hz: Frequency the bed is tuned to.
        chord_interval: Role being filled.
        jazz_mode: Relaxed cross-zone rule for non-structural roles.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bed_frequency_hz: int = Field(alias="bedFrequencyHz")
    chord_interval: ChordInterval = Field(alias="chordInterval")
    jazz_mode: bool = Field(default=False, alias="jazzMode")

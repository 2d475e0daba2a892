"""
Shared pytest fixtures for the planting engine test suite.

Provides:
  - ``make_crop``: factory for ``Crop`` records with sensible defaults, so each
    test only spells out the fields it cares about.
  - ``sample_catalog``: a small mixed catalog covering every zone-compliance
    and succession path used across test modules.
  - ``catalog_json``: the sample catalog written to a temporary JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from planting_engine.models.crop import Crop


def build_crop(**overrides: Any) -> Crop:
    """Build a ``Crop``; ``id`` defaults to a slug of ``name``."""
    fields: dict[str, Any] = {
        "name": "Test Crop",
        "frequency_hz": 528,
        "category": "Sustenance",
    }
    fields.update(overrides)
    fields.setdefault("id", fields["name"].lower().replace(" ", "-"))
    return Crop(**fields)


@pytest.fixture
def make_crop() -> Callable[..., Crop]:
    """Return the ``build_crop`` factory."""
    return build_crop


@pytest.fixture
def sample_catalog() -> list[Crop]:
    """A small catalog spanning several zones, layers and categories."""
    return [
        build_crop(
            id="tomato", name="Tomato", scientific_name="Solanum lycopersicum",
            frequency_hz=396, chord_interval="Root (Lead)", guild_role="Lead",
            growth_habit="vine", harvest_days=75,
            companion_crops=("Basil",), planting_season=("Spring", "Summer"),
            hardiness_zone_min=3, hardiness_zone_max=11,
        ),
        build_crop(
            id="basil", name="Basil", scientific_name="Ocimum basilicum",
            frequency_hz=396, chord_interval="3rd (Triad)", guild_role="Enhancer",
            category="Dye/Fiber/Aromatic", growth_habit="herb", harvest_days=30,
            planting_season=("Spring", "Summer"),
        ),
        build_crop(
            id="bean", name="Bush Bean", scientific_name="Phaseolus vulgaris",
            frequency_hz=528, chord_interval="5th (Stabilizer)", guild_role="Builder",
            category="Nitrogen/Bio-Mass", growth_habit="bush", harvest_days=55,
            planting_season=("Spring",), hardiness_zone_min=3, hardiness_zone_max=10,
        ),
        build_crop(
            id="onion", name="Onion", scientific_name="Allium cepa",
            frequency_hz=741, chord_interval="11th (Tension)", guild_role="Sentinel",
            category="Sentinel/Miner", growth_habit="bulb", harvest_days=100,
            planting_season=("Spring",),
        ),
        build_crop(
            id="radish", name="Radish", scientific_name="Raphanus sativus",
            frequency_hz=528, chord_interval="7th (Signal)", guild_role="Enhancer",
            growth_habit="root", harvest_days=25, planting_season=("Spring", "Fall"),
        ),
        build_crop(
            id="apple", name="Apple", scientific_name="Malus domestica",
            frequency_hz=963, chord_interval="Root (Lead)", guild_role="Lead",
            growth_habit="tree", brix_target_min=14, brix_target_max=24,
        ),
    ]


@pytest.fixture
def catalog_json(tmp_path: Path, sample_catalog: list[Crop]) -> Path:
    """Write ``sample_catalog`` to a JSON file and return its path."""
    path = tmp_path / "catalog.json"
    rows = [c.model_dump(mode="json", exclude_none=True) for c in sample_catalog]
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path

"""
Crop catalog loader.

Two formats are accepted, chosen by file extension:

``.json`` — an array of crop objects using the catalog column names, e.g.::

    [{"id": "tomato-01", "name": "Tomato", "frequency_hz": 396,
      "chord_interval": "Root (Lead)", "guild_role": "Lead",
      "planting_season": ["Spring"], "companion_crops": ["Basil"]}, ...]

``.csv`` — comma delimited with a header row.
Required columns:
  id, name, frequency_hz

Optional columns (empty cell → None, i.e. the model default):
  common_name, scientific_name, chord_interval, guild_role, category,
  growth_habit, harvest_days, brix_target_min, brix_target_max,
  companion_crops, planting_season, hardiness_zone_min, hardiness_zone_max

List columns (companion_crops, planting_season) are ``;`` separated.
Unknown columns are ignored.

All rows are validated before any are returned. If **any** row fails, a single
``ValueError`` is raised listing the first 10 failures. Duplicate ids count as
failures.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from planting_engine.models.crop import Crop

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"id", "name", "frequency_hz"})
LIST_COLUMNS = frozenset({"companion_crops", "planting_season"})
LIST_SEPARATOR = ";"
_MAX_ERRORS_SHOWN = 10


def load_catalog(path: Path) -> list[Crop]:
    """Load and validate a crop catalog from JSON or CSV.

    Args:
        path: Path to a ``.json`` or ``.csv`` file (must exist).

    Returns:
        Validated ``Crop`` records in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is malformed or any row fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Crop catalog not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _read_json_rows(path)
        first_line = 1
    elif suffix == ".csv":
        rows = _read_csv_rows(path)
        first_line = 2  # 1-based, skip header row
    else:
        raise ValueError(f"Unsupported catalog format '{path.suffix}' (expected .json or .csv): {path}")

    if not rows:
        logger.warning("Crop catalog is empty: %s", path)
        return []

    crops: list[Crop] = []
    errors: list[tuple[int, str]] = []
    seen_ids: set[str] = set()

    for i, row in enumerate(rows):
        row_no = i + first_line
        try:
            crop = _row_to_crop(row)
        except (ValueError, ValidationError) as exc:
            errors.append((row_no, str(exc)))
            continue
        if crop.id in seen_ids:
            errors.append((row_no, f"duplicate crop id '{crop.id}'"))
            continue
        seen_ids.add(crop.id)
        crops.append(crop)

    if errors:
        detail = "\n".join(f"  Row {n}: {msg}" for n, msg in errors[:_MAX_ERRORS_SHOWN])
        extra = len(errors) - _MAX_ERRORS_SHOWN
        suffix_msg = f"\n  ... and {extra} more" if extra > 0 else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix_msg}"
        )

    logger.info("Loaded %d crops from %s", len(crops), path.name)
    return crops


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json_rows(path: Path) -> list[Any]:
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError(f"Catalog JSON must be an array of crop objects: {path}")
    return data


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        return [_clean_csv_row(row) for row in reader]


def _clean_csv_row(row: dict[str, Any]) -> dict[str, Any]:
    """Strip cells, drop empty ones, and split list columns."""
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None or value is None:
            continue
        key = key.strip()
        value = value.strip() if isinstance(value, str) else value
        if value == "":
            continue
        if key in LIST_COLUMNS:
            items = [part.strip() for part in value.split(LIST_SEPARATOR) if part.strip()]
            cleaned[key] = items or None
        else:
            cleaned[key] = value
    return cleaned


def _row_to_crop(row: Any) -> Crop:
    if not isinstance(row, dict):
        raise ValueError(f"expected an object, got {type(row).__name__}")
    return Crop.model_validate(row)

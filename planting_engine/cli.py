"""
Planting engine — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the crop catalog and validate inputs.
  4. Run the engine.
  5. Report result to stdout (ASCII table or ``--json``).

Install and run::

    pip install -e .
    planting-engine --help
    planting-engine validate-config
    planting-engine list-zones
    planting-engine rank-slot --bed-hz 528 --interval "7th (Signal)" --planted tomato-01
    planting-engine suggest-succession --finished tomato-01 --zone 6 --harvest-date 2026-08-15
    planting-engine compose-guild --star tomato-01 --jazz
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="planting-engine",
    help="Planting compatibility and succession recommendations for zone-tuned beds.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from planting_engine.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from planting_engine.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(catalog_path: str):
    """Load the crop catalog, printing a friendly error and exiting on failure."""
    from planting_engine.catalog.loader import load_catalog

    try:
        return load_catalog(Path(catalog_path))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _crops_by_id_or_exit(catalog, crop_ids: list[str]):
    """Resolve catalog ids to crops, exiting on the first unknown id."""
    by_id = {c.id: c for c in catalog}
    crops = []
    for crop_id in crop_ids:
        if crop_id not in by_id:
            typer.echo(f"[ERROR] Unknown crop id '{crop_id}' (not in catalog).", err=True)
            raise typer.Exit(code=1)
        crops.append(by_id[crop_id])
    return crops


def _parse_interval_or_exit(interval: str):
    """Accept a slot label (``"7th (Signal)"``) or enum name (``seventh``)."""
    from planting_engine.taxonomy.zone_taxonomy import ChordInterval

    for member in ChordInterval:
        if interval == member.value or interval.upper() == member.name:
            return member
    valid = ", ".join(f'"{m.value}"' for m in ChordInterval)
    typer.echo(f"[ERROR] Unknown interval '{interval}'. Valid: {valid}", err=True)
    raise typer.Exit(code=1)


def _parse_date_or_exit(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        typer.echo(f"[ERROR] Invalid date '{value}' (expected YYYY-MM-DD).", err=True)
        raise typer.Exit(code=1)


def _zone_label(frequency_hz: int) -> str:
    from planting_engine.taxonomy.zone_taxonomy import get_zone

    zone = get_zone(frequency_hz)
    return zone.identity if zone else "(unknown zone)"


def _echo_recommendations(recs, title: str, as_json: bool) -> None:
    from planting_engine.recommendations.ranker import recommendations_to_rows
    from planting_engine.reporting.formatters import format_recommendation_table

    if as_json:
        typer.echo(json.dumps(recommendations_to_rows(recs), indent=2))
    else:
        typer.echo(format_recommendation_table(recs, title=title))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    zone = config.engine.hardiness_zone
    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog path:     {config.catalog.catalog_path}")
    typer.echo(f"  Default limit:    {config.engine.default_limit}")
    typer.echo(f"  Hardiness zone:   {zone if zone is not None else '(not set)'}")
    typer.echo(f"  Jazz mode:        {config.engine.jazz_mode}")
    typer.echo(f"  Stagger target:   {config.engine.stagger_target_days}d")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-zones")
def list_zones() -> None:
    """Print the 7 harmonic zones and their frequencies."""
    from planting_engine.reporting.formatters import format_zone_table
    from planting_engine.taxonomy.zone_taxonomy import HARMONIC_ZONES

    typer.echo(format_zone_table(HARMONIC_ZONES))


@app.command("rank-slot")
def rank_slot(
    bed_hz: int = typer.Option(..., "--bed-hz", help="Frequency the bed is tuned to (e.g. 528)."),
    interval: str = typer.Option(
        ..., "--interval", help='Slot to fill, e.g. "7th (Signal)" or SEVENTH.'
    ),
    star: Optional[str] = typer.Option(
        None, "--star", help="Crop id of the star crop (default: the planted Root crop)."
    ),
    planted: Optional[list[str]] = typer.Option(
        None, "--planted", help="Crop id already in the bed (repeatable)."
    ),
    jazz: Optional[bool] = typer.Option(
        None, "--jazz/--strict", help="Jazz mode (default from config)."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Max results."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON rows instead of a table."),
    catalog_path: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog (.json or .csv). Defaults to config."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank catalog crops for one slot of a bed.

    Cross-zone crops are never offered for the Root slot. In jazz mode,
    Enhancers may cross zones in the other slots.
    """
    from planting_engine.models.crop import Slot
    from planting_engine.recommendations.growth_layers import guild_shading_warnings
    from planting_engine.recommendations.scorer import rank_slot_candidates
    from planting_engine.reporting.formatters import format_shading_warnings

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    slot_interval = _parse_interval_or_exit(interval)
    catalog = _load_catalog_or_exit(catalog_path or config.catalog.catalog_path)
    existing = _crops_by_id_or_exit(catalog, planted or [])
    star_crop = _crops_by_id_or_exit(catalog, [star])[0] if star else None

    slot = Slot(
        bed_frequency_hz=bed_hz,
        chord_interval=slot_interval,
        jazz_mode=config.engine.jazz_mode if jazz is None else jazz,
    )
    recs = rank_slot_candidates(
        catalog,
        slot,
        existing_plantings=existing,
        star_crop=star_crop,
        limit=limit if limit is not None else config.engine.default_limit,
    )

    mode = "jazz" if slot.jazz_mode else "strict"
    _echo_recommendations(
        recs, f"{slot.chord_interval} @ {bed_hz}Hz {_zone_label(bed_hz)} ({mode})", as_json
    )

    if not as_json and existing:
        guild = list(existing) + ([star_crop] if star_crop and star_crop not in existing else [])
        shading = format_shading_warnings(guild_shading_warnings(guild))
        if shading:
            typer.echo("")
            typer.echo(shading)


@app.command("suggest-succession")
def suggest_succession_cmd(
    finished: str = typer.Option(..., "--finished", help="Crop id that was just harvested."),
    zone: Optional[float] = typer.Option(
        None, "--zone", help="USDA hardiness zone (default from config; unset skips the filter)."
    ),
    bedmate: Optional[list[str]] = typer.Option(
        None, "--bedmate", help="Crop id still growing in the bed (repeatable)."
    ),
    harvest_date: Optional[str] = typer.Option(
        None, "--harvest-date", help="Harvest date YYYY-MM-DD (enables season scoring)."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Max results."),
    in_season: bool = typer.Option(
        False, "--in-season", help="Only crops plantable this month or next."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON rows instead of a table."),
    catalog_path: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog (.json or .csv). Defaults to config."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Suggest follow-up crops for a bed after a harvest."""
    from planting_engine.recommendations.succession import suggest_succession
    from planting_engine.utils.time_utils import season_for_date

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    parsed_date = _parse_date_or_exit(harvest_date)
    catalog = _load_catalog_or_exit(catalog_path or config.catalog.catalog_path)
    finished_crop = _crops_by_id_or_exit(catalog, [finished])[0]
    bedmates = _crops_by_id_or_exit(catalog, bedmate or [])

    recs = suggest_succession(
        finished_crop,
        catalog,
        hardiness_zone=zone if zone is not None else config.engine.hardiness_zone,
        bedmates=bedmates,
        harvest_date=parsed_date,
        limit=limit if limit is not None else config.engine.default_limit,
        require_in_season=in_season,
        stagger_target_days=config.engine.stagger_target_days,
    )

    title = f"After {finished_crop.display_name}"
    if parsed_date is not None:
        title += f" ({season_for_date(parsed_date)} harvest)"
    _echo_recommendations(recs, title, as_json)


@app.command("compose-guild")
def compose_guild_cmd(
    star: str = typer.Option(..., "--star", help="Crop id of the Root (star) crop."),
    bed_hz: Optional[int] = typer.Option(
        None, "--bed-hz", help="Frequency the bed is tuned to (default: the star's)."
    ),
    jazz: Optional[bool] = typer.Option(
        None, "--jazz/--strict", help="Jazz mode (default from config)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
    catalog_path: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog (.json or .csv). Defaults to config."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Fill the 3rd, 5th, 7th and 13th slots around a star crop."""
    from planting_engine.recommendations.guild import compose_guild
    from planting_engine.reporting.formatters import format_guild

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_catalog_or_exit(catalog_path or config.catalog.catalog_path)
    star_crop = _crops_by_id_or_exit(catalog, [star])[0]

    try:
        composition = compose_guild(
            star_crop,
            catalog,
            bed_frequency_hz=bed_hz if bed_hz is not None else star_crop.frequency_hz,
            jazz_mode=config.engine.jazz_mode if jazz is None else jazz,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(composition.to_dict(), indent=2))
    else:
        typer.echo(format_guild(composition))


if __name__ == "__main__":
    app()

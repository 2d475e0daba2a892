"""
ASCII terminal formatters for CLI commands.

All formatters accept engine results and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Recommendation tables
---------------------
``format_recommendation_table()`` prints one row per recommendation in rank
order, followed by its reasons on an indented line::

    Rank  Crop                      Hz   Days   Score
    -------------------------------------------------
       1  Bush Bean                528     50    19.0
          Good rotation; Plant now; N-fixer after feeder
"""

from __future__ import annotations

from typing import Sequence

from planting_engine.models.recommendation import Recommendation
from planting_engine.recommendations.growth_layers import ShadingWarning
from planting_engine.recommendations.guild import GuildComposition
from planting_engine.taxonomy.zone_taxonomy import HarmonicZone

_NAME_WIDTH = 24


def _truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


# ── Zones ─────────────────────────────────────────────────────────────────────


def format_zone_table(zones: Sequence[HarmonicZone]) -> str:
    """Format the harmonic zone reference table."""
    header = f"  {'Zone':>4}  {'Note':<4}  {'Hz':>4}  {'Identity':<11}  {'Mineral':<18}  {'Element':<7}  Color"
    lines = [header, "  " + "-" * (len(header) - 2)]
    for z in zones:
        mineral = f"{z.dominant_mineral} ({z.mineral_symbol})"
        lines.append(
            f"  {z.zone:>4}  {z.note:<4}  {z.frequency_hz:>4}  {z.identity:<11}  "
            f"{mineral:<18}  {z.element:<7}  {z.color_hex}"
        )
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendation_table(recs: Sequence[Recommendation], title: str = "") -> str:
    """Format ranked recommendations as an ASCII table.

    Args:
        recs:  Recommendations, already in rank order.
        title: Optional heading printed above the table.

    Returns:
        Multi-line string; a ``(no candidates)`` line when ``recs`` is empty.
    """
    lines: list[str] = []
    if title:
        lines.append(f"  {title}")
        lines.append("")

    if not recs:
        lines.append("  (no candidates)")
        return "\n".join(lines)

    header = f"  {'Rank':>4}  {'Crop':<{_NAME_WIDTH}}  {'Hz':>4}  {'Days':>5}  {'Score':>6}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, rec in enumerate(recs, start=1):
        crop = rec.crop
        days = str(crop.harvest_days) if crop.harvest_days is not None else "-"
        name = _truncate(crop.display_name, _NAME_WIDTH)
        lines.append(
            f"  {rank:>4}  {name:<{_NAME_WIDTH}}  {crop.frequency_hz:>4}  {days:>5}  {rec.score:>6.1f}"
        )
        if rec.reasons:
            lines.append(f"        {'; '.join(rec.reasons)}")

    return "\n".join(lines)


# ── Shading ───────────────────────────────────────────────────────────────────


def format_shading_warnings(warnings: Sequence[ShadingWarning]) -> str:
    """One line per shading note, tagged ``[WARN]`` or ``[INFO]``."""
    if not warnings:
        return ""
    lines = ["  Shading:"]
    for w in warnings:
        tag = "[WARN]" if w.severity == "warning" else "[INFO]"
        lines.append(f"    {tag} {w.message}")
    return "\n".join(lines)


# ── Guild ─────────────────────────────────────────────────────────────────────


def format_guild(composition: GuildComposition) -> str:
    """Format a composed guild: one line per slot, then summary and shading."""
    zone = composition.zone
    zone_label = f"{zone.identity} ({zone.note})" if zone else "unknown zone"
    lines = [
        f"  Guild @ {composition.bed_frequency_hz}Hz {zone_label}",
        "",
        f"  {'Root (Lead)':<17}  {_truncate(composition.star_crop.display_name, _NAME_WIDTH)}",
    ]
    for interval, rec in composition.picks.items():
        if rec is None:
            lines.append(f"  {interval:<17}  (open)")
        else:
            name = _truncate(rec.crop.display_name, _NAME_WIDTH)
            lines.append(f"  {interval:<17}  {name:<{_NAME_WIDTH}}  {rec.score:>6.1f}")

    lines.append("")
    lines.append(f"  Layer diversity:  {composition.diversity_score:.1f}")
    lines.append(f"  Complete chord:   {'yes' if composition.is_complete else 'no'}")

    shading = format_shading_warnings(composition.shading_warnings)
    if shading:
        lines.append("")
        lines.append(shading)
    return "\n".join(lines)

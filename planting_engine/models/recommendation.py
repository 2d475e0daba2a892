"""
Recommendation output model.

A ``Recommendation`` couples a candidate crop with its score and the
human-readable reasons behind that score. It is built fresh on every engine
call, never persisted, and carries no framework types so any renderer can use
it. ``to_dict()`` gives the flat JSON shape used by ``--json`` CLI output.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from planting_engine.models.crop import Crop


class Recommendation(BaseModel):
    """A ranked candidate.

    Attributes:
        crop:    The candidate catalog record (by reference, unmodified).
        score:   Total score; higher is better.
        reasons: Reason strings in the order they were earned.
    """

    model_config = ConfigDict(frozen=True)

    crop: Crop
    score: float
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "crop_id":   self.crop.id,
            "crop_name": self.crop.display_name,
            "score":     self.score,
            "reasons":   list(self.reasons),
        }

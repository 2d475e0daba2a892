"""Planting compatibility and succession recommendation engine."""

__version__ = "0.1.0"

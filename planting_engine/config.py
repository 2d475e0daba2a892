"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``PLANTING_ENGINE_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

If ``config/default.toml`` is absent the built-in model defaults are used;
an explicitly passed ``config_path`` that does not exist is an error.

CLI commands receive an ``AppConfig`` instance — never raw dicts or
individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Where the crop catalog lives."""

    model_config = ConfigDict(frozen=True)

    catalog_path: str = "config/crops/sample_catalog.json"


class EngineConfig(BaseModel):
    """Recommendation engine defaults used by the CLI."""

    model_config = ConfigDict(frozen=True)

    default_limit: int = 3
    hardiness_zone: Optional[float] = None
    jazz_mode: bool = False
    stagger_target_days: int = 20

    @field_validator("default_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"default_limit must be >= 1, got {v}.")
        return v

    @field_validator("hardiness_zone")
    @classmethod
    def validate_hardiness(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 1.0 <= v <= 13.5:
            raise ValueError(f"hardiness_zone must be in [1, 13.5], got {v}.")
        return v

    @field_validator("stagger_target_days")
    @classmethod
    def validate_stagger(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"stagger_target_days must be positive, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    engine: EngineConfig = EngineConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        explicit = False
    else:
        explicit = True

    config_path = Path(config_path)
    if config_path.exists():
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply PLANTING_ENGINE_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PLANTING_ENGINE_* env vars to the raw config dict.

    Supported overrides:
      PLANTING_ENGINE_CATALOG_PATH    → raw["catalog"]["catalog_path"]
      PLANTING_ENGINE_LOG_LEVEL       → raw["logging"]["level"]
      PLANTING_ENGINE_HARDINESS_ZONE  → raw["engine"]["hardiness_zone"]
      PLANTING_ENGINE_DEBUG           → raw["debug"]
    """
    if catalog_path := os.environ.get("PLANTING_ENGINE_CATALOG_PATH"):
        raw.setdefault("catalog", {})["catalog_path"] = catalog_path

    if log_level := os.environ.get("PLANTING_ENGINE_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if zone := os.environ.get("PLANTING_ENGINE_HARDINESS_ZONE"):
        raw.setdefault("engine", {})["hardiness_zone"] = zone

    if debug := os.environ.get("PLANTING_ENGINE_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        engine=EngineConfig(**raw.get("engine", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )

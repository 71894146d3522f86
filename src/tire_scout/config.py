"""YAML configuration loader for scoring config."""

import os
from pathlib import Path
from typing import Any

import yaml

from tire_scout.models.pydantic_models import (
    NoiseRange,
    PreferenceSet,
    RoundingPolicy,
    ScoringConfig,
    default_grade_table,
)


def _get_default_config_path() -> Path:
    """Get config path from environment variable or the project default."""
    env_path = os.environ.get("TIRE_SCOUT_CONFIG")
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / "config" / "scoring.yaml"


def _load_raw_config(path: Path | None = None) -> dict[str, Any]:
    """Load raw YAML config from path.

    Args:
        path: Path to YAML config file. If None, uses TIRE_SCOUT_CONFIG
            or config/scoring.yaml.

    Returns:
        Raw config dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        ValueError: If the top level of the file is not a mapping.
    """
    if path is None:
        path = _get_default_config_path()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        raw_config: Any = yaml.safe_load(f)

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ValueError(
            f"Config file {path} must contain a mapping, got {type(raw_config).__name__}"
        )
    return raw_config


def load_scoring_config(path: Path | None = None) -> ScoringConfig:
    """Load and validate scoring configuration from YAML.

    Missing sections fall back to their defaults, so an empty file yields
    ScoringConfig().

    Args:
        path: Path to YAML config file. If None, uses the default location.

    Returns:
        Validated ScoringConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        ValidationError: If config doesn't match expected schema.
    """
    raw_config = _load_raw_config(path)

    grade_table = raw_config.get("grade_table") or default_grade_table()
    noise_range = NoiseRange(**(raw_config.get("noise_range") or {}))
    rounding = RoundingPolicy(raw_config.get("rounding", RoundingPolicy.LARGEST_REMAINDER.value))
    preferences = _parse_preferences(raw_config.get("preferences"))

    return ScoringConfig(
        grade_table=grade_table,
        noise_range=noise_range,
        rounding=rounding,
        preferences=preferences,
    )


def _parse_preferences(preferences_data: dict[str, Any] | None) -> PreferenceSet:
    """Parse the preferences section; absent weights keep their defaults."""
    if not preferences_data:
        return PreferenceSet()
    return PreferenceSet(**preferences_data)


def load_preferences(path: Path | None = None) -> PreferenceSet:
    """Load only the starting preference weights from YAML configuration.

    Args:
        path: Path to YAML config file. If None, uses the default location.

    Returns:
        PreferenceSet from the config (or defaults if not specified).
    """
    raw_config = _load_raw_config(path)
    return _parse_preferences(raw_config.get("preferences"))

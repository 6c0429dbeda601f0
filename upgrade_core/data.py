"""Domain constants, preset/snapshot file helpers, and shared type aliases."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL: Final[int] = 60
POINTS_PER_PACK_ITEM: Final[int] = 15
POINTS_PER_TIER_BONUS: Final[int] = 120

# Estimated Starcoin cost for the next Potential level, indexed by level - 1.
COST_CURVE: Final[tuple[float, ...]] = (30, 60, 100, 180, 240)
PACK_PRICE: Final[int] = 30
PACK_SIZE: Final[int] = 5
ACQUISITION_PRICE: Final[int] = 50

TIER_THRESHOLDS: Final[tuple[int, ...]] = (10, 25, 40, 55, 70)

# Rates assume Monolith Research is maxed.
ENHANCE_BONUS_PROBABILITY: Final[float] = 0.30
BONUS_OUTCOME_PROBABILITIES: Final[dict[int, float]] = {
    2: 0.30,  # Radiant Miracle
    1: 0.20,  # Butterflies Inside
}

UNAVAILABLE_COST: Final[float] = float("inf")

CONFIG_FIELDS: Final[tuple[str, ...]] = (
    "points_per_level",
    "points_per_pack_item",
    "points_per_tier_bonus",
    "cost_curve",
    "tier_thresholds",
    "bonus_outcome_probabilities",
    "pack_size",
    "pack_price",
    "acquisition_price",
    "enhance_bonus_probability",
)

# Accepted spellings in preset files besides the snake_case field names.
CONFIG_FIELD_ALIASES: Final[dict[str, str]] = {
    "pointsPerLevel": "points_per_level",
    "pointsPerPackItem": "points_per_pack_item",
    "pointsPerTierBonus": "points_per_tier_bonus",
    "costCurve": "cost_curve",
    "tierThresholds": "tier_thresholds",
    "bonusOutcomeProbabilities": "bonus_outcome_probabilities",
    "packSize": "pack_size",
    "packPrice": "pack_price",
    "acquisitionPrice": "acquisition_price",
    "enhanceBonusProbability": "enhance_bonus_probability",
}

ConfigOverrides = dict[str, object]

PRESET_FILENAME: Final[str] = "config_presets.json"
PRESET_JSON_PATH: Final[Path] = Path(__file__).with_name(PRESET_FILENAME)


def canonical_field_name(name: str) -> str | None:
    """Return the configuration field a preset key refers to, if any."""

    if name in CONFIG_FIELDS:
        return name
    return CONFIG_FIELD_ALIASES.get(name)


def normalize_config_overrides(raw: Mapping[object, object]) -> ConfigOverrides:
    """Keep recognised configuration keys, translated to their field names."""

    overrides: ConfigOverrides = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            continue
        field_name = canonical_field_name(key)
        if field_name is None:
            logger.warning("Ignoring unknown configuration field '%s'", key)
            continue
        overrides[field_name] = value
    return overrides


def load_config_presets(
    preset_path: str | Path | None = None,
) -> dict[str, ConfigOverrides]:
    """Load named configuration override sets from the given JSON file.

    Parameters
    ----------
    preset_path:
        Path to a JSON object mapping preset names to override mappings.
        Defaults to ``config_presets.json`` beside this module.

    Returns
    -------
    dict[str, ConfigOverrides]
        Recognised overrides per preset. Missing or unreadable files yield an
        empty mapping.
    """

    path = Path(preset_path) if preset_path is not None else PRESET_JSON_PATH
    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read presets from %s: %s", path, exc)
        return {}

    if not isinstance(raw_data, Mapping):
        logger.warning("Preset file %s does not contain a JSON object", path)
        return {}

    presets: dict[str, ConfigOverrides] = {}
    for name, overrides in raw_data.items():
        if not isinstance(name, str) or not isinstance(overrides, Mapping):
            logger.warning("Skipping malformed preset entry %r", name)
            continue
        presets[name] = normalize_config_overrides(overrides)
    return presets


def load_snapshot_data(path: str | Path) -> dict[str, object]:
    """Read a progress snapshot description from a JSON file.

    Raises
    ------
    ValueError
        If the file cannot be read or is not a JSON object.
    """

    snapshot_path = Path(path)
    try:
        raw_data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read snapshot file '{snapshot_path}': {exc}") from exc
    if not isinstance(raw_data, dict):
        raise ValueError(f"Snapshot file '{snapshot_path}' must contain a JSON object.")
    return raw_data

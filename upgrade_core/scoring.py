"""Deterministic and expected point-gain formulas for each action kind."""

from __future__ import annotations

from collections.abc import Mapping

from .models import EVConfig


def pack_item_points(config: EVConfig) -> float:
    """Return the deterministic points granted by the items of one pack."""

    return config.points_per_pack_item * config.pack_size


def pack_point_gain(config: EVConfig, tier_crossings: int) -> float:
    """Return pack item points plus the fixed reward for each tier crossed."""

    return pack_item_points(config) + tier_crossings * config.points_per_tier_bonus


def expected_enhance_bonus_levels(bonus_probability: float) -> float:
    """Return the expected extra levels from a chance of one bonus level."""

    return bonus_probability * 1


def expected_outcome_levels(outcome_probabilities: Mapping[int, float]) -> float:
    """Sum independent bonus outcomes as magnitude-weighted expectations.

    Parameters
    ----------
    outcome_probabilities:
        Mapping from extra levels granted to the chance of that outcome. Each
        outcome is treated as its own additive bonus, so the probabilities are
        not required to sum to one.
    """

    return sum(magnitude * probability for magnitude, probability in outcome_probabilities.items())


def advance_point_gain(config: EVConfig) -> float:
    """Return the expected points from advancing an attribute one level."""

    levels = 1 + expected_enhance_bonus_levels(config.enhance_bonus_probability)
    return levels * config.points_per_level


def acquisition_point_gain(config: EVConfig) -> float:
    """Return the expected points from acquiring a new attribute."""

    levels = 1 + expected_outcome_levels(config.bonus_outcome_probabilities)
    return levels * config.points_per_level

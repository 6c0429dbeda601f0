"""Dataclasses shared across the evaluator, ranking and UI modules."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Union

from .data import (
    ACQUISITION_PRICE,
    BONUS_OUTCOME_PROBABILITIES,
    COST_CURVE,
    ENHANCE_BONUS_PROBABILITY,
    PACK_PRICE,
    PACK_SIZE,
    POINTS_PER_LEVEL,
    POINTS_PER_PACK_ITEM,
    POINTS_PER_TIER_BONUS,
    TIER_THRESHOLDS,
)


def _as_float(name: str, value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, received {value!r}.") from exc


def _as_int(name: str, value: object) -> int:
    """Convert ``value`` to an integer without truncating fractions."""

    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be a whole number, received {value!r}.")
        return int(value)
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, received {value!r}.") from exc


def _as_float_tuple(name: str, values: object) -> tuple[float, ...]:
    if isinstance(values, (str, Mapping)) or not isinstance(values, Sequence):
        raise ValueError(f"{name} must be a sequence of numbers, received {values!r}.")
    return tuple(_as_float(name, value) for value in values)


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, received {value}.")


def _check_non_decreasing(name: str, values: Sequence[float]) -> None:
    for previous, current in zip(values, values[1:]):
        if current < previous:
            raise ValueError(f"{name} must be non-decreasing, found {previous} before {current}.")


@dataclass(frozen=True)
class EVConfig:
    """Immutable point weights, price tables and bonus rates used for scoring."""

    points_per_level: float = POINTS_PER_LEVEL
    points_per_pack_item: float = POINTS_PER_PACK_ITEM
    points_per_tier_bonus: float = POINTS_PER_TIER_BONUS
    cost_curve: tuple[float, ...] = COST_CURVE
    tier_thresholds: tuple[float, ...] = TIER_THRESHOLDS
    bonus_outcome_probabilities: Mapping[int, float] = field(
        default_factory=lambda: dict(BONUS_OUTCOME_PROBABILITIES)
    )
    pack_size: int = PACK_SIZE
    pack_price: float = PACK_PRICE
    acquisition_price: float = ACQUISITION_PRICE
    enhance_bonus_probability: float = ENHANCE_BONUS_PROBABILITY

    def __post_init__(self) -> None:
        """Coerce table types and validate the configured values.

        Raises
        ------
        ValueError
            If a value is not numeric, a probability lies outside ``[0, 1]``,
            a table decreases, a weight or price is negative or the pack size
            is not positive.
        """

        for name in (
            "points_per_level",
            "points_per_pack_item",
            "points_per_tier_bonus",
            "pack_price",
            "acquisition_price",
            "enhance_bonus_probability",
        ):
            value = _as_float(name, getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} must not be negative.")
            object.__setattr__(self, name, value)

        pack_size = _as_int("pack_size", self.pack_size)
        if pack_size <= 0:
            raise ValueError("pack_size must be positive.")
        object.__setattr__(self, "pack_size", pack_size)

        cost_curve = _as_float_tuple("cost_curve", self.cost_curve)
        thresholds = _as_float_tuple("tier_thresholds", self.tier_thresholds)
        _check_non_decreasing("cost_curve", cost_curve)
        _check_non_decreasing("tier_thresholds", thresholds)
        object.__setattr__(self, "cost_curve", cost_curve)
        object.__setattr__(self, "tier_thresholds", thresholds)

        raw_outcomes = self.bonus_outcome_probabilities
        if not isinstance(raw_outcomes, Mapping):
            raise ValueError(
                f"bonus_outcome_probabilities must map magnitudes to probabilities, "
                f"received {raw_outcomes!r}."
            )
        outcomes = {
            _as_int("bonus outcome magnitude", magnitude): _as_float("bonus outcome", probability)
            for magnitude, probability in raw_outcomes.items()
        }
        _check_probability("enhance_bonus_probability", self.enhance_bonus_probability)
        for magnitude, probability in outcomes.items():
            _check_probability(f"bonus outcome +{magnitude}", probability)
        object.__setattr__(self, "bonus_outcome_probabilities", MappingProxyType(outcomes))

    def __hash__(self) -> int:
        return hash(
            (
                self.points_per_level,
                self.points_per_pack_item,
                self.points_per_tier_bonus,
                self.cost_curve,
                self.tier_thresholds,
                tuple(sorted(self.bonus_outcome_probabilities.items())),
                self.pack_size,
                self.pack_price,
                self.acquisition_price,
                self.enhance_bonus_probability,
            )
        )

    @property
    def max_level(self) -> int:
        """Return the highest level reachable through the cost curve."""

        reachable = 0
        for cost in self.cost_curve:
            if not math.isfinite(cost):
                break
            reachable += 1
        return reachable + 1


@dataclass(frozen=True)
class BonusSource:
    """Tiered reward source fed by packs of one resource category."""

    identifier: str
    category: str
    activated_tier: int = 0
    thresholds: Optional[tuple[float, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "activated_tier", _as_int("activated_tier", self.activated_tier)
        )
        if self.thresholds is not None:
            thresholds = _as_float_tuple("thresholds", self.thresholds)
            _check_non_decreasing("thresholds", thresholds)
            object.__setattr__(self, "thresholds", thresholds)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Player state read by a single evaluation call.

    Levels and progress counters are copied into read-only mappings of
    integers when the snapshot is built, so evaluation never sees a
    malformed entry.
    """

    currency: float
    attribute_levels: Mapping[str, int] = field(default_factory=dict)
    cumulative_progress: Mapping[str, int] = field(default_factory=dict)
    bonus_sources: tuple[BonusSource, ...] = ()

    def __post_init__(self) -> None:
        """Validate and freeze the snapshot contents.

        Raises
        ------
        ValueError
            If currency or a progress counter is negative, or a level or
            counter is not a whole number.
        """

        currency = _as_float("currency", self.currency)
        if currency < 0:
            raise ValueError("currency must not be negative.")
        levels = {
            str(attribute_id): _as_int(f"Level of '{attribute_id}'", level)
            for attribute_id, level in self.attribute_levels.items()
        }
        progress = {
            str(identifier): _as_int(f"Progress for '{identifier}'", counter)
            for identifier, counter in self.cumulative_progress.items()
        }
        for identifier, counter in progress.items():
            if counter < 0:
                raise ValueError(f"Progress for '{identifier}' must not be negative.")
        object.__setattr__(self, "currency", currency)
        object.__setattr__(self, "attribute_levels", MappingProxyType(levels))
        object.__setattr__(self, "cumulative_progress", MappingProxyType(progress))
        object.__setattr__(self, "bonus_sources", tuple(self.bonus_sources))

    def level_of(self, attribute_id: str) -> int:
        """Return the tracked level of an attribute.

        Raises
        ------
        ValueError
            If the attribute is not tracked in this snapshot.
        """

        try:
            return self.attribute_levels[attribute_id]
        except KeyError as exc:
            raise ValueError(f"Unknown attribute '{attribute_id}'") from exc

    def progress_of(self, source_id: str) -> int:
        """Return the cumulative progress counter for a bonus source."""

        return self.cumulative_progress.get(source_id, 0)

    def sources_for(self, category: str) -> list[BonusSource]:
        """Return the bonus sources fed by the given category, in order."""

        return [source for source in self.bonus_sources if source.category == category]




@dataclass(frozen=True)
class PurchasePack:
    """Buy one pack of items for a resource category."""

    category: str


@dataclass(frozen=True)
class AdvanceAttribute:
    """Spend currency to raise a tracked attribute by one level."""

    attribute_id: str


@dataclass(frozen=True)
class AcquireNewAttribute:
    """Spend currency to obtain a new attribute at level one."""


Action = Union[PurchasePack, AdvanceAttribute, AcquireNewAttribute]


@dataclass
class ActionEvaluation:
    """Cost, expected gain and efficiency ratio computed for one action."""

    action: Action
    cost: float
    point_gain: float
    ratio: float
    tier_crossings: int = 0
    reason: Optional[str] = None

    @property
    def evaluable(self) -> bool:
        """Return True when the action produced a positive ratio."""

        return self.reason is None and self.ratio > 0.0


@dataclass
class RankingResult:
    """Ranked evaluations for a snapshot and the time spent computing them."""

    snapshot: ProgressSnapshot
    config: EVConfig
    evaluations: list[ActionEvaluation]
    compute_seconds: float

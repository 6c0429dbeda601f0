"""Currency cost lookups for candidate upgrade actions."""

from __future__ import annotations

import math

from .data import UNAVAILABLE_COST
from .models import EVConfig


def cost_curve_index(level: int) -> int:
    """Return the cost-curve index used to advance from ``level``."""

    return level - 1


def advance_cost(cost_curve: tuple[float, ...], level: int) -> float:
    """Return the currency needed to advance an attribute from ``level``.

    Parameters
    ----------
    cost_curve:
        Per-level costs indexed by ``level - 1``.
    level:
        Current attribute level (levels start at 1).

    Returns
    -------
    float
        The curve entry, or ``UNAVAILABLE_COST`` when the level lies outside
        the curve or its entry is not finite.
    """

    index = cost_curve_index(level)
    if not 0 <= index < len(cost_curve):
        return UNAVAILABLE_COST
    cost = cost_curve[index]
    if not math.isfinite(cost):
        return UNAVAILABLE_COST
    return cost


def is_affordable(cost: float, currency: float) -> bool:
    """Return True when ``cost`` is a finite price covered by ``currency``."""

    return math.isfinite(cost) and cost <= currency


class CostModel:
    """Price tables used to evaluate upgrade actions."""

    def __init__(self, config: EVConfig) -> None:
        """Initialise the cost model from a validated configuration."""

        self.config = config

    def pack_cost(self) -> float:
        """Return the fixed price of one pack."""

        return float(self.config.pack_price)

    def advance_cost(self, level: int) -> float:
        """Return the price of advancing an attribute from ``level``."""

        return advance_cost(self.config.cost_curve, level)

    def acquisition_cost(self) -> float:
        """Return the fixed price of acquiring a new attribute."""

        return float(self.config.acquisition_price)

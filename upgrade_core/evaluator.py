"""Expected-value per cost evaluation for single upgrade actions."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .cost import CostModel, is_affordable
from .models import (
    AcquireNewAttribute,
    Action,
    ActionEvaluation,
    AdvanceAttribute,
    EVConfig,
    ProgressSnapshot,
    PurchasePack,
)
from .scoring import acquisition_point_gain, advance_point_gain, pack_point_gain
from .tiers import pack_tier_crossings

logger = logging.getLogger(__name__)

NOT_EVALUABLE: float = 0.0


class Evaluator:
    """Stateless scorer bound to one immutable configuration.

    Every call reads only its arguments and the configuration, so one instance
    may be shared across threads and repeated calls return identical results.
    """

    def __init__(self, config: Optional[EVConfig] = None) -> None:
        if config is None:
            config = EVConfig()
        self.config = config
        self.cost = CostModel(config)

    def evaluate(self, action: Action, snapshot: ProgressSnapshot) -> float:
        """Return expected points per unit of currency, or 0 if not evaluable."""

        return self.explain(action, snapshot).ratio

    def explain(self, action: Action, snapshot: ProgressSnapshot) -> ActionEvaluation:
        """Evaluate an action and keep the cost and gain that produced the ratio.

        Parameters
        ----------
        action:
            Candidate spend to score.
        snapshot:
            Player state the action would be taken from. It is not modified.

        Returns
        -------
        ActionEvaluation
            The breakdown. ``ratio`` is 0 and ``reason`` is set when the action
            is unaffordable, unavailable or unrecognised.

        Raises
        ------
        ValueError
            If an ``AdvanceAttribute`` names an attribute the snapshot does not
            track.
        """

        if isinstance(action, PurchasePack):
            return self._explain_pack(action, snapshot)
        if isinstance(action, AdvanceAttribute):
            return self._explain_advance(action, snapshot)
        if isinstance(action, AcquireNewAttribute):
            return self._explain_acquire(action, snapshot)
        return self._rejected(action, 0.0, "unrecognized action")

    def _explain_pack(self, action: PurchasePack, snapshot: ProgressSnapshot) -> ActionEvaluation:
        cost = self.cost.pack_cost()
        if not is_affordable(cost, snapshot.currency):
            return self._rejected(action, cost, "insufficient currency")
        crossings = pack_tier_crossings(
            snapshot, action.category, self.config.pack_size, self.config
        )
        gain = pack_point_gain(self.config, crossings)
        return self._finish(action, cost, gain, crossings)

    def _explain_advance(
        self, action: AdvanceAttribute, snapshot: ProgressSnapshot
    ) -> ActionEvaluation:
        level = snapshot.level_of(action.attribute_id)
        if level < 1:
            return self._rejected(action, math.inf, f"invalid level {level}")
        cost = self.cost.advance_cost(level)
        if not math.isfinite(cost):
            return self._rejected(action, cost, "maximum level reached")
        if not is_affordable(cost, snapshot.currency):
            return self._rejected(action, cost, "insufficient currency")
        return self._finish(action, cost, advance_point_gain(self.config))

    def _explain_acquire(
        self, action: AcquireNewAttribute, snapshot: ProgressSnapshot
    ) -> ActionEvaluation:
        cost = self.cost.acquisition_cost()
        if not is_affordable(cost, snapshot.currency):
            return self._rejected(action, cost, "insufficient currency")
        return self._finish(action, cost, acquisition_point_gain(self.config))

    def _finish(
        self, action: Action, cost: float, gain: float, crossings: int = 0
    ) -> ActionEvaluation:
        if cost <= 0:
            return self._rejected(action, cost, "zero cost")
        return ActionEvaluation(
            action=action,
            cost=cost,
            point_gain=gain,
            ratio=gain / cost,
            tier_crossings=crossings,
        )

    def _rejected(self, action: object, cost: float, reason: str) -> ActionEvaluation:
        logger.debug("Not evaluable %r: %s", action, reason)
        return ActionEvaluation(
            action=action,  # type: ignore[arg-type]
            cost=cost,
            point_gain=0.0,
            ratio=NOT_EVALUABLE,
            reason=reason,
        )


def evaluate(
    action: Action,
    snapshot: ProgressSnapshot,
    config: Optional[EVConfig] = None,
) -> float:
    """Return the expected point gain per unit cost of ``action``.

    A ratio of 0 means the action should not be recommended now.
    """

    return Evaluator(config).evaluate(action, snapshot)

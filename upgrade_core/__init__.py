"""Expected point gain per currency spent for candidate upgrade actions."""

from .api import (
    best_action,
    candidate_actions,
    describe_action,
    load_configs,
    load_snapshot,
    make_config,
    rank_actions,
    snapshot_from_mapping,
)
from .cost import CostModel, advance_cost
from .data import (
    BONUS_OUTCOME_PROBABILITIES,
    COST_CURVE,
    PRESET_JSON_PATH,
    TIER_THRESHOLDS,
    load_config_presets,
)
from .evaluator import NOT_EVALUABLE, Evaluator, evaluate
from .models import (
    AcquireNewAttribute,
    Action,
    ActionEvaluation,
    AdvanceAttribute,
    BonusSource,
    EVConfig,
    ProgressSnapshot,
    PurchasePack,
    RankingResult,
)
from .tiers import count_crossings, pack_tier_crossings

__all__ = [
    "AcquireNewAttribute",
    "Action",
    "ActionEvaluation",
    "AdvanceAttribute",
    "BONUS_OUTCOME_PROBABILITIES",
    "BonusSource",
    "COST_CURVE",
    "CostModel",
    "EVConfig",
    "Evaluator",
    "NOT_EVALUABLE",
    "PRESET_JSON_PATH",
    "ProgressSnapshot",
    "PurchasePack",
    "RankingResult",
    "TIER_THRESHOLDS",
    "advance_cost",
    "best_action",
    "candidate_actions",
    "count_crossings",
    "describe_action",
    "evaluate",
    "load_config_presets",
    "load_configs",
    "load_snapshot",
    "make_config",
    "pack_tier_crossings",
    "rank_actions",
    "snapshot_from_mapping",
]

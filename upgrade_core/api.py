"""High-level entry points used by the UI and callers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from time import perf_counter
from typing import Optional

from .data import load_config_presets, load_snapshot_data, normalize_config_overrides
from .evaluator import Evaluator
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

logger = logging.getLogger(__name__)


def make_config(**overrides: object) -> EVConfig:
    """Factory helper returning a validated configuration.

    Keyword names may use either the field names or their camelCase aliases.
    """

    return EVConfig(**normalize_config_overrides(overrides))  # type: ignore[arg-type]


def load_configs(preset_path: str | Path | None = None) -> dict[str, EVConfig]:
    """Load preset override sets and build a configuration for each.

    Presets whose values fail validation are skipped with a warning.
    """

    configs: dict[str, EVConfig] = {}
    for name, overrides in load_config_presets(preset_path).items():
        try:
            configs[name] = EVConfig(**overrides)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping preset '%s': %s", name, exc)
    return configs


def _parse_bonus_source(raw: object) -> BonusSource:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Bonus source entries must be objects, received {raw!r}.")
    try:
        identifier = str(raw["identifier"])
    except KeyError as exc:
        raise ValueError("Bonus source entries require an 'identifier'.") from exc
    return BonusSource(
        identifier=identifier,
        category=str(raw.get("category", identifier)),
        activated_tier=raw.get("activated_tier", raw.get("activatedTier", 0)),  # type: ignore[arg-type]
        thresholds=raw.get("thresholds"),  # type: ignore[arg-type]
    )


def snapshot_from_mapping(raw: Mapping[str, object]) -> ProgressSnapshot:
    """Build a progress snapshot from JSON-compatible data.

    Parameters
    ----------
    raw:
        Mapping with ``currency``, ``attribute_levels``, ``cumulative_progress``
        and ``bonus_sources`` entries. camelCase keys are accepted as well.

    Raises
    ------
    ValueError
        If the structure or any value is invalid.
    """

    def pick(snake: str, camel: str, default: object) -> object:
        return raw.get(snake, raw.get(camel, default))

    levels = pick("attribute_levels", "attributeLevels", {})
    progress = pick("cumulative_progress", "cumulativeProgress", {})
    sources = pick("bonus_sources", "bonusSources", [])
    if not isinstance(levels, Mapping) or not isinstance(progress, Mapping):
        raise ValueError("attribute_levels and cumulative_progress must be objects.")
    if not isinstance(sources, Sequence) or isinstance(sources, str):
        raise ValueError("bonus_sources must be a list.")

    if "currency" not in raw:
        raise ValueError("Snapshot data requires a 'currency' entry.")

    return ProgressSnapshot(
        currency=raw["currency"],  # type: ignore[arg-type]
        attribute_levels=dict(levels),
        cumulative_progress=dict(progress),
        bonus_sources=tuple(_parse_bonus_source(entry) for entry in sources),
    )


def load_snapshot(path: str | Path) -> ProgressSnapshot:
    """Read a progress snapshot from a JSON file."""

    return snapshot_from_mapping(load_snapshot_data(path))


def candidate_actions(snapshot: ProgressSnapshot) -> list[Action]:
    """List one candidate per pack category, tracked attribute and acquisition.

    Categories keep the order of ``bonus_sources``; attributes are sorted by
    identifier so repeated calls list the same actions in the same order.
    """

    actions: list[Action] = []
    seen_categories: set[str] = set()
    for source in snapshot.bonus_sources:
        if source.category in seen_categories:
            continue
        seen_categories.add(source.category)
        actions.append(PurchasePack(category=source.category))
    for attribute_id in sorted(snapshot.attribute_levels):
        actions.append(AdvanceAttribute(attribute_id=attribute_id))
    actions.append(AcquireNewAttribute())
    return actions


def rank_actions(
    snapshot: ProgressSnapshot,
    actions: Optional[Iterable[Action]] = None,
    config: Optional[EVConfig] = None,
) -> RankingResult:
    """Evaluate each candidate once and order them by efficiency.

    Parameters
    ----------
    snapshot:
        Player state shared by every evaluation.
    actions:
        Candidates to score. Defaults to ``candidate_actions(snapshot)``.
    config:
        Optional replacement for the default configuration.

    Returns
    -------
    RankingResult
        Evaluations sorted by descending ratio; ties keep candidate order.
    """

    evaluator = Evaluator(config)
    if actions is None:
        actions = candidate_actions(snapshot)

    compute_start = perf_counter()
    evaluations = [evaluator.explain(action, snapshot) for action in actions]
    evaluations.sort(key=lambda item: item.ratio, reverse=True)
    compute_seconds = perf_counter() - compute_start

    return RankingResult(
        snapshot=snapshot,
        config=evaluator.config,
        evaluations=evaluations,
        compute_seconds=compute_seconds,
    )


def best_action(ranking: RankingResult) -> Optional[ActionEvaluation]:
    """Return the most efficient evaluable action, if any."""

    for evaluation in ranking.evaluations:
        if evaluation.evaluable:
            return evaluation
    return None


def describe_action(action: Action) -> str:
    """Return a short human-readable label for an action."""

    if isinstance(action, PurchasePack):
        return f"Buy {action.category} pack"
    if isinstance(action, AdvanceAttribute):
        return f"Enhance {action.attribute_id}"
    if isinstance(action, AcquireNewAttribute):
        return "Acquire new attribute"
    return repr(action)

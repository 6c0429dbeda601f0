"""Tier threshold crossing detection for cumulative-progress bonuses."""

from __future__ import annotations

from collections.abc import Sequence

from .models import BonusSource, EVConfig, ProgressSnapshot


def count_crossings(
    before: float,
    increment: float,
    thresholds: Sequence[float],
    activated_tier: int,
) -> int:
    """Count the tiers first reached when progress grows by ``increment``.

    Parameters
    ----------
    before:
        Cumulative progress prior to the purchase.
    increment:
        Progress added by the purchase.
    thresholds:
        Non-decreasing cumulative values that unlock each tier.
    activated_tier:
        Number of leading tiers that have already paid out.

    Returns
    -------
    int
        Tiers at index ``activated_tier`` or later whose threshold satisfies
        ``before < threshold <= before + increment``.
    """

    if increment <= 0:
        return 0
    after = before + increment
    crossings = 0
    for threshold in thresholds[max(activated_tier, 0):]:
        if before < threshold <= after:
            crossings += 1
    return crossings


def source_thresholds(source: BonusSource, config: EVConfig) -> tuple[float, ...]:
    """Return the thresholds for a source, falling back to the shared table."""

    if source.thresholds is not None:
        return tuple(source.thresholds)
    return config.tier_thresholds


def pack_tier_crossings(
    snapshot: ProgressSnapshot,
    category: str,
    increment: float,
    config: EVConfig,
) -> int:
    """Sum tier crossings over every bonus source fed by ``category``."""

    total = 0
    for source in snapshot.sources_for(category):
        total += count_crossings(
            snapshot.progress_of(source.identifier),
            increment,
            source_thresholds(source, config),
            source.activated_tier,
        )
    return total

from upgrade_core import BonusSource, EVConfig, ProgressSnapshot
from upgrade_core.scoring import pack_point_gain
from upgrade_core.tiers import count_crossings, pack_tier_crossings, source_thresholds

THRESHOLDS = [10, 25, 40, 55, 70]


def test_crossing_next_tier():
    """Progress 20 -> 25 reaches the second tier."""
    assert count_crossings(20, 5, THRESHOLDS, activated_tier=1) == 1


def test_exact_threshold_counts_and_one_short_does_not():
    """Landing on a threshold crosses it; landing one below does not."""
    assert count_crossings(20, 5, THRESHOLDS, 0) == 1
    assert count_crossings(20, 4, THRESHOLDS, 0) == 0


def test_large_increment_crosses_several_tiers():
    """5 -> 45 crosses 10, 25 and 40."""
    assert count_crossings(5, 40, THRESHOLDS, 0) == 3
    assert pack_point_gain(EVConfig(), 3) == 75 + 3 * 120


def test_already_passed_threshold_is_not_counted_again():
    """A tier at or below the starting progress never pays twice."""
    # Tier 10 is behind us even though activated_tier was not advanced.
    assert count_crossings(10, 20, THRESHOLDS, 0) == 1
    assert count_crossings(30, 5, THRESHOLDS, 0) == 0


def test_activated_tiers_are_skipped():
    assert count_crossings(0, 30, THRESHOLDS, activated_tier=1) == 1
    assert count_crossings(0, 100, THRESHOLDS, activated_tier=5) == 0


def test_degenerate_inputs():
    assert count_crossings(0, 0, THRESHOLDS, 0) == 0
    assert count_crossings(0, -5, THRESHOLDS, 0) == 0
    assert count_crossings(0, 10, [], 0) == 0
    assert count_crossings(0, 10, THRESHOLDS, -3) == 1


def test_thresholds_not_mutated():
    table = list(THRESHOLDS)
    count_crossings(0, 100, table, 0)
    assert table == THRESHOLDS


def test_source_specific_thresholds_override_config():
    config = EVConfig()
    custom = BonusSource("Solo", "Focus", thresholds=(3, 6))
    shared = BonusSource("Focus", "Focus")
    assert source_thresholds(custom, config) == (3, 6)
    assert source_thresholds(shared, config) == config.tier_thresholds


def test_pack_crossings_sum_over_matching_sources():
    """Every source on the category is checked; others are ignored."""
    snapshot = ProgressSnapshot(
        currency=100,
        cumulative_progress={"Harmony": 20, "Echo": 8, "Other": 24},
        bonus_sources=(
            BonusSource("Harmony", "Focus", activated_tier=1),
            BonusSource("Echo", "Focus", activated_tier=0),
            BonusSource("Other", "Rhythm", activated_tier=0),
        ),
    )
    assert pack_tier_crossings(snapshot, "Focus", 5, EVConfig()) == 2
    assert pack_tier_crossings(snapshot, "Rhythm", 5, EVConfig()) == 1
    assert pack_tier_crossings(snapshot, "Tempo", 5, EVConfig()) == 0


def test_missing_progress_counts_from_zero():
    snapshot = ProgressSnapshot(currency=0, bonus_sources=(BonusSource("Focus", "Focus"),))
    assert pack_tier_crossings(snapshot, "Focus", 10, EVConfig()) == 1

import json

import pytest

from upgrade_core import (
    AcquireNewAttribute,
    AdvanceAttribute,
    BonusSource,
    ProgressSnapshot,
    PurchasePack,
    best_action,
    candidate_actions,
    describe_action,
    load_config_presets,
    load_configs,
    load_snapshot,
    make_config,
    rank_actions,
    snapshot_from_mapping,
)


def sample_snapshot(currency=200):
    return ProgressSnapshot(
        currency=currency,
        attribute_levels={"Potential B": 1, "Potential A": 4},
        cumulative_progress={"Focus": 20, "Echo": 0},
        bonus_sources=(
            BonusSource("Focus", "Focus", activated_tier=1),
            BonusSource("Echo", "Focus"),
            BonusSource("Rhythm", "Rhythm"),
        ),
    )


def test_candidate_actions_cover_every_kind_once():
    actions = candidate_actions(sample_snapshot())
    assert actions == [
        PurchasePack("Focus"),
        PurchasePack("Rhythm"),
        AdvanceAttribute("Potential A"),
        AdvanceAttribute("Potential B"),
        AcquireNewAttribute(),
    ]


def test_rank_actions_orders_by_ratio():
    """The Focus pack crosses tier 25 and outranks everything else."""
    result = rank_actions(sample_snapshot())
    ratios = [item.ratio for item in result.evaluations]
    assert ratios == sorted(ratios, reverse=True)
    top = best_action(result)
    assert top is not None
    assert top.action == PurchasePack("Focus")
    assert top.ratio == pytest.approx(195 / 30)
    assert result.compute_seconds >= 0


def test_rank_actions_with_nothing_affordable():
    result = rank_actions(sample_snapshot(currency=5))
    assert best_action(result) is None
    assert all(item.ratio == 0 for item in result.evaluations)


def test_rank_actions_with_explicit_actions_and_config():
    config = make_config(packPrice=15)
    result = rank_actions(sample_snapshot(), actions=[PurchasePack("Rhythm")], config=config)
    assert result.config is config
    assert result.evaluations[0].ratio == pytest.approx(75 / 15)


def test_make_config_accepts_camel_case_and_ignores_unknown():
    config = make_config(pointsPerLevel=100, colour="blue")
    assert config.points_per_level == 100


def test_describe_action():
    assert describe_action(PurchasePack("Focus")) == "Buy Focus pack"
    assert describe_action(AdvanceAttribute("A")) == "Enhance A"
    assert describe_action(AcquireNewAttribute()) == "Acquire new attribute"


def test_snapshot_from_mapping_camel_case():
    snapshot = snapshot_from_mapping(
        {
            "currency": 120,
            "attributeLevels": {"A": "3"},
            "cumulativeProgress": {"Focus": 4},
            "bonusSources": [{"identifier": "Focus", "activatedTier": 1, "thresholds": [5, 9]}],
        }
    )
    assert snapshot.currency == 120
    assert snapshot.attribute_levels == {"A": 3}
    assert snapshot.bonus_sources == (BonusSource("Focus", "Focus", 1, (5.0, 9.0)),)


@pytest.mark.parametrize(
    "raw",
    [
        {"attribute_levels": [1, 2]},
        {"bonus_sources": "Focus"},
        {"bonus_sources": [{"category": "Focus"}]},
        {"bonus_sources": [3]},
        {"currency": "lots"},
        {"currency": -5},
    ],
)
def test_snapshot_from_mapping_rejects_invalid(raw):
    with pytest.raises(ValueError):
        snapshot_from_mapping(raw)


def test_load_snapshot(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"currency": 50, "attribute_levels": {"A": 1}}), encoding="utf-8")
    assert load_snapshot(path).attribute_levels == {"A": 1}

    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_snapshot(bad)
    with pytest.raises(ValueError):
        load_snapshot(tmp_path / "missing.json")


def test_load_presets_skips_invalid_entries(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(
        json.dumps(
            {
                "cheap": {"packPrice": 10, "unknown": 1},
                "broken": {"enhanceBonusProbability": 2},
                "not-a-mapping": 3,
            }
        ),
        encoding="utf-8",
    )
    raw = load_config_presets(path)
    assert raw["cheap"] == {"pack_price": 10}
    assert "not-a-mapping" not in raw

    configs = load_configs(path)
    assert set(configs) == {"cheap"}
    assert configs["cheap"].pack_price == 10


def test_missing_or_malformed_preset_file(tmp_path):
    assert load_config_presets(tmp_path / "nope.json") == {}
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_config_presets(broken) == {}


def test_bundled_presets_load():
    configs = load_configs()
    assert "Monolith unresearched" in configs
    assert configs["Monolith unresearched"].bonus_outcome_probabilities == {}


def test_load_configs_skips_non_mapping_outcome_table(tmp_path):
    """One malformed preset does not stop the others from loading."""
    path = tmp_path / "presets.json"
    path.write_text(
        json.dumps({"bad": {"bonusOutcomeProbabilities": [0.3]}, "ok": {}}),
        encoding="utf-8",
    )
    assert set(load_configs(path)) == {"ok"}


def test_load_configs_converts_string_weights(tmp_path):
    """String weights become numbers instead of failing during ranking."""
    path = tmp_path / "presets.json"
    path.write_text(
        json.dumps({"text": {"pointsPerLevel": "60"}, "negative": {"pointsPerLevel": -60}}),
        encoding="utf-8",
    )
    configs = load_configs(path)
    assert set(configs) == {"text"}
    result = rank_actions(sample_snapshot(), config=configs["text"])
    assert all(item.ratio >= 0 for item in result.evaluations)


def test_negative_weights_are_rejected():
    with pytest.raises(ValueError):
        make_config(points_per_level=-60)


def test_snapshot_from_mapping_requires_currency():
    with pytest.raises(ValueError, match="currency"):
        snapshot_from_mapping({"attribute_levels": {"A": 1}})


@pytest.mark.parametrize(
    "raw",
    [
        {"currency": 10, "attribute_levels": {"A": 4.7}},
        {"currency": 10, "attribute_levels": {"A": None}},
        {"currency": 10, "bonus_sources": [{"identifier": "Focus", "activated_tier": 1.5}]},
    ],
)
def test_snapshot_from_mapping_rejects_fractional_or_missing_values(raw):
    with pytest.raises(ValueError):
        snapshot_from_mapping(raw)

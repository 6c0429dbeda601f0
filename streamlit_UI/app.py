"""Streamlit front-end for the upgrade EV calculator."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional

import altair as alt
import numpy as np
import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from upgrade_core import (
    BonusSource,
    EVConfig,
    ProgressSnapshot,
    RankingResult,
    best_action,
    describe_action,
    load_configs,
    make_config,
    rank_actions,
)

PRESET_DEFAULT_LABEL = "Default"
CONFIG_PRESETS = load_configs()
DEFAULT_ATTRIBUTES: tuple[str, ...] = ("Potential A", "Potential B", "Potential C")
DEFAULT_CATEGORIES: tuple[str, ...] = ("Focus", "Rhythm", "Tempo")


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    st.session_state.setdefault("currency_input", 200.0)
    st.session_state.setdefault("selected_preset", PRESET_DEFAULT_LABEL)
    st.session_state.setdefault("ranking_result", None)
    st.session_state.setdefault("ranking_error", None)
    for attribute_id in DEFAULT_ATTRIBUTES:
        st.session_state.setdefault(f"level_{attribute_id}", 1)
    for category in DEFAULT_CATEGORIES:
        st.session_state.setdefault(f"progress_{category}", 0)
        st.session_state.setdefault(f"tier_{category}", 0)


def reset_ranking_results() -> None:
    """Clear cached ranking results so the UI reflects new inputs."""

    st.session_state.ranking_result = None
    st.session_state.ranking_error = None


def selected_config() -> EVConfig:
    """Return the configuration chosen in the preset selector."""

    preset = st.session_state.selected_preset
    if preset in CONFIG_PRESETS:
        return CONFIG_PRESETS[preset]
    return make_config()


def clamped_inputs(state: Mapping[str, object], config: EVConfig) -> dict[str, int]:
    """Return stored level and tier inputs limited to what ``config`` allows."""

    clamped: dict[str, int] = {}
    for attribute_id in DEFAULT_ATTRIBUTES:
        key = f"level_{attribute_id}"
        clamped[key] = min(int(state[key]), config.max_level)  # type: ignore[call-overload]
    for category in DEFAULT_CATEGORIES:
        key = f"tier_{category}"
        clamped[key] = min(int(state[key]), len(config.tier_thresholds))  # type: ignore[call-overload]
    return clamped


def on_preset_change() -> None:
    """Reset results and keep stored inputs within the new preset's limits."""

    reset_ranking_results()
    for key, value in clamped_inputs(st.session_state, selected_config()).items():
        st.session_state[key] = value


def next_tier_label(progress: int, thresholds: Sequence[float]) -> str:
    """Describe the next tier threshold above ``progress``."""

    table = np.asarray(thresholds, dtype=float)
    index = int(np.searchsorted(table, progress, side="right"))
    if index >= len(table):
        return "all tiers reached"
    return f"tier {index + 1} at {table[index]:g} ({table[index] - progress:g} to go)"


def render_snapshot_inputs(config: EVConfig) -> None:
    """Render currency, attribute level and progress controls."""

    with st.container(border=True):
        st.markdown("**Progress snapshot**")
        st.number_input(
            "Starcoins",
            min_value=0.0,
            step=10.0,
            key="currency_input",
            on_change=reset_ranking_results,
        )

        st.caption("Potential levels")
        level_cols = st.columns(len(DEFAULT_ATTRIBUTES))
        for column, attribute_id in zip(level_cols, DEFAULT_ATTRIBUTES):
            column.number_input(
                attribute_id,
                min_value=1,
                max_value=config.max_level,
                step=1,
                key=f"level_{attribute_id}",
                on_change=reset_ranking_results,
            )

        st.caption("Harmony progress")
        for category in DEFAULT_CATEGORIES:
            name_col, progress_col, tier_col, hint_col = st.columns([1.0, 1.2, 1.2, 2.0])
            name_col.markdown(f"**{category}**")
            progress = progress_col.number_input(
                f"{category} notes",
                min_value=0,
                step=1,
                key=f"progress_{category}",
                label_visibility="collapsed",
                on_change=reset_ranking_results,
            )
            tier_col.number_input(
                f"{category} tiers paid",
                min_value=0,
                max_value=len(config.tier_thresholds),
                step=1,
                key=f"tier_{category}",
                label_visibility="collapsed",
                on_change=reset_ranking_results,
            )
            hint_col.caption(next_tier_label(int(progress), config.tier_thresholds))


def build_snapshot() -> ProgressSnapshot:
    """Assemble a progress snapshot from the current widget values."""

    return ProgressSnapshot(
        currency=float(st.session_state.currency_input),
        attribute_levels={
            attribute_id: int(st.session_state[f"level_{attribute_id}"])
            for attribute_id in DEFAULT_ATTRIBUTES
        },
        cumulative_progress={
            category: int(st.session_state[f"progress_{category}"])
            for category in DEFAULT_CATEGORIES
        },
        bonus_sources=tuple(
            BonusSource(
                identifier=category,
                category=category,
                activated_tier=int(st.session_state[f"tier_{category}"]),
            )
            for category in DEFAULT_CATEGORIES
        ),
    )


def compute_ranking(config: EVConfig) -> None:
    """Rank candidate actions for the current snapshot."""

    st.session_state.ranking_error = None
    st.session_state.ranking_result = None
    try:
        st.session_state.ranking_result = rank_actions(build_snapshot(), config=config)
    except ValueError as exc:
        st.session_state.ranking_error = str(exc)


def ranking_frame(result: RankingResult) -> pd.DataFrame:
    """Tabulate evaluations in ranked order."""

    return pd.DataFrame(
        {
            "action": [describe_action(item.action) for item in result.evaluations],
            "cost": [item.cost for item in result.evaluations],
            "expected_points": [item.point_gain for item in result.evaluations],
            "tier_bonuses": [item.tier_crossings for item in result.evaluations],
            "ratio": [item.ratio for item in result.evaluations],
            "note": [item.reason or "" for item in result.evaluations],
        }
    )


def render_ranking_summary(result: RankingResult) -> None:
    """Render the recommendation, table and ratio chart."""

    with st.container(border=True):
        st.markdown("**Ranking**")
        top = best_action(result)
        if top is None:
            st.error("No affordable action right now.")
        else:
            col1, col2 = st.columns(2)
            col1.metric("Best action", describe_action(top.action))
            col2.metric("Points per Starcoin", f"{top.ratio:.3f}")
        st.caption(f"Evaluated in {result.compute_seconds * 1000:.2f} ms")

        frame = ranking_frame(result)
        st.dataframe(frame, hide_index=True, use_container_width=True)

        chart = alt.Chart(frame).mark_bar(
            color="#6366f1",
            opacity=0.9,
            cornerRadiusTopRight=2,
            cornerRadiusBottomRight=2,
        ).encode(
            x=alt.X("ratio:Q", title="Expected points per Starcoin"),
            y=alt.Y("action:N", sort="-x", title=None),
            tooltip=[
                alt.Tooltip("action:N", title="Action"),
                alt.Tooltip("cost:Q", title="Cost", format=".0f"),
                alt.Tooltip("expected_points:Q", title="Expected points", format=".1f"),
                alt.Tooltip("ratio:Q", title="Ratio", format=".3f"),
            ],
        ).properties(height=260)
        chart = chart.configure_view(strokeOpacity=0)
        chart = chart.configure_axis(gridColor="#e2e8f0")
        st.altair_chart(chart, use_container_width=True)


def apply_page_styling() -> None:
    """Inject CSS tweaks that style the Streamlit app."""

    st.set_page_config(page_title="Upgrade EV Calculator", layout="centered")
    st.markdown(
        """
        <style>
        div[data-testid="stVerticalBlockBorderWrapper"] {
            border: 1px solid #e3e6eb;
            border-radius: 12px;
            padding: 1.25rem;
            background-color: #ffffff;
            margin-bottom: 1.25rem;
        }
        div[data-testid="stMetricValue"] {
            font-size: 1.6rem;
            font-weight: 600;
            color: #0f172a;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    ensure_session_state_defaults()

    st.title("Upgrade EV Calculator")
    preset_options = [PRESET_DEFAULT_LABEL] + sorted(CONFIG_PRESETS)
    st.selectbox(
        "Configuration preset",
        options=preset_options,
        key="selected_preset",
        on_change=on_preset_change,
    )
    config = selected_config()

    render_snapshot_inputs(config)

    if st.button("Rank actions", type="primary"):
        compute_ranking(config)

    result: Optional[RankingResult] = st.session_state.ranking_result
    if st.session_state.ranking_error:
        st.error(f"Ranking failed: {st.session_state.ranking_error}")
    elif isinstance(result, RankingResult):
        render_ranking_summary(result)


if __name__ == "__main__":
    main()

# src/ui/win_stats.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from src.config import settings
from src.core.miner_models import ChallengerProfile
from src.core.profile_registry import ProfileRegistry
from src.core.race_stats import (
    build_profile_comparison,
    challenger_share_with_ties,
    simulate_outcomes,
    summarise_tally,
)
from src.core.random_source import RandomSource
from src.ui.charts import render_profile_comparison_chart, render_win_rate_chart


@st.cache_data(show_spinner="Simulating rounds...")
def _simulate_summary(
    challenger_win_chance: float,
    profile_win_chance: float,
    trials: int,
    seed: int | None,
) -> tuple[pd.DataFrame, float]:
    tally = simulate_outcomes(
        challenger_win_chance, profile_win_chance, trials, RandomSource(seed)
    )
    summary = summarise_tally(tally, challenger_win_chance, profile_win_chance)
    return summary, challenger_share_with_ties(tally)


@st.cache_data(show_spinner="Simulating every miner...")
def _simulate_comparison(
    _registry: ProfileRegistry,
    _challenger: ChallengerProfile,
    profile_keys: tuple[str, ...],
    challenger_win_chance: float,
    trials: int,
    seed: int | None,
) -> pd.DataFrame:
    # Leading underscores keep the registry objects out of the cache key
    return build_profile_comparison(_registry, _challenger, trials, RandomSource(seed))


def render_win_stats_tab(
    registry: ProfileRegistry,
    challenger: ChallengerProfile,
    selected_key: str,
) -> None:
    """Batch simulation of many rounds, outside the animated race."""

    st.subheader("Win-rate statistics")
    st.caption(
        "Each round is settled exactly as in the arena: one draw per miner, "
        "plus a coin flip when both find a block."
    )

    profile = registry.get(selected_key)
    trials = st.number_input(
        "Rounds to simulate",
        min_value=1_000,
        max_value=1_000_000,
        value=settings.STATS_UI_TRIALS,
        step=10_000,
        key="stats_trials",
    )

    summary, tie_split_share = _simulate_summary(
        challenger.win_chance, profile.win_chance, int(trials), settings.RACE_SEED
    )
    render_win_rate_chart(summary, title=f"{challenger.label} vs {profile.label}")

    st.metric(
        f"{challenger.label} share (ties split evenly)",
        f"{tie_split_share * 100:.3f}%",
    )
    st.dataframe(
        summary.round(5),
        hide_index=True,
        width="stretch",
    )

    with st.expander("Compare every traditional miner", expanded=False):
        comparison = _simulate_comparison(
            registry,
            challenger,
            tuple(registry.keys()),
            challenger.win_chance,
            int(trials),
            settings.RACE_SEED,
        )
        render_profile_comparison_chart(comparison)
        st.dataframe(comparison, hide_index=True, width="stretch")

# src/ui/charts.py
from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.ui import style

_OUTCOME_LABELS = {
    "challenger": "PWC Miner wins",
    "profile": "Traditional miner wins",
    "no_winner": "No winner",
    "tie": "Both hit (tie-break)",
}


def build_win_rate_figure(df: pd.DataFrame, title: str = "Win rates per round") -> go.Figure:
    """
    Empirical vs closed-form rate for each outcome.

    Expected df columns (see race_stats.summarise_tally):
    - outcome, empirical_rate, expected_rate, ci_low, ci_high
    """
    required = {"outcome", "empirical_rate", "expected_rate", "ci_low", "ci_high"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Win-rate chart missing columns: {missing}")

    df_plot = df[df["outcome"] != "no_winner"].copy()
    labels = [_OUTCOME_LABELS.get(o, o) for o in df_plot["outcome"]]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=labels,
            y=df_plot["empirical_rate"] * 100,
            name="Simulated",
            marker_color=style.COLOR_CHALLENGER,
            opacity=style.BAR_ALPHA,
            error_y=dict(
                type="data",
                symmetric=False,
                array=(df_plot["ci_high"] - df_plot["empirical_rate"]) * 100,
                arrayminus=(df_plot["empirical_rate"] - df_plot["ci_low"]) * 100,
            ),
            hovertemplate="<b>%{x}</b><br>Simulated: %{y:.3f}%<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=labels,
            y=df_plot["expected_rate"] * 100,
            mode="markers",
            name="Expected",
            marker=dict(color=style.COLOR_EXPECTED, size=12, symbol="diamond"),
            hovertemplate="<b>%{x}</b><br>Expected: %{y:.3f}%<extra></extra>",
        )
    )
    fig.update_layout(
        title=title,
        yaxis_title="Rate per round (%)",
        barmode="group",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        margin=dict(l=40, r=20, t=60, b=40),
    )
    return fig


def build_profile_comparison_figure(df: pd.DataFrame) -> go.Figure:
    """Grouped bars: challenger vs profile win rate for every catalogue entry."""
    required = {"label", "challenger_rate", "profile_rate"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Comparison chart missing columns: {missing}")

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["label"],
            y=df["challenger_rate"] * 100,
            name="PWC Miner",
            marker_color=style.COLOR_CHALLENGER,
            hovertemplate="<b>%{x}</b><br>PWC Miner: %{y:.3f}%<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            x=df["label"],
            y=df["profile_rate"] * 100,
            name="Traditional miner",
            marker_color=style.COLOR_PROFILE,
            hovertemplate="<b>%{x}</b><br>Traditional: %{y:.3f}%<extra></extra>",
        )
    )
    fig.update_layout(
        yaxis_title="Simulated win rate per round (%)",
        barmode="group",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig


def render_win_rate_chart(df: pd.DataFrame, title: str = "Win rates per round") -> None:
    st.plotly_chart(build_win_rate_figure(df, title=title), width="stretch")


def render_profile_comparison_chart(df: pd.DataFrame) -> None:
    st.plotly_chart(build_profile_comparison_figure(df), width="stretch")

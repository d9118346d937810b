# src/ui/race_arena.py
from __future__ import annotations

import streamlit as st

from src.config import settings
from src.core.miner_models import ChallengerProfile, MinerProfile
from src.core.outcome_resolver import Winner
from src.core.race_session import RaceSession
from src.core.race_state import Phase, RaceState
from src.ui import style


def format_win_rate(win_chance: float, decimals: int) -> str:
    return f"{win_chance * 100:.{decimals}f}%"


def winner_line(state: RaceState, challenger: ChallengerProfile) -> str:
    """Banner text for a finished race, e.g. '🤖 PWC Miner'."""
    if state.winner is Winner.CHALLENGER:
        return f"{style.ICON_CHALLENGER} {challenger.label}"
    if state.winner is Winner.PROFILE and state.profile is not None:
        return f"{style.ICON_PROFILE} {state.profile.label}"
    return f"{style.ICON_NO_WINNER} No Winner This Round"


def _progress_bar_html(progress: float, start_hex: str, end_hex: str) -> str:
    pct = max(0.0, min(progress, settings.PROGRESS_MAX))
    return (
        f'<div style="width:100%;background:{style.COLOR_TRACK};'
        f'border-radius:999px;height:{style.BAR_HEIGHT_PX}px;overflow:hidden">'
        f'<div style="width:{pct:.1f}%;height:100%;opacity:{style.BAR_ALPHA};'
        f'background:linear-gradient(90deg,{start_hex},{end_hex})"></div></div>'
    )


# ---------------------------------------------------------------------------
# UI: Profile selection
# ---------------------------------------------------------------------------
def render_profile_selection(session: RaceSession, state: RaceState) -> MinerProfile:
    """Render the traditional miner selector and its details card."""

    st.markdown("### Select your traditional miner")

    keys = session.registry.keys()
    col_select, col_card = st.columns(2)

    with col_select:
        selected_key = st.selectbox(
            "Traditional miner",
            options=keys,
            index=keys.index(session.selected_key),
            format_func=lambda key: session.registry.get(key).label,
            disabled=state.phase is Phase.RACING,
            key="race_profile_key",
        )
        session.select(selected_key)

    profile = session.registry.get(session.selected_key)
    with col_card:
        with st.container(border=True):
            st.markdown(f"**{profile.label}**")
            st.caption(profile.description)
            c1, c2 = st.columns(2)
            c1.metric("Hashrate", f"{profile.throughput_th:g} TH/s")
            c2.metric(
                "Win rate",
                format_win_rate(
                    profile.win_chance, settings.WIN_RATE_DISPLAY_DECIMALS_PROFILE
                ),
            )
    return profile


# ---------------------------------------------------------------------------
# UI: Arena
# ---------------------------------------------------------------------------
def _render_lane(
    title: str,
    subtitle: str,
    rate_label: str,
    detail: str,
    progress: float,
    colors: tuple[str, str],
) -> None:
    left, right = st.columns([3, 1])
    with left:
        st.markdown(f"**{title}**")
        st.caption(subtitle)
    with right:
        st.markdown(f"**Win Rate: {rate_label}**")
        st.caption(detail)
    st.markdown(_progress_bar_html(progress, *colors), unsafe_allow_html=True)


def render_race_arena(session: RaceSession, state: RaceState) -> None:
    """
    Lanes, controls and the result banner.

    ``state`` is the snapshot taken when the frame started, so the lanes,
    buttons and selector all agree on the phase.
    """
    challenger = session.driver.challenger
    profile = state.profile or session.registry.get(session.selected_key)
    racing = state.phase is Phase.RACING

    header, controls = st.columns([2, 1])
    with header:
        st.markdown(f"### {style.ICON_TROPHY} Block Race Arena")
    with controls:
        c_start, c_reset = st.columns(2)
        if c_start.button(
            "Racing..." if racing else "Start Race",
            disabled=racing,
            type="primary",
            key="race_start",
        ):
            session.start()
            st.rerun()
        if c_reset.button("Reset", key="race_reset"):
            session.reset()
            st.rerun()

    _render_lane(
        f"{style.ICON_CHALLENGER} {challenger.label} (AI Engine)",
        challenger.tagline,
        format_win_rate(
            challenger.win_chance, settings.WIN_RATE_DISPLAY_DECIMALS_CHALLENGER
        ),
        challenger.badge,
        state.progress_a,
        (style.COLOR_CHALLENGER, style.COLOR_CHALLENGER_END),
    )
    st.write("")
    _render_lane(
        f"{style.ICON_PROFILE} {profile.label}",
        profile.description,
        format_win_rate(profile.win_chance, settings.WIN_RATE_DISPLAY_DECIMALS_PROFILE),
        f"{profile.throughput_th:g} TH/s",
        state.progress_b,
        (style.COLOR_PROFILE, style.COLOR_PROFILE_END),
    )

    if state.phase is Phase.COMPLETE:
        with st.container(border=True):
            st.markdown(f"## {style.ICON_FLAG} Block Found!")
            st.markdown(f"#### Winner: {winner_line(state, challenger)}")
            if state.winner is not Winner.NONE:
                st.caption(
                    f"Block reward: {settings.BLOCK_REWARD_BTC:g} BTC + transaction fees"
                )

    if racing:
        st.info("Mining in progress...")


def render_scoreboard(session: RaceSession) -> None:
    board = session.scoreboard
    st.markdown("#### Session scoreboard")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Races", board.races)
    c2.metric(session.driver.challenger.label, board.challenger_wins)
    c3.metric("Traditional miners", board.profile_wins)
    c4.metric("No winner", board.no_winner)
    if board.wins_by_profile:
        st.caption(
            "Traditional wins: "
            + ", ".join(
                f"{session.registry.get(k).label} × {n}"
                for k, n in board.wins_by_profile.items()
                if k in session.registry
            )
        )
    if st.button("Clear scoreboard", key="race_clear_scoreboard"):
        board.clear()
        st.rerun()

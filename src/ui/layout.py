# src/ui/layout.py
from __future__ import annotations

import time

import streamlit as st

from src.config import settings
from src.config.env import APP_ENV, ENV_DEV
from src.core.race_session import RaceSession, new_session
from src.core.race_state import Phase
from src.ui.about_simulation import render_about_simulation
from src.ui.race_arena import (
    render_profile_selection,
    render_race_arena,
    render_scoreboard,
)
from src.ui.win_stats import render_win_stats_tab

SESSION_KEY = "race_session"


def get_race_session() -> RaceSession:
    """One race session per browser session, created on first use."""
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        session = new_session()
        st.session_state[SESSION_KEY] = session
    return session


def render_dashboard() -> None:
    st.title("PWC Miner vs Traditional Miners")
    st.caption(
        "Witness the future of Bitcoin mining! Our AI-powered PWC Miner uses "
        "quantum waveform collapse technology to compete against traditional "
        "mining hardware in a simulated block race."
    )

    session = get_race_session()
    # Pump once per frame before any widget reads the phase
    state = session.tick()

    if APP_ENV == ENV_DEV:
        st.sidebar.info(f"Dev profile set: {settings.DEV_PROFILE_SET}")
        if settings.RACE_SEED is not None:
            st.sidebar.caption(f"Race seed: {settings.RACE_SEED}")

    tab_race, tab_stats, tab_about = st.tabs(
        ["Block race", "Win-rate statistics", "About"]
    )

    with tab_race:
        render_profile_selection(session, state)
        st.divider()
        render_race_arena(session, state)
        st.divider()
        render_scoreboard(session)

    with tab_stats:
        render_win_stats_tab(
            session.registry, session.driver.challenger, session.selected_key
        )

    with tab_about:
        render_about_simulation(session.driver.challenger)

    # Streamlit has no timer loop of its own: keep redrawing while racing so
    # the session's scheduler is pumped every frame until the race completes.
    if state.phase is Phase.RACING:
        time.sleep(settings.UI_FRAME_INTERVAL_S)
        st.rerun()

from __future__ import annotations

import streamlit as st

from src.config import settings
from src.core.miner_models import ChallengerProfile


def render_about_simulation(challenger: ChallengerProfile) -> None:
    """Render the 'About this simulation' panel."""

    st.header("About this simulation")
    st.caption(
        "Nothing is mined here. Hashrates and win chances are fixed table "
        "values and every round is settled by a random draw."
    )

    col_ai, col_hw = st.columns(2)
    with col_ai:
        st.markdown(
            f"""
#### {challenger.label} technology

The PWC (Probabilistic Waveform Collapse) Miner represents next-generation
mining technology, utilizing quantum computing principles and AI optimization
to achieve superior efficiency in the Bitcoin mining process.
"""
        )
    with col_hw:
        st.markdown(
            """
#### Traditional mining hardware

These represent real-world Bitcoin mining hardware, from professional ASIC
miners to repurposed gaming equipment. Each has different hashrates and
corresponding probabilities of finding the next block.
"""
        )

    with st.expander("How a round is decided"):
        st.markdown(
            f"""
- Each miner gets one independent random draw; a draw below its win chance
  means it found the block.
- If both find it, a coin flip picks the winner.
- If neither does, there is no winner this round.
- The progress bars run for {settings.RACE_DURATION_MS / 1000:g} seconds and
  are for show only: the bar that fills first does not decide the result.
"""
        )

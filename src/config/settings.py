# src/config/settings.py

import os

from src.config.env import APP_ENV


def _optional_int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Dev-only profile catalogue selector: "prod" or "boundary"
DEV_PROFILE_SET = os.getenv("DEV_PROFILE_SET", "prod").lower()

# --- Challenger (PWC Miner) ---
CHALLENGER_LABEL = "PWC Miner"
CHALLENGER_WIN_CHANCE = 0.005
CHALLENGER_TAGLINE = "Quantum waveform collapse technology"
CHALLENGER_BADGE = "AI-Enhanced"

# Traditional miner preselected in the UI
DEFAULT_PROFILE_KEY = "s19"

# --- Race timing (milliseconds) ---
RACE_DURATION_MS = 3000
RACE_TICK_INTERVAL_MS = 100

# Per-tick lane increments, drawn uniformly from [low, high)
CHALLENGER_LANE_STEP_RANGE = (5.0, 20.0)
PROFILE_LANE_STEP_RANGE = (3.0, 15.0)
PROGRESS_MAX = 100.0

# Both miners hit: challenger wins when the third draw is below this
TIE_BREAK_THRESHOLD = 0.5

# Optional seed for the UI random source (unset = OS entropy)
RACE_SEED = _optional_int_env("RACE_SEED")

# Shown in the result banner; the simulation never pays anything out
BLOCK_REWARD_BTC = 6.25

# --- Win-rate statistics ---
STATS_DEFAULT_TRIALS = 100_000
STATS_UI_TRIALS = 20_000 if APP_ENV == "dev" else 100_000
STATS_Z_95 = 1.96

# --- UI refresh ---
# Streamlit redraw cadence while a race is running
UI_FRAME_INTERVAL_S = RACE_TICK_INTERVAL_MS / 1000.0
WIN_RATE_DISPLAY_DECIMALS_PROFILE = 3
WIN_RATE_DISPLAY_DECIMALS_CHALLENGER = 1

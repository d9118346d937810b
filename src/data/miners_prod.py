# src/data/miners_prod.py
from __future__ import annotations

from typing import Dict

from src.config import settings
from src.core.miner_models import ChallengerProfile, MinerProfile

# Production catalogue. Win chances are hand-authored per model and are not
# derived from hashrate (brains and lucky share odds with different blurbs).
PROFILES: Dict[str, MinerProfile] = {
    "s19": MinerProfile(
        key="s19",
        label="Antminer S19 Pro",
        throughput_th=110.0,
        win_chance=0.015,
        description="Professional ASIC miner with 110 TH/s hashrate",
    ),
    "avalon6": MinerProfile(
        key="avalon6",
        label="AvalonMiner 6",
        throughput_th=6.0,
        win_chance=0.001,
        description="Mid-range ASIC miner with 6 TH/s hashrate",
    ),
    "brains": MinerProfile(
        key="brains",
        label="Brains MM101",
        throughput_th=1.0,
        win_chance=0.0001,
        description="Entry-level ASIC miner with 1 TH/s hashrate",
    ),
    "lucky": MinerProfile(
        key="lucky",
        label="LuckyMiner 1 TH/s",
        throughput_th=1.0,
        win_chance=0.0001,
        description="Virtual mining hardware with 1 TH/s",
    ),
    "pc": MinerProfile(
        key="pc",
        label="ASUS ROG Strix Gaming",
        throughput_th=1.5,
        win_chance=0.0002,
        description="High-end gaming PC repurposed for mining",
    ),
}

CHALLENGER = ChallengerProfile(
    label=settings.CHALLENGER_LABEL,
    win_chance=settings.CHALLENGER_WIN_CHANCE,
    tagline=settings.CHALLENGER_TAGLINE,
    badge=settings.CHALLENGER_BADGE,
)

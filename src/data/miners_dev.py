# src/data/miners_dev.py
from __future__ import annotations

from typing import Dict

from src.core.miner_models import MinerProfile

# Boundary set for demos: one miner that never wins, one that nearly always does
BOUNDARY_PROFILES: Dict[str, MinerProfile] = {
    "never": MinerProfile(
        key="never",
        label="TestMake Dud (0 TH/s)",
        throughput_th=0.1,
        win_chance=0.0,
        description="Never finds a block. Useful for checking the no-winner banner.",
    ),
    "always": MinerProfile(
        key="always",
        label="TestMake Sure Thing",
        throughput_th=1000.0,
        win_chance=0.999,
        description="Finds a block almost every round. Exercises the tie-break.",
    ),
}


def get_dev_catalogue(key: str) -> Dict[str, MinerProfile]:
    """Return the requested dev profile catalogue."""
    normalized = (key or "").strip().lower()
    if normalized == "boundary":
        return BOUNDARY_PROFILES
    # Allow dev environments to surface the full production catalogue.
    from src.data import miners_prod

    return miners_prod.PROFILES

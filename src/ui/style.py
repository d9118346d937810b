# src/ui/style.py

from __future__ import annotations

"""
UI / visual style constants for the race arena.

Keep anything purely presentational in here (colours, icons, copy),
and keep race / modelling constants in src/config/settings.py.
"""

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

COLOR_CHALLENGER = "#7c3aed"  # purple -> blue gradient in the arena
COLOR_CHALLENGER_END = "#2563eb"
COLOR_PROFILE = "#059669"  # emerald -> teal
COLOR_PROFILE_END = "#0d9488"
COLOR_NO_WINNER = "#9ca3af"
COLOR_TRACK = "#1e293b"
COLOR_EXPECTED = "#F7931A"  # bitcoin orange for closed-form rates

BAR_HEIGHT_PX = 16
BAR_ALPHA = 0.85

# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------

ICON_CHALLENGER = "🤖"
ICON_PROFILE = "⚙️"
ICON_NO_WINNER = "⚡"
ICON_TROPHY = "🏆"
ICON_FLAG = "🏁"

"""
XP and Leveling System

Level derivation, level titles and per-completion XP.

Leveling Curve (exponential):
- XP to go from level L to L+1 is floor(100 * 1.5^(L-1))
- Level 1 -> 2: 100 XP, level 2 -> 3: 150 XP, level 3 -> 4: 225 XP, ...

XP Award Rules:
- Any habit completion: 25 XP (base)
- Combo bonus: floor(25 * min(combo * 0.1, 1)), capped at +25 from combo 10
- Achievement unlocks: the achievement's xp_reward
"""

from typing import Tuple
import math
import logging

from habitflow.models.game_state import XPProgress

logger = logging.getLogger(__name__)

BASE_COMPLETION_XP = 25
COMBO_BONUS_STEP = 0.1

LEVEL_TITLES = [
    "Beginner",      # 1-5
    "Apprentice",    # 6-10
    "Dedicated",     # 11-15
    "Committed",     # 16-20
    "Disciplined",   # 21-25
    "Master",        # 26-30
    "Grandmaster",   # 31-35
    "Legend",        # 36-40
    "Mythic",        # 41-45
    "Transcendent",  # 46+
]


def xp_for_level(level: int) -> int:
    """XP needed to advance from `level` to `level + 1`"""
    return math.floor(100 * math.pow(1.5, level - 1))


def cumulative_xp_for_level(level: int) -> int:
    """Total XP spent on levels 1..level-1, i.e. the XP at which `level` starts"""
    return sum(xp_for_level(i) for i in range(1, level))


def level_from_xp(xp: int) -> int:
    """Largest level whose starting XP is <= xp (always >= 1)"""
    level = 1
    total = 0
    while total + xp_for_level(level) <= xp:
        total += xp_for_level(level)
        level += 1
    return level


def xp_progress(xp: int) -> XPProgress:
    """
    Progress through the current level

    Returns:
        XPProgress(current, required, percentage) where
        current + cumulative_xp_for_level(level_from_xp(xp)) == xp
    """
    level = level_from_xp(xp)
    current = xp - cumulative_xp_for_level(level)
    required = xp_for_level(level)
    # Round half up, matching what the clients display
    percentage = math.floor(current / required * 100 + 0.5)
    return XPProgress(current=current, required=required, percentage=percentage)


def level_title(level: int) -> str:
    """Tier name, one band per five levels, clamped at the top tier"""
    index = min(max((level - 1) // 5, 0), len(LEVEL_TITLES) - 1)
    return LEVEL_TITLES[index]


def combo_bonus_xp(combo: int) -> int:
    """Bonus XP for the n-th completion in a row"""
    return math.floor(BASE_COMPLETION_XP * min(combo * COMBO_BONUS_STEP, 1))


def calculate_completion_xp(combo: int) -> Tuple[int, int]:
    """
    XP for one completion before achievement rewards

    Returns:
        (base_xp, combo_bonus)
    """
    return BASE_COMPLETION_XP, combo_bonus_xp(combo)

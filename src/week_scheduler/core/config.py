"""
Configuration constants for the weekly plan model.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# GOAL CLASSIFICATION
# =============================================================================

# Ordered keyword groups; the first group with a substring hit wins.
GOAL_KEYWORDS: Final[list[tuple[str, tuple[str, ...]]]] = [
    ("strength", ("strength", "strong")),
    ("endurance", ("endurance",)),
    ("recomposition", ("recomp",)),
    ("hypertrophy", ("hypertrophy", "muscle")),
]

DEFAULT_ARCHETYPE: Final[str] = "general"
UNKNOWN_GOAL: Final[str] = "unknown"  # Goal text used when nothing is stored

# =============================================================================
# WEEKLY PATTERNS
# =============================================================================

REST_DAY: Final[str] = "Rest"

BASE_PATTERNS: Final[dict[str, list[str]]] = {
    # Lower frequency, more recovery
    "strength": ["Push", "Pull", "Legs", "Rest", "Push", "Rest", "Legs"],
    # Higher frequency PPL x2 + rest
    "hypertrophy": ["Push", "Pull", "Legs", "Push", "Pull", "Legs", "Rest"],
    # Two strength splits around conditioning
    "endurance": ["Conditioning", "Upper", "Conditioning", "Lower", "Conditioning", "Upper", "Rest"],
    "recomposition": ["Push", "Pull", "Legs", "Conditioning", "Upper", "Lower", "Rest"],
    "general": ["Push", "Pull", "Legs", "Push", "Pull", "Legs", "Rest"],
}

# =============================================================================
# PLAN HORIZON
# =============================================================================

MIN_PLAN_DAYS: Final[int] = 1
MAX_PLAN_DAYS: Final[int] = 14
DEFAULT_PLAN_DAYS: Final[int] = 7

# =============================================================================
# INTENSITY / VOLUME BASES
# =============================================================================

BASE_INTENSITY: Final[dict[str, float]] = {
    "strength": 0.80,
    "hypertrophy": 0.65,
    "endurance": 0.60,
    "recomposition": 0.70,
    "general": 0.70,
}

BASE_VOLUME: Final[dict[str, int]] = {  # Hard sets per session
    "strength": 10,
    "hypertrophy": 14,
    "endurance": 8,
    "recomposition": 12,
    "general": 12,
}

DEFAULT_EXPERIENCE: Final[str] = "intermediate"

EXPERIENCE_INTENSITY_SHIFT: Final[dict[str, float]] = {
    "beginner": -0.05,
    "intermediate": 0.0,
    "advanced": 0.05,
}

EXPERIENCE_VOLUME_SHIFT: Final[dict[str, int]] = {
    "beginner": -2,
    "intermediate": 0,
    "advanced": 2,
}

HIGH_FREQUENCY_DAYS: Final[int] = 5  # day_count >= this: +1 set
LOW_FREQUENCY_DAYS: Final[int] = 3  # day_count <= this: -1 set
BASE_VOLUME_FLOOR: Final[int] = 6

# =============================================================================
# ADHERENCE MODULATION
# =============================================================================

LOOKBACK_DAYS: Final[int] = 7

HIGH_ADHERENCE_SESSIONS: Final[int] = 5  # >= this: progress
LOW_ADHERENCE_SESSIONS: Final[int] = 2  # <= this: back off

HIGH_ADHERENCE_VOLUME_FACTOR: Final[float] = 1.1
LOW_ADHERENCE_VOLUME_FACTOR: Final[float] = 0.9
HIGH_ADHERENCE_INTENSITY_ADJ: Final[float] = 0.02
LOW_ADHERENCE_INTENSITY_ADJ: Final[float] = -0.02

BASE_WEIGHT: Final[float] = 0.7  # Share of the model volume in the blend
HISTORY_WEIGHT: Final[float] = 0.3  # Share of last week's average volume

# =============================================================================
# PRESCRIPTION CLAMPS
# =============================================================================

INTENSITY_MIN: Final[float] = 0.55
INTENSITY_MAX: Final[float] = 0.85
VOLUME_MIN: Final[int] = 6
VOLUME_MAX: Final[int] = 24

# =============================================================================
# PERSISTENCE
# =============================================================================

NOTES_CREATED: Final[str] = "auto-generated"
NOTES_REFRESHED: Final[str] = "auto-generated (refresh)"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(10.5) == 10); plan volumes
    must round 10.5 up to 11.
    """
    import math

    return int(math.floor(value + 0.5))

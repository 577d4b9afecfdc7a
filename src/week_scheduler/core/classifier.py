"""
Goal classification.

Maps free-text or enumerated goals onto a fixed set of training archetypes.
"""

from .config import DEFAULT_ARCHETYPE, GOAL_KEYWORDS
from .models import TrainingArchetype


def classify_goal(raw_goal: str | None) -> TrainingArchetype:
    """
    Classify a goal string into a training archetype.

    Matching is case-insensitive and substring-based against the ordered
    keyword groups in GOAL_KEYWORDS; the first matching group wins.

    Args:
        raw_goal: Free-text goal, e.g. "Get much stronger" or "hypertrophy"

    Returns:
        Archetype name, "general" when nothing matches
    """
    if not raw_goal:
        return DEFAULT_ARCHETYPE  # type: ignore[return-value]

    text = raw_goal.lower()
    for archetype, keywords in GOAL_KEYWORDS:
        if any(k in text for k in keywords):
            return archetype  # type: ignore[return-value]

    return DEFAULT_ARCHETYPE  # type: ignore[return-value]

"""
Weekly day-type patterns.

Each archetype has a canonical 7-day pattern.  Requests for other lengths
tile the pattern by index modulo its length: shorter weeks truncate it,
longer ones wrap around.
"""

from .config import BASE_PATTERNS, MAX_PLAN_DAYS, MIN_PLAN_DAYS


def get_base_pattern(archetype: str) -> list[str]:
    """
    Get the canonical 7-day pattern for an archetype.

    Args:
        archetype: Training archetype

    Returns:
        Copy of the base pattern (general for unknown archetypes)
    """
    return list(BASE_PATTERNS.get(archetype, BASE_PATTERNS["general"]))


def pattern_for(archetype: str, day_count: int) -> list[str]:
    """
    Day-type labels for a plan of day_count days.

    Args:
        archetype: Training archetype
        day_count: Days to plan, already clamped to [1, 14]

    Returns:
        List of exactly day_count labels, base[i % len(base)]

    Raises:
        ValueError: If day_count is outside [1, 14]
    """
    if not MIN_PLAN_DAYS <= day_count <= MAX_PLAN_DAYS:
        raise ValueError(
            f"day_count must be in [{MIN_PLAN_DAYS}, {MAX_PLAN_DAYS}], got {day_count}"
        )

    base = get_base_pattern(archetype)
    return [base[i % len(base)] for i in range(day_count)]


def clamp_day_count(day_count: int) -> int:
    """Clamp a requested day count into [1, 14]."""
    return max(MIN_PLAN_DAYS, min(MAX_PLAN_DAYS, day_count))

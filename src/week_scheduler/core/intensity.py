"""
Base intensity and volume lookups.

Pure functions of (archetype, experience[, day_count]).  Intensity is a
0-1 fraction of the effort ceiling; volume is hard sets per session.
"""

from .config import (
    BASE_INTENSITY,
    BASE_VOLUME,
    BASE_VOLUME_FLOOR,
    DEFAULT_ARCHETYPE,
    EXPERIENCE_INTENSITY_SHIFT,
    EXPERIENCE_VOLUME_SHIFT,
    HIGH_FREQUENCY_DAYS,
    LOW_FREQUENCY_DAYS,
)


def base_intensity(archetype: str, experience: str) -> float:
    """
    Base target intensity for an archetype and experience level.

    beginner lowers the archetype base by 0.05, advanced raises it by 0.05.

    Args:
        archetype: Training archetype
        experience: "beginner" | "intermediate" | "advanced"

    Returns:
        Intensity fraction rounded to 2 decimals
    """
    base = BASE_INTENSITY.get(archetype, BASE_INTENSITY[DEFAULT_ARCHETYPE])
    return round(base + EXPERIENCE_INTENSITY_SHIFT.get(experience, 0.0), 2)


def base_volume(archetype: str, experience: str, day_count: int) -> int:
    """
    Base hard-set volume per session.

    Experience shifts the archetype base by -2/+2 (beginner/advanced).
    Frequent weeks (>= 5 days) add one set, sparse weeks (<= 3 days)
    remove one.  Never below 6.

    Args:
        archetype: Training archetype
        experience: "beginner" | "intermediate" | "advanced"
        day_count: Planned day count

    Returns:
        Hard sets per session
    """
    volume = BASE_VOLUME.get(archetype, BASE_VOLUME[DEFAULT_ARCHETYPE])
    volume += EXPERIENCE_VOLUME_SHIFT.get(experience, 0)

    if day_count >= HIGH_FREQUENCY_DAYS:
        volume += 1
    elif day_count <= LOW_FREQUENCY_DAYS:
        volume -= 1

    return max(BASE_VOLUME_FLOOR, volume)

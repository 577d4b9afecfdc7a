"""
Adherence modulation.

Uses the workouts logged in the week before a plan's start date as a
completion proxy and nudges volume and intensity up or down.  The 70/30
blend with last week's average volume is the only place history reaches
the plan; nothing is remembered between calls.
"""

from datetime import datetime, timedelta

from .config import (
    BASE_WEIGHT,
    HIGH_ADHERENCE_INTENSITY_ADJ,
    HIGH_ADHERENCE_SESSIONS,
    HIGH_ADHERENCE_VOLUME_FACTOR,
    HISTORY_WEIGHT,
    LOOKBACK_DAYS,
    LOW_ADHERENCE_INTENSITY_ADJ,
    LOW_ADHERENCE_SESSIONS,
    LOW_ADHERENCE_VOLUME_FACTOR,
    round_half_up,
)
from .models import AdherenceSignal, Modulation, WorkoutRecord


def lookback_window(start_date: str) -> tuple[str, str]:
    """
    Inclusive date range of the 7 days immediately before start_date.

    Args:
        start_date: Plan start (YYYY-MM-DD)

    Returns:
        (first_day, last_day) as ISO strings
    """
    start = datetime.strptime(start_date, "%Y-%m-%d")
    first = start - timedelta(days=LOOKBACK_DAYS)
    last = start - timedelta(days=1)
    return first.strftime("%Y-%m-%d"), last.strftime("%Y-%m-%d")


def adherence_signal(rows: list[WorkoutRecord]) -> AdherenceSignal:
    """
    Summarize the lookback window.

    Args:
        rows: Workout rows inside the lookback window

    Returns:
        AdherenceSignal with row count and mean stored target_volume
    """
    if not rows:
        return AdherenceSignal(session_count=0, average_volume=0.0)

    total = sum(r.target_volume or 0 for r in rows)
    return AdherenceSignal(
        session_count=min(len(rows), LOOKBACK_DAYS),
        average_volume=total / len(rows),
    )


def modulate(session_count: int, average_volume: float, base_volume: int) -> Modulation:
    """
    Adjust the base prescription from last week's adherence.

    - session_count >= 5: volume x1.1, intensity +0.02
    - session_count <= 2: volume x0.9, intensity -0.02
    - otherwise unchanged

    With history (average_volume > 0) the volume is blended 70/30 with the
    historical average before the factor is applied.

    Args:
        session_count: Workouts logged in the lookback window
        average_volume: Mean target_volume over those workouts
        base_volume: Volume from the intensity/volume model

    Returns:
        Modulation with factor, intensity adjustment and blended volume
    """
    if session_count >= HIGH_ADHERENCE_SESSIONS:
        volume_factor = HIGH_ADHERENCE_VOLUME_FACTOR
        intensity_adjustment = HIGH_ADHERENCE_INTENSITY_ADJ
    elif session_count <= LOW_ADHERENCE_SESSIONS:
        volume_factor = LOW_ADHERENCE_VOLUME_FACTOR
        intensity_adjustment = LOW_ADHERENCE_INTENSITY_ADJ
    else:
        volume_factor = 1.0
        intensity_adjustment = 0.0

    if average_volume > 0:
        blended = round_half_up(
            (base_volume * BASE_WEIGHT + average_volume * HISTORY_WEIGHT) * volume_factor
        )
    else:
        blended = round_half_up(base_volume * volume_factor)

    return Modulation(
        volume_factor=volume_factor,
        intensity_adjustment=intensity_adjustment,
        blended_volume=blended,
    )

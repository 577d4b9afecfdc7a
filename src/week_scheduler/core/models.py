"""
Data models for week-scheduler.

All core dataclasses representing requests, persisted rows, and plans.
Dates are ISO strings (YYYY-MM-DD) throughout, matching the stored rows.
"""

from dataclasses import dataclass, field
from typing import Literal

from .config import REST_DAY

TrainingArchetype = Literal["strength", "hypertrophy", "endurance", "recomposition", "general"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]

ARCHETYPES: tuple[str, ...] = ("strength", "hypertrophy", "endurance", "recomposition", "general")
EXPERIENCE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re
    from datetime import datetime

    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass(frozen=True)
class SetTemplate:
    """
    One movement prescription for a training day.

    Derived purely from (day_type, experience); carries no identity of its own.
    """

    movement: str
    target_sets: int
    target_reps: int
    target_rpe: float

    def __post_init__(self) -> None:
        """Validate template data."""
        if not self.movement:
            raise ValueError("movement must be non-empty")
        if self.target_sets < 1:
            raise ValueError("target_sets must be at least 1")
        if self.target_reps < 1:
            raise ValueError("target_reps must be at least 1")
        if not 0 < self.target_rpe <= 10:
            raise ValueError("target_rpe must be in (0, 10]")


@dataclass
class WorkoutRecord:
    """
    A persisted workout row.

    At most one record exists per (user_id, workout_date).
    target_intensity is None for rest markers and user-logged rows without one.
    """

    user_id: str
    workout_date: str  # ISO format: YYYY-MM-DD
    type: str
    target_intensity: float | None = None
    target_volume: int = 0
    notes: str | None = None
    goal_type: str | None = None
    experience_level: str | None = None
    plan_id: str | None = None
    id: str = ""  # Assigned by the store on insert

    def __post_init__(self) -> None:
        """Validate workout data."""
        if not self.user_id:
            raise ValueError("user_id must be non-empty")
        _validate_date(self.workout_date)
        if self.target_volume < 0:
            raise ValueError("target_volume must be non-negative")
        if self.target_intensity is not None and not 0 <= self.target_intensity <= 1:
            raise ValueError("target_intensity must be in [0, 1]")


@dataclass
class SetRecord:
    """A persisted set row, owned by one workout and replaced with it."""

    workout_id: str
    position: int
    movement: str
    target_sets: int
    target_reps: int
    target_rpe: float

    def to_template(self) -> SetTemplate:
        """Drop the ownership fields."""
        return SetTemplate(
            movement=self.movement,
            target_sets=self.target_sets,
            target_reps=self.target_reps,
            target_rpe=self.target_rpe,
        )


@dataclass(frozen=True)
class AdherenceSignal:
    """
    Summary of the lookback window before a plan's start date.

    Computed per request and discarded afterwards.
    """

    session_count: int  # 0-7
    average_volume: float  # 0 when there is no history


@dataclass(frozen=True)
class Modulation:
    """Adherence-driven adjustments applied to the base prescription."""

    volume_factor: float
    intensity_adjustment: float
    blended_volume: int


@dataclass
class WeekRequest:
    """
    A parsed generate-week request.

    Every field is optional; the synthesizer resolves defaults.
    """

    user_id: str | None = None
    start_date: str | None = None  # None = today
    days: int | None = None  # None = DEFAULT_PLAN_DAYS
    goal: str | None = None  # None = stored goal
    experience_level: ExperienceLevel = "intermediate"
    plan_id: str | None = None

    def __post_init__(self) -> None:
        """Validate request data."""
        if self.start_date is not None:
            _validate_date(self.start_date)
        if self.experience_level not in EXPERIENCE_LEVELS:
            raise ValueError(f"Invalid experience_level: {self.experience_level}")


@dataclass
class DayPrescription:
    """
    One synthesized day of the week.

    Rest days carry target_intensity=None, target_volume=0 and no sets.
    existed is True when the day's row was updated rather than created.
    """

    workout_date: str  # ISO format: YYYY-MM-DD
    type: str
    target_intensity: float | None
    target_volume: int
    existed: bool
    sets: list[SetTemplate] = field(default_factory=list)

    @property
    def is_rest(self) -> bool:
        return self.type == REST_DAY

    @property
    def total_sets(self) -> int:
        """Sum of prescribed sets across all movements."""
        return sum(s.target_sets for s in self.sets)


@dataclass
class WeekPlan:
    """
    Result of one generate-week call: the resolved inputs and every day.
    """

    user_id: str
    start_date: str
    days: int
    goal_type: TrainingArchetype
    goal_text: str
    experience_level: ExperienceLevel
    plan_id: str | None
    adherence: AdherenceSignal
    modulation: Modulation
    created: list[DayPrescription] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        """Number of non-rest days that produced a new row."""
        return sum(1 for d in self.created if not d.is_rest and not d.existed)

    @property
    def updated_count(self) -> int:
        """Number of non-rest days that refreshed an existing row."""
        return sum(1 for d in self.created if not d.is_rest and d.existed)

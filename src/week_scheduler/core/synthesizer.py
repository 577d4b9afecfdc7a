"""
Weekly plan synthesis.

Combines goal classification, the weekly pattern, the intensity/volume
model and adherence modulation into one week of prescriptions, then syncs
each training day into the workout store.

Sync is idempotent per day: a day that already has a workout row for the
user is updated in place and its sets are replaced; otherwise a row is
inserted.  Rest days are never written.  There is no transaction around
the week: a write error aborts the loop and leaves earlier days committed,
and re-running the same request reconciles them.
"""

from datetime import datetime, timedelta

from loguru import logger

from ..io.serializers import ValidationError
from ..io.workout_store import StoreError, WorkoutStore
from .adherence import adherence_signal, lookback_window, modulate
from .classifier import classify_goal
from .config import (
    DEFAULT_PLAN_DAYS,
    INTENSITY_MAX,
    INTENSITY_MIN,
    NOTES_CREATED,
    NOTES_REFRESHED,
    REST_DAY,
    UNKNOWN_GOAL,
    VOLUME_MAX,
    VOLUME_MIN,
    clamp,
)
from .intensity import base_intensity, base_volume
from .models import AdherenceSignal, DayPrescription, WeekPlan, WeekRequest, WorkoutRecord
from .patterns import clamp_day_count, pattern_for
from .templates import templates_for


class UnauthorizedError(Exception):
    """Raised when no user id can be resolved for a request."""

    pass


def resolve_user_id(request: WeekRequest, auth_user_id: str | None) -> str:
    """
    Pick the request's user id, else the authenticated session's.

    Raises:
        UnauthorizedError: If neither yields an id
    """
    user_id = request.user_id or auth_user_id
    if not user_id:
        raise UnauthorizedError("Missing user_id or auth")
    return user_id


def resolve_goal_text(store: WorkoutStore, user_id: str, goal_override: str | None) -> str:
    """
    Goal text for classification: override, else stored goal, else "unknown".

    A failing goal lookup is treated as "no goal stored".
    """
    if goal_override:
        return goal_override
    try:
        stored = store.load_goal(user_id)
    except (StoreError, ValidationError) as e:
        logger.warning(f"Goal lookup failed for {user_id}, using '{UNKNOWN_GOAL}': {e}")
        stored = None
    return stored or UNKNOWN_GOAL


def load_adherence(store: WorkoutStore, user_id: str, start_date: str) -> AdherenceSignal:
    """
    Adherence signal for the 7 days before start_date.

    A failing history read is treated as an empty window.
    """
    first, last = lookback_window(start_date)
    try:
        rows = store.list_workouts(user_id, first, last)
    except (StoreError, ValidationError) as e:
        logger.warning(f"History lookup failed for {user_id}, assuming no history: {e}")
        rows = []
    return adherence_signal(rows)


def sync_day(
    store: WorkoutStore,
    user_id: str,
    day: DayPrescription,
    goal_type: str,
    experience: str,
    plan_id: str | None,
) -> DayPrescription:
    """
    Upsert one training day by (user_id, workout_date) and replace its sets.

    Args:
        store: Workout store
        user_id: Owner of the row
        day: Prescription to persist (existed is set here)
        goal_type: Resolved archetype, stored on the row
        experience: Experience level, stored on the row
        plan_id: Optional plan tag; an existing row keeps its tag when None

    Returns:
        The same day with existed filled in

    Raises:
        StoreError: On any write failure
    """
    existing = store.find_workout(user_id, day.workout_date)

    if existing is not None:
        fields = dict(
            type=day.type,
            target_intensity=day.target_intensity,
            target_volume=day.target_volume,
            notes=NOTES_REFRESHED,
            goal_type=goal_type,
            experience_level=experience,
        )
        if plan_id is not None:
            fields["plan_id"] = plan_id
        store.update_workout(existing.id, **fields)
        store.replace_sets(existing.id, day.sets)
        day.existed = True
    else:
        record = store.insert_workout(
            WorkoutRecord(
                user_id=user_id,
                workout_date=day.workout_date,
                type=day.type,
                target_intensity=day.target_intensity,
                target_volume=day.target_volume,
                notes=NOTES_CREATED,
                goal_type=goal_type,
                experience_level=experience,
                plan_id=plan_id,
            )
        )
        store.replace_sets(record.id, day.sets)
        day.existed = False

    logger.debug(
        f"{day.workout_date} {day.type}: {'updated' if day.existed else 'created'} "
        f"(intensity={day.target_intensity}, volume={day.target_volume}, sets={len(day.sets)})"
    )
    return day


def generate_week(
    store: WorkoutStore,
    request: WeekRequest,
    auth_user_id: str | None = None,
    default_days: int = DEFAULT_PLAN_DAYS,
) -> WeekPlan:
    """
    Generate and persist one week of training days.

    Args:
        store: Workout store used for goal/history reads and day writes
        request: Parsed request; missing fields are resolved here
        auth_user_id: User id from the authenticated session, if any
        default_days: Day count when the request has none

    Returns:
        WeekPlan with one DayPrescription per requested day

    Raises:
        UnauthorizedError: If no user id can be resolved (nothing is written)
        StoreError: If a write fails (earlier days stay committed)
    """
    user_id = resolve_user_id(request, auth_user_id)

    goal_text = resolve_goal_text(store, user_id, request.goal)
    goal_type = classify_goal(goal_text)
    experience = request.experience_level

    day_count = clamp_day_count(request.days if request.days is not None else default_days)
    start_date = request.start_date or datetime.now().strftime("%Y-%m-%d")

    signal = load_adherence(store, user_id, start_date)

    pattern = pattern_for(goal_type, day_count)
    intensity = base_intensity(goal_type, experience)
    volume = base_volume(goal_type, experience, day_count)
    modulation = modulate(signal.session_count, signal.average_volume, volume)

    target_intensity = round(
        clamp(intensity + modulation.intensity_adjustment, INTENSITY_MIN, INTENSITY_MAX), 2
    )
    target_volume = int(clamp(modulation.blended_volume, VOLUME_MIN, VOLUME_MAX))

    logger.info(
        f"Generating {day_count} days for {user_id} from {start_date}: "
        f"goal={goal_type} ({goal_text!r}), experience={experience}, "
        f"last week {signal.session_count} sessions @ {signal.average_volume:.1f} sets"
    )

    start = datetime.strptime(start_date, "%Y-%m-%d")
    days: list[DayPrescription] = []

    for i, day_type in enumerate(pattern):
        date_str = (start + timedelta(days=i)).strftime("%Y-%m-%d")

        if day_type == REST_DAY:
            days.append(
                DayPrescription(
                    workout_date=date_str,
                    type=day_type,
                    target_intensity=None,
                    target_volume=0,
                    existed=True,
                )
            )
            continue

        day = DayPrescription(
            workout_date=date_str,
            type=day_type,
            target_intensity=target_intensity,
            target_volume=target_volume,
            existed=False,
            sets=templates_for(day_type, experience),
        )
        days.append(sync_day(store, user_id, day, goal_type, experience, request.plan_id))

    plan = WeekPlan(
        user_id=user_id,
        start_date=start_date,
        days=day_count,
        goal_type=goal_type,
        goal_text=goal_text,
        experience_level=experience,
        plan_id=request.plan_id,
        adherence=signal,
        modulation=modulation,
        created=days,
    )
    logger.info(f"Week for {user_id}: {plan.created_count} created, {plan.updated_count} updated")
    return plan

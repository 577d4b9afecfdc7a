"""
JSON serialization for week-scheduler models.

Handles conversion between dataclasses and JSON-compatible dicts, and the
lenient parsing of generate-week request bodies.
"""

import re
from datetime import datetime
from typing import Any

from loguru import logger

from ..core.config import DEFAULT_EXPERIENCE
from ..core.models import (
    EXPERIENCE_LEVELS,
    DayPrescription,
    SetRecord,
    SetTemplate,
    WeekPlan,
    WeekRequest,
    WorkoutRecord,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def workout_record_to_dict(record: WorkoutRecord) -> dict[str, Any]:
    """Convert WorkoutRecord to a JSON-compatible dict (one stored row)."""
    return {
        "id": record.id,
        "user_id": record.user_id,
        "workout_date": record.workout_date,
        "type": record.type,
        "target_intensity": record.target_intensity,
        "target_volume": record.target_volume,
        "notes": record.notes,
        "goal_type": record.goal_type,
        "experience_level": record.experience_level,
        "plan_id": record.plan_id,
    }


def dict_to_workout_record(data: dict[str, Any]) -> WorkoutRecord:
    """
    Convert a stored row to WorkoutRecord.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        validate_date(data["workout_date"])
        validate_non_negative(data.get("target_volume") or 0, "target_volume")
        intensity = data.get("target_intensity")
        return WorkoutRecord(
            id=str(data.get("id", "")),
            user_id=str(data["user_id"]),
            workout_date=data["workout_date"],
            type=str(data.get("type", "")),
            target_intensity=float(intensity) if intensity is not None else None,
            target_volume=int(data.get("target_volume") or 0),
            notes=data.get("notes"),
            goal_type=data.get("goal_type"),
            experience_level=data.get("experience_level"),
            plan_id=data.get("plan_id"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid workout row: {e}") from e


def set_record_to_dict(record: SetRecord) -> dict[str, Any]:
    """Convert SetRecord to a JSON-compatible dict (one stored row)."""
    return {
        "workout_id": record.workout_id,
        "position": record.position,
        "movement": record.movement,
        "target_sets": record.target_sets,
        "target_reps": record.target_reps,
        "target_rpe": record.target_rpe,
    }


def dict_to_set_record(data: dict[str, Any]) -> SetRecord:
    """
    Convert a stored row to SetRecord.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        validate_non_negative(data["target_sets"], "target_sets")
        validate_non_negative(data["target_reps"], "target_reps")
        return SetRecord(
            workout_id=str(data["workout_id"]),
            position=int(data.get("position", 0)),
            movement=str(data["movement"]),
            target_sets=int(data["target_sets"]),
            target_reps=int(data["target_reps"]),
            target_rpe=float(data["target_rpe"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid set row: {e}") from e


def set_template_to_dict(template: SetTemplate) -> dict[str, Any]:
    """Convert SetTemplate to dict."""
    return {
        "movement": template.movement,
        "target_sets": template.target_sets,
        "target_reps": template.target_reps,
        "target_rpe": template.target_rpe,
    }


def day_prescription_to_dict(day: DayPrescription, include_sets: bool = False) -> dict[str, Any]:
    """
    Convert DayPrescription to the response shape.

    Args:
        day: Day to convert
        include_sets: Also emit the day's set templates (CLI JSON output)

    Returns:
        Dict with workout_date, type, target_intensity, target_volume, existed
    """
    d: dict[str, Any] = {
        "workout_date": day.workout_date,
        "type": day.type,
        "target_intensity": day.target_intensity,
        "target_volume": day.target_volume,
        "existed": day.existed,
    }
    if include_sets:
        d["sets"] = [set_template_to_dict(s) for s in day.sets]
    return d


def week_plan_to_dict(plan: WeekPlan, include_sets: bool = False) -> dict[str, Any]:
    """Convert WeekPlan to the generate-week response payload."""
    return {
        "user_id": plan.user_id,
        "start_date": plan.start_date,
        "days": plan.days,
        "goal_type": plan.goal_type,
        "experience_level": plan.experience_level,
        "plan_id": plan.plan_id,
        "created": [day_prescription_to_dict(d, include_sets) for d in plan.created],
    }


def _optional_str(value: Any) -> str | None:
    """Non-empty stripped string or None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_start_date(value: Any) -> str | None:
    """Accept YYYY-MM-DD or a full ISO timestamp; keep the date part."""
    text = _optional_str(value)
    if text is None:
        return None
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    return validate_date(text)


def _parse_days(value: Any) -> int | None:
    """Accept ints, integral floats and digit strings."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"days must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.match(r"^-?\d+$", value.strip()):
        return int(value.strip())
    raise ValidationError(f"days must be an integer, got {value!r}")


def parse_week_request(body: Any) -> WeekRequest:
    """
    Parse a generate-week request body.

    A body that is not a JSON object is treated as an empty request.
    ``days`` takes precedence over ``training_days``.  Unknown experience
    levels fall back to "intermediate".

    Args:
        body: Decoded JSON body (anything)

    Returns:
        WeekRequest with unresolved defaults left as None

    Raises:
        ValidationError: If start_date or days cannot be interpreted
    """
    if not isinstance(body, dict):
        body = {}

    days = body.get("days")
    if days is None:
        days = body.get("training_days")

    experience = (_optional_str(body.get("experience_level")) or DEFAULT_EXPERIENCE).lower()
    if experience not in EXPERIENCE_LEVELS:
        logger.warning(f"Unknown experience_level {experience!r}; using {DEFAULT_EXPERIENCE}")
        experience = DEFAULT_EXPERIENCE

    return WeekRequest(
        user_id=_optional_str(body.get("user_id")),
        start_date=_parse_start_date(body.get("start_date")),
        days=_parse_days(days),
        goal=_optional_str(body.get("goal")),
        experience_level=experience,  # type: ignore[arg-type]
        plan_id=_optional_str(body.get("plan_id")),
    )

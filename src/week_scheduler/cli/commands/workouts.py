"""Workout commands: log-workout and delete-workout."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import WorkoutRecord
from ...io.serializers import ValidationError, validate_date
from ...io.workout_store import StoreError, WorkoutNotFoundError
from .. import views
from ..app import StoreDirOption, app, get_store


@app.command("log-workout")
def log_workout(
    user_id: Annotated[
        str,
        typer.Argument(help="User who trained"),
    ],
    workout_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Day type, e.g. Push, Legs, Conditioning"),
    ],
    volume: Annotated[
        int,
        typer.Option("--volume", "-V", help="Hard sets performed"),
    ],
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Workout date (YYYY-MM-DD, default: today)"),
    ] = None,
    intensity: Annotated[
        Optional[float],
        typer.Option("--intensity", "-i", help="Effort as a 0-1 fraction"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", help="Free-text notes"),
    ] = None,
    store_dir: StoreDirOption = None,
) -> None:
    """
    Record a workout for a date.

    Logged workouts count toward the next generated week's adherence.
    If a workout already exists on that date it is overwritten; changing
    its type also drops its prescribed sets.
    """
    if volume < 0:
        views.print_error("--volume must be non-negative")
        raise typer.Exit(1)
    if intensity is not None and not 0 <= intensity <= 1:
        views.print_error("--intensity must be between 0 and 1")
        raise typer.Exit(1)

    store = get_store(store_dir)

    try:
        date = validate_date(date) if date else datetime.now().strftime("%Y-%m-%d")
        store.init()
        existing = store.find_workout(user_id, date)
        if existing is not None:
            store.update_workout(
                existing.id,
                type=workout_type,
                target_volume=volume,
                target_intensity=intensity,
                notes=notes,
            )
            if workout_type != existing.type:
                # Prescribed movements belong to the old day type
                store.replace_sets(existing.id, [])
            views.print_success(f"Updated {date} ({workout_type}, {volume} sets) for {user_id}")
        else:
            store.insert_workout(
                WorkoutRecord(
                    user_id=user_id,
                    workout_date=date,
                    type=workout_type,
                    target_intensity=intensity,
                    target_volume=volume,
                    notes=notes,
                )
            )
            views.print_success(f"Logged {date} ({workout_type}, {volume} sets) for {user_id}")
    except (StoreError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command("delete-workout")
def delete_workout(
    user_id: Annotated[
        str,
        typer.Argument(help="Owner of the workout"),
    ],
    date: Annotated[
        str,
        typer.Argument(help="Workout date (YYYY-MM-DD)"),
    ],
    store_dir: StoreDirOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """
    Remove a workout and its sets.
    """
    store = get_store(store_dir)

    try:
        target = store.find_workout(user_id, validate_date(date))
    except (StoreError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if target is None:
        views.print_error(f"No workout for {user_id} on {date}")
        raise typer.Exit(1)

    views.console.print(f"Workout to delete: [bold]{target.workout_date}[/bold] ({target.type})")

    if not force and not views.confirm_action("Delete this workout?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    try:
        store.delete_workout(target.id)
    except (WorkoutNotFoundError, StoreError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Deleted workout {target.workout_date} ({target.type})")

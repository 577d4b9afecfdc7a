"""Planning commands: generate-week and show-week."""

import json
from datetime import datetime, timedelta
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_settings
from ...core.models import EXPERIENCE_LEVELS
from ...core.synthesizer import UnauthorizedError, generate_week
from ...io.serializers import (
    ValidationError,
    parse_week_request,
    set_record_to_dict,
    validate_date,
    week_plan_to_dict,
    workout_record_to_dict,
)
from ...io.workout_store import StoreError
from .. import views
from ..app import StoreDirOption, app, get_store


@app.command("generate-week")
def generate_week_command(
    user_id: Annotated[
        Optional[str],
        typer.Option("--user-id", "-u", help="User to plan for"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-d", help="First day (YYYY-MM-DD, default: today)"),
    ] = None,
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-n", help="Days to plan, clamped to 1-14 (default: 7)"),
    ] = None,
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="Goal text (default: stored goal)"),
    ] = None,
    experience: Annotated[
        Optional[str],
        typer.Option("--experience", "-e", help="beginner | intermediate | advanced"),
    ] = None,
    plan_id: Annotated[
        Optional[str],
        typer.Option("--plan-id", help="Tag applied to created/updated workouts"),
    ] = None,
    store_dir: StoreDirOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Generate a week of training days and sync them into the store.

    Existing workouts on the same dates are refreshed in place; rest days
    are not written.  Safe to re-run.
    """
    settings = load_settings()

    if experience is not None and experience.lower() not in EXPERIENCE_LEVELS:
        views.print_error(f"Invalid experience: {experience}. Must be one of {', '.join(EXPERIENCE_LEVELS)}")
        raise typer.Exit(1)

    store = get_store(store_dir)

    try:
        request = parse_week_request({
            "user_id": user_id,
            "start_date": start_date,
            "days": days,
            "goal": goal,
            "experience_level": experience or settings.default_experience,
            "plan_id": plan_id,
        })
        plan = generate_week(store, request, default_days=settings.default_days)
    except UnauthorizedError:
        views.print_error("No user given. Pass --user-id.")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(f"Invalid input: {e}")
        raise typer.Exit(1)
    except StoreError as e:
        views.print_error(str(e))
        views.print_info("Days before the failure were saved; re-run to finish the week.")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(week_plan_to_dict(plan, include_sets=True), indent=2))
        return

    views.print_week_plan(plan)


@app.command("show-week")
def show_week(
    user_id: Annotated[
        str,
        typer.Argument(help="User whose workouts to show"),
    ],
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", "-d", help="First day (YYYY-MM-DD, default: today)"),
    ] = None,
    days: Annotated[
        int,
        typer.Option("--days", "-n", help="Number of days to show"),
    ] = 7,
    store_dir: StoreDirOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show stored workouts and their sets for a date range.
    """
    store = get_store(store_dir)

    if days < 1:
        views.print_error("--days must be at least 1")
        raise typer.Exit(1)

    try:
        first = validate_date(start_date) if start_date else datetime.now().strftime("%Y-%m-%d")
        last = (datetime.strptime(first, "%Y-%m-%d") + timedelta(days=days - 1)).strftime("%Y-%m-%d")
        workouts = store.list_workouts(user_id, first, last)
        sets_by_workout = {w.id: store.load_sets(w.id) for w in workouts}
    except (StoreError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([
            {
                **workout_record_to_dict(w),
                "sets": [set_record_to_dict(s) for s in sets_by_workout[w.id]],
            }
            for w in workouts
        ], indent=2))
        return

    views.console.print(f"[bold]{user_id}[/bold]: {first} → {last}")
    views.print_workouts(workouts, sets_by_workout)

"""Profile commands: set-goal and show-goal."""

from typing import Annotated

import typer

from ...core.classifier import classify_goal
from ...io.workout_store import StoreError
from .. import views
from ..app import StoreDirOption, app, get_store


@app.command("set-goal")
def set_goal(
    user_id: Annotated[
        str,
        typer.Argument(help="User to update"),
    ],
    goal: Annotated[
        str,
        typer.Argument(help="Goal text, e.g. 'build muscle' or 'get stronger'"),
    ],
    store_dir: StoreDirOption = None,
) -> None:
    """
    Store a user's training goal.

    Used by generate-week when no --goal is given.
    """
    goal = goal.strip()
    if not goal:
        views.print_error("Goal must not be empty")
        raise typer.Exit(1)

    store = get_store(store_dir)
    try:
        store.save_goal(user_id, goal)
    except StoreError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Goal for {user_id}: {goal!r} → {classify_goal(goal)}")


@app.command("show-goal")
def show_goal(
    user_id: Annotated[
        str,
        typer.Argument(help="User to look up"),
    ],
    store_dir: StoreDirOption = None,
) -> None:
    """
    Show a user's stored goal and the archetype it maps to.
    """
    store = get_store(store_dir)
    try:
        goal = store.load_goal(user_id)
    except StoreError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if goal is None:
        views.print_info(f"No goal stored for {user_id} (plans use: {classify_goal(None)})")
        return

    views.console.print(f"{user_id}: {goal!r} → [cyan]{classify_goal(goal)}[/cyan]")

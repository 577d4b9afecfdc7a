"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.engine.config_loader import load_settings
from ..io.workout_store import WorkoutStore
from ..log import setup_logging

# Shared --store-dir option type used across all commands
StoreDirOption = Annotated[
    Optional[Path],
    typer.Option("--store-dir", "-s", help="Directory holding workouts.jsonl (default: ~/.week-scheduler)"),
]

app = typer.Typer(
    name="week-scheduler",
    help="Rule-based weekly training plan generator.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Weekly training plan generator.
    """
    setup_logging("DEBUG" if verbose else load_settings().log_level)


def get_store(store_dir: Path | None) -> WorkoutStore:
    """Get workout store from path or the configured default location."""
    if store_dir is None:
        store_dir = load_settings().store_dir
    return WorkoutStore(store_dir)

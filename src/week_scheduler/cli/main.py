"""
CLI entry point using Typer.

Provides commands for weekly plan management:
- generate-week: Generate and sync a week of training days
- show-week: Display stored workouts for a date range
- log-workout: Record a completed workout
- delete-workout: Remove a workout and its sets
- set-goal / show-goal: Manage the stored training goal
- serve: Run the HTTP API
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn
from loguru import logger

from .app import app, get_store
from .commands import planning, profile, workouts  # noqa: F401  (registers commands)


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Host to bind to"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = 8000,
    store_dir: Annotated[
        Optional[Path],
        typer.Option("--store-dir", "-s", help="Directory holding workouts.jsonl"),
    ] = None,
) -> None:
    """
    Run the HTTP API (POST /generate_week).
    """
    from ..api import create_app

    store = get_store(store_dir)
    logger.info(f"Starting API on {host}:{port} (store={store.store_dir})")
    uvicorn.run(create_app(store.store_dir), host=host, port=port)


if __name__ == "__main__":
    app()

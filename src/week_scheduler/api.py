"""
HTTP surface for generate-week.

handle_generate_week() is transport-agnostic: it takes a decoded body and
returns (status, payload).  create_app() wraps it in a FastAPI route.

Status mapping:
- 200: the full response payload
- 401: no user id in the body and none from the auth resolver
- 500: anything else, including a write failure after some days committed
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .core.engine.config_loader import load_settings
from .core.synthesizer import UnauthorizedError, generate_week
from .io.serializers import parse_week_request, week_plan_to_dict
from .io.workout_store import WorkoutStore

AuthResolver = Callable[[Request], str | None]


def handle_generate_week(
    store: WorkoutStore,
    body: Any,
    auth_user_id: str | None = None,
    default_days: int | None = None,
) -> tuple[int, dict[str, Any]]:
    """
    Run one generate-week request end to end.

    Args:
        store: Workout store
        body: Decoded request body; non-objects count as {}
        auth_user_id: User id from the authenticated session, if any
        default_days: Day count when the body has none

    Returns:
        (HTTP status, JSON payload)
    """
    try:
        request = parse_week_request(body)
        kwargs = {} if default_days is None else {"default_days": default_days}
        plan = generate_week(store, request, auth_user_id=auth_user_id, **kwargs)
    except UnauthorizedError as e:
        logger.warning(f"Rejected generate-week request: {e}")
        return 401, {"error": str(e)}
    except Exception as e:
        logger.exception(f"generate-week failed: {e}")
        return 500, {"error": str(e) or e.__class__.__name__}

    return 200, week_plan_to_dict(plan)


def _no_auth(_request: Request) -> str | None:
    return None


def create_app(
    store_dir: str | Path | None = None,
    auth_resolver: AuthResolver | None = None,
    default_days: int | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store_dir: Store directory (default: configured store)
        auth_resolver: Maps a request to the session user id; authentication
            itself happens upstream.  Default resolves nothing.
        default_days: Day count for bodies without one (default: configured
            default_days)

    Returns:
        FastAPI app exposing POST /generate_week
    """
    settings = load_settings()
    store = WorkoutStore(store_dir if store_dir is not None else settings.store_dir)
    days = default_days if default_days is not None else settings.default_days
    resolve_auth = auth_resolver or _no_auth

    app = FastAPI(title="week-scheduler")
    app.state.store = store
    app.state.default_days = days

    @app.post("/generate_week")
    async def generate_week_route(request: Request) -> JSONResponse:
        raw = await request.body()
        try:
            body = json.loads(raw) if raw else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Unparseable request body, treating as {}")
            body = {}

        status, payload = handle_generate_week(
            store, body, auth_user_id=resolve_auth(request), default_days=days
        )
        return JSONResponse(payload, status_code=status)

    return app

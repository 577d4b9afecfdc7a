"""
YAML → settings loader.

Loads runtime settings from an optional user file at
~/.week-scheduler/config.yaml and lets environment variables override it.

Usage:
    from week_scheduler.core.engine.config_loader import load_settings
    settings = load_settings()
    store_dir = settings.store_dir

If the user file exists but has parse errors, a warning is logged and the
file is ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..config import DEFAULT_EXPERIENCE, DEFAULT_PLAN_DAYS, MAX_PLAN_DAYS, MIN_PLAN_DAYS
from ..models import EXPERIENCE_LEVELS

ENV_STORE_DIR = "WEEK_SCHEDULER_STORE_DIR"
ENV_LOG_LEVEL = "WEEK_SCHEDULER_LOG_LEVEL"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        logger.warning(f"Ignoring unreadable YAML file {path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    store_dir: Path
    log_level: str = "INFO"
    default_days: int = DEFAULT_PLAN_DAYS
    default_experience: str = DEFAULT_EXPERIENCE


def get_user_dir() -> Path:
    """Return ~/.week-scheduler (may not exist yet)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".week-scheduler"


def get_user_yaml_path(name: str) -> Path | None:
    """Return ~/.week-scheduler/<name> if it exists, else None."""
    p = get_user_dir() / name
    return p if p.exists() else None


def load_settings() -> Settings:
    """
    Load and merge settings.

    Load order (later overrides earlier):
    1. Built-in defaults
    2. ~/.week-scheduler/config.yaml
    3. WEEK_SCHEDULER_STORE_DIR / WEEK_SCHEDULER_LOG_LEVEL

    Out-of-range values fall back to the defaults with a warning.
    """
    raw: dict[str, Any] = {}
    user = get_user_yaml_path("config.yaml")
    if user is not None:
        raw = deep_merge(raw, load_yaml_file(user))

    store_dir = Path(os.environ.get(ENV_STORE_DIR) or raw.get("store_dir") or get_user_dir()).expanduser()
    log_level = str(os.environ.get(ENV_LOG_LEVEL) or raw.get("log_level") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        logger.warning(f"Ignoring log_level={log_level!r}; using INFO")
        log_level = "INFO"

    default_days = raw.get("default_days", DEFAULT_PLAN_DAYS)
    if not isinstance(default_days, int) or not MIN_PLAN_DAYS <= default_days <= MAX_PLAN_DAYS:
        logger.warning(f"Ignoring default_days={default_days!r}; using {DEFAULT_PLAN_DAYS}")
        default_days = DEFAULT_PLAN_DAYS

    default_experience = str(raw.get("default_experience", DEFAULT_EXPERIENCE)).lower()
    if default_experience not in EXPERIENCE_LEVELS:
        logger.warning(f"Ignoring default_experience={default_experience!r}; using {DEFAULT_EXPERIENCE}")
        default_experience = DEFAULT_EXPERIENCE

    return Settings(
        store_dir=store_dir,
        log_level=log_level,
        default_days=default_days,
        default_experience=default_experience,
    )

"""
YAML → MovementTemplate loader.

Loads the set-template catalogue from the bundled ``set_templates.yaml``
(``src/week_scheduler/set_templates.yaml``).  The file maps each day type to
an ordered list of movements.

User overrides: ``~/.week-scheduler/set_templates.yaml``.  Each day type
listed there replaces the bundled list for that day; new day types are
added.  An invalid user day is skipped with a warning.

Usage (internal, called by registry.py):
    from .loader import load_templates_from_yaml
    catalogue = load_templates_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path

from loguru import logger

from ..engine.config_loader import deep_merge, get_user_yaml_path, load_yaml_file
from .base import MovementTemplate

_REQUIRED_MOVEMENT_FIELDS: frozenset[str] = frozenset({"movement", "sets", "reps", "rpe"})


def movement_from_dict(d: dict) -> MovementTemplate:
    """Convert a raw dict (from YAML) to a MovementTemplate.

    Raises ValueError if any required field is absent or out of range.
    """
    if not isinstance(d, dict):
        raise ValueError(f"movement entry must be a mapping, got {type(d).__name__}")
    missing = _REQUIRED_MOVEMENT_FIELDS - set(d)
    if missing:
        raise ValueError(f"MovementTemplate missing fields: {sorted(missing)}")

    tpl = MovementTemplate(
        movement=str(d["movement"]),
        sets=int(d["sets"]),
        reps=int(d["reps"]),
        rpe=float(d["rpe"]),
        advanced_sets_delta=int(d.get("advanced_sets_delta", 0)),
        beginner_sets_delta=int(d.get("beginner_sets_delta", 0)),
    )
    if tpl.sets < 1 or tpl.reps < 1:
        raise ValueError(f"{tpl.movement}: sets and reps must be at least 1")
    if not 0 < tpl.rpe <= 10:
        raise ValueError(f"{tpl.movement}: rpe must be in (0, 10]")
    return tpl


def day_from_list(raw: list) -> list[MovementTemplate]:
    """Convert one day's raw movement list."""
    if not isinstance(raw, list):
        raise ValueError(f"day entry must be a list, got {type(raw).__name__}")
    return [movement_from_dict(m) for m in raw]


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled set_templates.yaml, or None if not found."""
    ref = importlib.resources.files("week_scheduler").joinpath("set_templates.yaml")
    if ref.is_file():
        return Path(str(ref))
    # loader.py lives at src/week_scheduler/core/templates/loader.py
    candidate = Path(__file__).parent.parent.parent / "set_templates.yaml"
    return candidate if candidate.exists() else None


def load_templates_from_yaml() -> dict[str, list[MovementTemplate]] | None:
    """Return {day_type: [MovementTemplate, ...]} from the bundled and user YAML.

    Bundled days that fail validation make the whole load fail (returns None);
    user days that fail validation are skipped with a warning.
    """
    bundled = get_bundled_yaml_path()
    if bundled is None:
        return None

    raw = load_yaml_file(bundled)
    if not raw:
        return None

    result: dict[str, list[MovementTemplate]] = {}
    try:
        for day_type, movements in raw.items():
            result[str(day_type)] = day_from_list(movements)
    except (ValueError, TypeError) as exc:
        logger.error(f"Invalid bundled set template catalogue: {exc}")
        return None

    user = get_user_yaml_path("set_templates.yaml")
    if user is not None:
        user_raw = load_yaml_file(user)
        merged: dict[str, list[MovementTemplate]] = {}
        for day_type, movements in user_raw.items():
            try:
                merged[str(day_type)] = day_from_list(movements)
            except (ValueError, TypeError) as exc:
                logger.warning(f"Skipping user set templates for '{day_type}': {exc}")
        result = deep_merge(result, merged)

    return result

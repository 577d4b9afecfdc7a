"""
Set template registry.

The catalogue is loaded from YAML once at import time.  If loading fails
for any reason (missing file, parse error, missing field), a RuntimeError
is raised; the planner cannot start without valid templates.

User overrides: place ``set_templates.yaml`` in ``~/.week-scheduler/``.
"""

from ..config import REST_DAY
from ..models import SetTemplate
from .base import MovementTemplate


def _build_registry() -> dict[str, list[MovementTemplate]]:
    from .loader import load_templates_from_yaml

    loaded = load_templates_from_yaml()
    if not loaded:
        raise RuntimeError(
            "week-scheduler: no set templates could be loaded from YAML. "
            "Check that src/week_scheduler/set_templates.yaml is present and valid."
        )
    return loaded


TEMPLATE_REGISTRY: dict[str, list[MovementTemplate]] = _build_registry()


def known_day_types() -> list[str]:
    """Day types that carry set templates, in catalogue order."""
    return [d for d in TEMPLATE_REGISTRY if d != REST_DAY]


def templates_for(day_type: str, experience: str) -> list[SetTemplate]:
    """
    Set templates for one day.

    Args:
        day_type: Day label, e.g. "Push"
        experience: "beginner" | "intermediate" | "advanced"

    Returns:
        Ordered SetTemplates; empty for "Rest" and unknown labels
    """
    if day_type == REST_DAY:
        return []
    return [m.for_experience(experience) for m in TEMPLATE_REGISTRY.get(day_type, [])]

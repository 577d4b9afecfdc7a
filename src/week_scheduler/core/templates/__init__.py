"""
Set templates for week-scheduler.

Each training day type maps to an ordered list of movements, specialized by
experience level.
"""

from .base import MovementTemplate
from .registry import TEMPLATE_REGISTRY, known_day_types, templates_for

__all__ = [
    "MovementTemplate",
    "TEMPLATE_REGISTRY",
    "known_day_types",
    "templates_for",
]

"""
Base types for set templates.

MovementTemplate is one catalogue entry: a movement's baseline prescription
plus the experience exceptions attached to that movement only.
"""

from dataclasses import dataclass

from ..models import SetTemplate


@dataclass(frozen=True)
class MovementTemplate:
    """Baseline prescription for one movement on one day type."""

    movement: str
    sets: int
    reps: int
    rpe: float
    advanced_sets_delta: int = 0   # Applied for experience == "advanced"
    beginner_sets_delta: int = 0   # Applied for experience == "beginner"

    def for_experience(self, experience: str) -> SetTemplate:
        """
        Specialize this movement for an experience level.

        Args:
            experience: "beginner" | "intermediate" | "advanced"

        Returns:
            SetTemplate with the movement's own exception applied (min 1 set)
        """
        sets = self.sets
        if experience == "advanced":
            sets += self.advanced_sets_delta
        elif experience == "beginner":
            sets += self.beginner_sets_delta

        return SetTemplate(
            movement=self.movement,
            target_sets=max(1, sets),
            target_reps=self.reps,
            target_rpe=self.rpe,
        )

"""
Muscle group taxonomy.

Part of RQ-102: Muscle group reward buckets

Every recognised exercise is filed under exactly one of seven muscle groups.
The group determines which XP bucket a completed set rewards and which
``<group>_xp`` column of the user's stats it is added to.
"""

from enum import Enum
from typing import Optional


class MuscleGroup(str, Enum):
    """The seven fixed reward buckets."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    CARDIO = "cardio"

    @property
    def stat_field(self) -> str:
        """Name of the cumulative XP column for this group (e.g. ``legs_xp``)."""
        return f"{self.value}_xp"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["MuscleGroup"]:
        """
        Map a catalog category label to a muscle group.

        Labels are matched case-insensitively ("Chest", "LEGS" -> legs).

        Returns:
            The matching group, or None for unknown labels.
        """
        if not label:
            return None
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


# Wildcard accepted by item bonuses to target every group
ALL_MUSCLE_GROUPS = "all"

MUSCLE_GROUPS = tuple(MuscleGroup)

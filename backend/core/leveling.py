"""
Leveling state machine.

Part of RQ-104: Leveling and stat persistence

Levels start at 1 and never decrease. XP is cumulative for the lifetime of
the account and is never reset on level-up. A single XP gain can raise the
level by at most one, even if it crosses several thresholds; applying two
half-gains may therefore end on a higher level than one full gain.
"""
import math
from dataclasses import dataclass


def required_xp(level: int) -> int:
    """
    Cumulative XP needed to leave ``level``.

    Formula: floor(100 * level^1.5)

    >>> required_xp(1), required_xp(4)
    (100, 800)
    """
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}")
    return math.floor(100 * level ** 1.5)


@dataclass(frozen=True)
class LevelResult:
    """Outcome of applying one XP gain."""
    previous_level: int
    new_level: int
    xp_before: int
    xp_after: int
    required_xp: int

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.previous_level

    @property
    def xp_to_next_level(self) -> int:
        return max(0, self.required_xp - self.xp_after)


def apply_xp(current_level: int, xp_before: int, gain: int) -> LevelResult:
    """
    Apply an XP gain and detect a level-up.

    Args:
        current_level: Level before the gain (>= 1)
        xp_before: Cumulative XP before the gain
        gain: XP earned (>= 0)

    Returns:
        LevelResult; ``required_xp`` is the threshold of the new level, used
        to show progress toward the next level

    Raises:
        ValueError: If the level is below 1 or the gain is negative
    """
    if current_level < 1:
        raise ValueError(f"Level must be >= 1, got {current_level}")
    if gain < 0:
        raise ValueError(f"XP gain cannot be negative, got {gain}")

    xp_after = xp_before + gain
    new_level = current_level
    if xp_after >= required_xp(current_level):
        new_level = current_level + 1

    return LevelResult(
        previous_level=current_level,
        new_level=new_level,
        xp_before=xp_before,
        xp_after=xp_after,
        required_xp=required_xp(new_level),
    )

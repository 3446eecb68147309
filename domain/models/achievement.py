"""
Achievement rules and unlock records.

Part of RQ-108: Achievement unlocks

Stored achievements carry their rule as text, e.g. ``"legs_xp >= 500"``.
The text is decoded once, when the catalog is loaded, into a typed
``Requirement``; a malformed rule fails the load instead of silently never
matching.
"""

import operator
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.stats import StatField, UserStats


class InvalidRequirementError(ValueError):
    """Raised when an achievement rule cannot be decoded."""

    def __init__(self, requirement: Any, reason: str):
        super().__init__(f"Invalid requirement '{requirement}': {reason}")
        self.requirement = requirement
        self.reason = reason


class Comparator(str, Enum):
    """Comparison operators allowed in achievement rules."""

    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"
    EQ = "=="

    def compare(self, value: float, threshold: float) -> bool:
        return _OPERATORS[self](value, threshold)


_OPERATORS: Dict[Comparator, Callable[[float, float], bool]] = {
    Comparator.GE: operator.ge,
    Comparator.LE: operator.le,
    Comparator.GT: operator.gt,
    Comparator.LT: operator.lt,
    Comparator.EQ: operator.eq,
}


class Requirement(BaseModel):
    """
    A decoded threshold rule over one stat column.

    Examples:
        >>> rule = Requirement.parse("legs_xp >= 500")
        >>> rule.field, rule.op, rule.threshold
        (<StatField.LEGS_XP: 'legs_xp'>, <Comparator.GE: '>='>, 500.0)
        >>> str(rule)
        'legs_xp >= 500'
    """

    field: StatField
    op: Comparator
    threshold: float

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, text: str) -> "Requirement":
        """
        Decode ``"<field> <op> <number>"``.

        Raises:
            InvalidRequirementError: If the rule has the wrong shape, names an
                unknown stat, uses an unknown operator or a non-numeric threshold
        """
        if not isinstance(text, str):
            raise InvalidRequirementError(text, "requirement must be a string")
        parts = text.split()
        if len(parts) != 3:
            raise InvalidRequirementError(text, "expected '<field> <op> <number>'")
        field_name, op, raw_threshold = parts
        try:
            stat = StatField(field_name)
        except ValueError:
            raise InvalidRequirementError(text, f"unknown stat '{field_name}'") from None
        try:
            comparator = Comparator(op)
        except ValueError:
            raise InvalidRequirementError(text, f"unknown operator '{op}'") from None
        try:
            threshold = float(raw_threshold)
        except ValueError:
            raise InvalidRequirementError(
                text, f"threshold '{raw_threshold}' is not a number"
            ) from None
        return cls(field=stat, op=comparator, threshold=threshold)

    def is_met(self, stats: UserStats) -> bool:
        return self.op.compare(stats.value_of(self.field), self.threshold)

    def __str__(self) -> str:
        threshold = self.threshold
        shown = int(threshold) if threshold.is_integer() else threshold
        return f"{self.field.value} {self.op.value} {shown}"


class Achievement(BaseModel):
    """Catalog achievement: a rule plus an optional item reward."""

    id: str
    title: str = ""
    description: str = ""
    requirement: Requirement
    item_id: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("requirement", mode="before")
    @classmethod
    def decode_requirement(cls, v: Any) -> Any:
        """Decode rule text at load time."""
        if isinstance(v, str):
            return Requirement.parse(v)
        return v


class AchievementUnlock(BaseModel):
    """Persisted unlock; unique per (user_id, achievement_id)."""

    user_id: str
    achievement_id: str
    unlocked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"extra": "ignore"}

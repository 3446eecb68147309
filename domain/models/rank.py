"""
Rank tiers for muscle group progress.

Part of RQ-106: Rank and power level
"""

from pydantic import BaseModel, Field


class RankTier(BaseModel):
    """A named XP band. Tiers are ordered by ascending ``min_xp``."""

    name: str
    min_xp: int = Field(..., ge=0)
    power_value: int = Field(..., ge=0)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name

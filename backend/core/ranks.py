"""
Rank and power level calculation.

Part of RQ-106: Rank and power level

Ranks are derived display data: nothing here is persisted, and every value
is recomputed from the current stats and equipped items on each read.
"""
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from domain.models import (
    EquippedItem,
    MUSCLE_GROUPS,
    MuscleGroup,
    RankTier,
    Rarity,
    UserStats,
)


DEFAULT_RANK_TIERS: List[RankTier] = [
    RankTier(name="Bronze", min_xp=0, power_value=10),
    RankTier(name="Silver", min_xp=50, power_value=20),
    RankTier(name="Gold", min_xp=150, power_value=35),
    RankTier(name="Platinum", min_xp=300, power_value=50),
    RankTier(name="Diamond", min_xp=500, power_value=75),
    RankTier(name="Master", min_xp=700, power_value=100),
    RankTier(name="Legend", min_xp=900, power_value=150),
]

# Flat power added per equipped item
RARITY_POWER: Dict[Rarity, int] = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 10,
    Rarity.RARE: 20,
    Rarity.EPIC: 35,
    Rarity.LEGENDARY: 50,
}


@dataclass
class PowerLevel:
    """Power level with the parts it is made of."""
    total: int
    from_ranks: int
    from_items: int


class RankCalculator:
    """
    Maps XP to rank tiers and sums power levels.

    Usage:
        >>> ranks = RankCalculator()
        >>> ranks.rank_of(160).name
        'Gold'
        >>> ranks.rank_of(-5).name
        'Bronze'
    """

    def __init__(
        self,
        tiers: Optional[Sequence[RankTier]] = None,
        rarity_power: Optional[Dict[Rarity, int]] = None,
    ):
        """
        Args:
            tiers: Tiers in ascending ``min_xp`` order (defaults to Bronze..Legend)
            rarity_power: Power per equipped item by rarity

        Raises:
            ValueError: If no tiers are given or thresholds are not ascending
        """
        tiers = list(tiers if tiers is not None else DEFAULT_RANK_TIERS)
        if not tiers:
            raise ValueError("At least one rank tier is required")
        for lower, higher in zip(tiers, tiers[1:]):
            if higher.min_xp <= lower.min_xp:
                raise ValueError(
                    f"Rank tiers must have ascending thresholds: "
                    f"{lower.name} ({lower.min_xp}) >= {higher.name} ({higher.min_xp})"
                )
        self._tiers = tiers
        self._rarity_power = dict(rarity_power if rarity_power is not None else RARITY_POWER)

    @property
    def tiers(self) -> List[RankTier]:
        return list(self._tiers)

    def rank_of(self, xp: float) -> RankTier:
        """Highest tier whose threshold is <= ``xp``; the lowest tier otherwise."""
        rank = self._tiers[0]
        for tier in self._tiers:
            if tier.min_xp <= xp:
                rank = tier
        return rank

    def muscle_group_ranks(self, stats: UserStats) -> Dict[MuscleGroup, RankTier]:
        return {
            group: self.rank_of(xp) for group, xp in stats.xp_by_muscle_group.items()
        }

    def average_rank(self, stats: UserStats) -> RankTier:
        """Rank of the floored mean XP over the seven muscle groups."""
        total = sum(stats.muscle_group_xp(group) for group in MUSCLE_GROUPS)
        return self.rank_of(math.floor(total / len(MUSCLE_GROUPS)))

    def item_power(self, item: EquippedItem) -> int:
        return self._rarity_power.get(item.item.rarity, 0)

    def power_level(
        self,
        stats: UserStats,
        equipped: Iterable[EquippedItem] = (),
    ) -> PowerLevel:
        """
        Sum of the rank power of every muscle group plus equipped item power.

        Only entries with ``is_equipped`` set count toward item power.
        """
        from_ranks = sum(
            tier.power_value for tier in self.muscle_group_ranks(stats).values()
        )
        from_items = sum(self.item_power(entry) for entry in equipped if entry.is_equipped)
        return PowerLevel(
            total=from_ranks + from_items,
            from_ranks=from_ranks,
            from_items=from_items,
        )

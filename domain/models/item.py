"""
Equipment items and inventory entries.

Part of RQ-107: Equipped item bonuses

Items are read-only catalog entities. An item may carry an XP bonus and/or
a gold bonus targeting one muscle group or every group ("all").
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from domain.models.muscle_group import ALL_MUSCLE_GROUPS, MuscleGroup


class Rarity(str, Enum):
    """Item rarity tiers, lowest first."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ItemBonus(BaseModel):
    """
    Percentage bonus applied to rewards of a muscle group.

    Examples:
        >>> bonus = ItemBonus(muscle_group="all", bonus_percent=10)
        >>> bonus.applies_to(MuscleGroup.CHEST)
        True
    """

    muscle_group: Union[MuscleGroup, str] = Field(
        ..., description="Targeted muscle group, or 'all'"
    )
    bonus_percent: float = Field(..., description="Percentage added to the base amount")

    @field_validator("muscle_group", mode="before")
    @classmethod
    def validate_muscle_group(cls, v):
        """Accept any muscle group label or the 'all' wildcard."""
        if isinstance(v, MuscleGroup):
            return v
        label = str(v).strip().lower()
        if label == ALL_MUSCLE_GROUPS:
            return ALL_MUSCLE_GROUPS
        group = MuscleGroup.from_label(label)
        if group is None:
            raise ValueError(f"Unknown bonus muscle group '{v}'")
        return group

    def applies_to(self, group: MuscleGroup) -> bool:
        return self.muscle_group == ALL_MUSCLE_GROUPS or self.muscle_group == group

    model_config = {"frozen": True}


class Item(BaseModel):
    """Catalog item that can be owned, equipped or granted by achievements."""

    id: str
    name: str
    slot_type: str = Field(..., description="Equipment slot (head, chest, weapon, ...)")
    rarity: Rarity = Rarity.COMMON
    price: int = Field(default=0, ge=0, description="Shop price in gold")
    xp_bonus: Optional[ItemBonus] = None
    gold_bonus: Optional[ItemBonus] = None

    model_config = {"frozen": True, "extra": "ignore"}


class EquippedItem(BaseModel):
    """
    A user's inventory entry joined with its catalog item.

    At most one entry per slot type is equipped at a time; the equip flow
    enforces this by unequipping the slot before equipping.
    """

    user_id: str
    item: Item
    is_equipped: bool = False
    quantity: int = Field(default=1, ge=0)

    @property
    def item_id(self) -> str:
        return self.item.id

"""
Inventory Repository Interface (Port).

Part of RQ-107: Equipped item bonuses

Inventory rows link a user to an owned item with a quantity and an
``is_equipped`` flag. Equipped rows are returned joined with their item.
"""
from typing import Protocol, Optional, List, Dict, Any


class InventoryRepository(Protocol):
    """
    Abstract interface for the item catalog and user inventories.
    """

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a catalog item.

        Returns:
            Item row with nested ``xp_bonus``/``gold_bonus`` dicts, or None
        """
        ...

    def get_entry(
        self,
        user_id: str,
        item_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Get the inventory row for one owned item.

        Returns:
            Row with user_id, item_id, quantity, is_equipped, or None
        """
        ...

    def insert_entry(
        self,
        user_id: str,
        item_id: str,
        *,
        quantity: int = 1,
        is_equipped: bool = False,
    ) -> Dict[str, Any]:
        """
        Add an item to a user's inventory.

        Raises:
            ItemGrantError: If the row cannot be written
        """
        ...

    def update_quantity(
        self,
        user_id: str,
        item_id: str,
        quantity: int,
    ) -> Dict[str, Any]:
        """
        Set the owned quantity of an item.

        Raises:
            ItemGrantError: If the row cannot be written
        """
        ...

    def get_equipped_items(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get every equipped inventory row joined with its item.

        Returns:
            Rows with user_id, is_equipped, quantity and a nested ``item`` dict

        Raises:
            PersistenceError: If the store cannot be read
        """
        ...

    def unequip_slot(self, user_id: str, slot_type: str) -> int:
        """
        Unequip every equipped item of a slot type.

        Returns:
            Number of rows unequipped
        """
        ...

    def set_equipped(
        self,
        user_id: str,
        item_id: str,
        is_equipped: bool,
    ) -> Dict[str, Any]:
        """
        Set the equipped flag of an owned item.

        Raises:
            PersistenceError: If the row cannot be written
        """
        ...

"""
Supabase implementation of InventoryRepository.

Part of RQ-107: Equipped item bonuses

Queries the items catalog and the user_inventory table. Equipped rows are
read with an embedded ``item`` resource so bonuses and rarity come back in
one request.
"""
import logging
from typing import Optional, List, Dict, Any

from supabase import Client

from application.exceptions import ItemGrantError, PersistenceError
from infrastructure.db.errors import error_code

logger = logging.getLogger(__name__)


class SupabaseInventoryRepository:
    """
    Supabase implementation of InventoryRepository protocol.

    Queries against:
    - items: id, name, slot_type, rarity, price, xp_bonus, gold_bonus
    - user_inventory: user_id, item_id, quantity, is_equipped
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("items") \
                .select("*") \
                .eq("id", item_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to get item {item_id}: {e}")
            raise PersistenceError(f"Failed to get item {item_id}", code=error_code(e)) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def get_entry(
        self,
        user_id: str,
        item_id: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("user_inventory") \
                .select("*") \
                .eq("user_id", user_id) \
                .eq("item_id", item_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to get inventory entry {item_id} for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to read inventory for user {user_id}", code=error_code(e)
            ) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def insert_entry(
        self,
        user_id: str,
        item_id: str,
        *,
        quantity: int = 1,
        is_equipped: bool = False,
    ) -> Dict[str, Any]:
        data = {
            "user_id": user_id,
            "item_id": item_id,
            "quantity": quantity,
            "is_equipped": is_equipped,
        }
        try:
            result = self._client.table("user_inventory").insert(data).execute()
        except Exception as e:
            raise ItemGrantError(
                f"Failed to add item {item_id} for user {user_id}: {e}",
                code=error_code(e),
            ) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return data

    def update_quantity(
        self,
        user_id: str,
        item_id: str,
        quantity: int,
    ) -> Dict[str, Any]:
        try:
            result = self._client.table("user_inventory") \
                .update({"quantity": quantity}) \
                .eq("user_id", user_id) \
                .eq("item_id", item_id) \
                .execute()
        except Exception as e:
            raise ItemGrantError(
                f"Failed to update quantity of {item_id} for user {user_id}: {e}",
                code=error_code(e),
            ) from e

        if not result.data:
            raise ItemGrantError(f"No inventory entry {item_id} for user {user_id}")
        return result.data[0]

    def get_equipped_items(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("user_inventory") \
                .select("*, item:items(*)") \
                .eq("user_id", user_id) \
                .eq("is_equipped", True) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to get equipped items for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to read equipped items for user {user_id}", code=error_code(e)
            ) from e
        return result.data or []

    def unequip_slot(self, user_id: str, slot_type: str) -> int:
        """Unequip every equipped item of ``slot_type``; returns rows changed."""
        try:
            slot_items = self._client.table("items") \
                .select("id") \
                .eq("slot_type", slot_type) \
                .execute()
            item_ids = [row["id"] for row in slot_items.data or []]
            if not item_ids:
                return 0

            result = self._client.table("user_inventory") \
                .update({"is_equipped": False}) \
                .eq("user_id", user_id) \
                .eq("is_equipped", True) \
                .in_("item_id", item_ids) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to unequip slot {slot_type} for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to unequip slot {slot_type}", code=error_code(e)
            ) from e
        return len(result.data or [])

    def set_equipped(
        self,
        user_id: str,
        item_id: str,
        is_equipped: bool,
    ) -> Dict[str, Any]:
        try:
            result = self._client.table("user_inventory") \
                .update({"is_equipped": is_equipped}) \
                .eq("user_id", user_id) \
                .eq("item_id", item_id) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to set equipped={is_equipped} on {item_id}: {e}")
            raise PersistenceError(
                f"Failed to update item {item_id}", code=error_code(e)
            ) from e

        if not result.data:
            raise PersistenceError(f"No inventory entry {item_id} for user {user_id}")
        return result.data[0]

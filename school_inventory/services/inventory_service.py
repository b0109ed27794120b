"""
Inventory Service
Read-only queries over InventoryItem.
"""

from typing import List, Optional

from school_inventory import db
from school_inventory.data.inventory_item import InventoryItem


class InventoryService:
    """Listing, lookup and label search for inventory items"""

    @staticmethod
    def list_items() -> List[InventoryItem]:
        return InventoryItem.query.order_by(InventoryItem.id).all()

    @staticmethod
    def get_item(item_id: int) -> Optional[InventoryItem]:
        """Returns None rather than raising when the id is unknown"""
        return db.session.get(InventoryItem, item_id)

    @staticmethod
    def search_by_label(query: str) -> List[InventoryItem]:
        """
        Case-insensitive substring match on label_code, in insertion order.

        LIKE wildcards in the query are matched literally.
        """
        escaped = (query or '').replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
        return (
            InventoryItem.query
            .filter(InventoryItem.label_code.ilike(f'%{escaped}%', escape='\\'))
            .order_by(InventoryItem.id)
            .all()
        )

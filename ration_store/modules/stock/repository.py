from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import Any, Dict, List, Optional

from ration_store.shared.database.models import StockItem
from ration_store.shared.database.transaction import atomic, reload, run_query


class StockRepository:
    def __init__(self, db: Session):
        self.db = db

    @run_query("listing stock items")
    def get_all(self) -> List[StockItem]:
        """All items, newest first"""
        return self.db.query(StockItem).order_by(desc(StockItem.created_at), desc(StockItem.id)).all()

    @run_query("loading stock item")
    def get_by_id(self, item_id: int) -> Optional[StockItem]:
        return self.db.query(StockItem).filter(StockItem.id == item_id).first()

    @run_query("listing low stock items")
    def get_low_stock(self) -> List[StockItem]:
        return self.db.query(StockItem).filter(
            StockItem.current_stock <= StockItem.threshold
        ).order_by(StockItem.item_name).all()

    def create(self, item_data: Dict[str, Any]) -> StockItem:
        item = StockItem(**item_data)
        with atomic(self.db):
            self.db.add(item)
        reload(self.db, item)
        return item

    def update_locked(self, item_id: int, item_data: Dict[str, Any]) -> Optional[StockItem]:
        """
        Overwrite an item while holding its row lock.

        The lock is the same one the sale transaction takes, so an edit and
        a sale on the same item never interleave. Returns None if the item
        does not exist.
        """
        with atomic(self.db):
            item = self.db.query(StockItem).filter(
                StockItem.id == item_id
            ).with_for_update().first()

            if item is None:
                return None

            for key, value in item_data.items():
                setattr(item, key, value)

        reload(self.db, item)
        return item

    def delete(self, item: StockItem) -> None:
        """Unconditional delete; historical sales keep the denormalized item name"""
        with atomic(self.db):
            self.db.delete(item)

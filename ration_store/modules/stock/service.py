from sqlalchemy.orm import Session
from typing import List
import logging

from .repository import StockRepository
from .schemas import StockItemCreate, StockItemUpdate, StockItemResponse
from ration_store.core.exceptions import NotFoundError, ValidationError
from ration_store.shared.database.models import StockItem

logger = logging.getLogger(__name__)

STOCK_NOT_FOUND = "Stock item not found"


class StockService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = StockRepository(db)

    def list_items(self) -> List[StockItemResponse]:
        return [StockItemResponse.model_validate(i) for i in self.repository.get_all()]

    def list_low_stock(self) -> List[StockItemResponse]:
        return [StockItemResponse.model_validate(i) for i in self.repository.get_low_stock()]

    def get_item(self, item_id: int) -> StockItemResponse:
        return StockItemResponse.model_validate(self._get_or_404(item_id))

    def create_item(self, item_data: StockItemCreate) -> StockItemResponse:
        self._validate_levels(item_data)

        item = self.repository.create(item_data.model_dump())
        logger.info(f"Stock item '{item.item_name}' created (id={item.id})")
        return StockItemResponse.model_validate(item)

    def update_item(self, item_id: int, item_data: StockItemUpdate) -> StockItemResponse:
        """
        Replace an item's fields.

        currentStock is written as given; a sale committed just before this
        edit is overwritten by the operator's count.
        """
        self._validate_levels(item_data)

        item = self.repository.update_locked(item_id, item_data.model_dump())
        if item is None:
            raise NotFoundError(STOCK_NOT_FOUND, entity="item")

        logger.info(f"Stock item {item_id} updated (current={item.current_stock})")
        return StockItemResponse.model_validate(item)

    def delete_item(self, item_id: int) -> None:
        item = self._get_or_404(item_id)
        self.repository.delete(item)
        logger.info(f"Stock item {item_id} deleted")

    def _get_or_404(self, item_id: int) -> StockItem:
        item = self.repository.get_by_id(item_id)
        if not item:
            raise NotFoundError(STOCK_NOT_FOUND, entity="item")
        return item

    @staticmethod
    def _validate_levels(item_data: StockItemCreate) -> None:
        if item_data.current_stock > item_data.total_stock:
            raise ValidationError("Current stock cannot be greater than total stock")

from pydantic import Field, field_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime

from ration_store.shared.schemas.common import CamelModel


class StockItemBase(CamelModel):
    item_name: str = Field(..., min_length=1, max_length=255, description="Item name, e.g. Rice")
    category: str = Field(..., min_length=1, max_length=100, description="Grain, Oil, Sugar...")
    total_stock: Decimal = Field(..., ge=0, description="Storage capacity")
    current_stock: Decimal = Field(..., ge=0, description="Quantity on hand")
    threshold: Decimal = Field(..., ge=0, description="Low-stock trigger")

    @field_validator('item_name', 'category')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()


class StockItemCreate(StockItemBase):
    """Add an item to the store"""


class StockItemUpdate(StockItemBase):
    """Replace every field of an item"""


class StockItemResponse(CamelModel):
    id: int
    item_name: str
    category: str
    total_stock: float
    current_stock: float
    threshold: float
    is_low_stock: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

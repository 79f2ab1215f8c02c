from pydantic import Field, field_validator
from decimal import Decimal
from datetime import datetime

from ration_store.shared.schemas.common import CamelModel


class SaleCreateRequest(CamelModel):
    family_id: str = Field(..., min_length=1, max_length=100, description="Ration card number of the buyer")
    item_id: int = Field(..., gt=0, description="Stock item sold")
    quantity: Decimal = Field(..., gt=0, description="Quantity sold")
    unit_price: Decimal = Field(..., gt=0, description="Price per unit")
    total_amount: Decimal = Field(..., gt=0, description="Amount charged")

    # itemName is not accepted: it is read from the stock item when the sale is recorded

    @field_validator('family_id')
    @classmethod
    def validate_family_id(cls, v):
        if not v.strip():
            raise ValueError('Family ID cannot be empty')
        return v.strip()

    @property
    def computed_total(self) -> Decimal:
        return self.quantity * self.unit_price


class SaleResponse(CamelModel):
    id: int
    family_id: str
    item_id: int
    item_name: str
    quantity: float
    unit_price: float
    total_amount: float
    sale_date: datetime


class TodaySalesResponse(CamelModel):
    today_sales_amount: float
    today_sales_count: int

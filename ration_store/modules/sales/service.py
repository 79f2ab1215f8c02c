# ration_store/modules/sales/service.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging

from .repository import SalesRepository
from .schemas import SaleCreateRequest, SaleResponse, TodaySalesResponse
from ration_store.config.settings import settings

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    def record_sale(self, sale_data: SaleCreateRequest) -> SaleResponse:
        """
        Record a sale.

        Responsibilities:
        - Decide the amount charged (client value or quantity x unit price)
        - Delegate the transaction to the repository
        - Build the response
        """
        total_amount = sale_data.total_amount
        if settings.derive_sale_total:
            total_amount = sale_data.computed_total
        elif total_amount != sale_data.computed_total:
            logger.warning(
                f"Sale total {total_amount} differs from quantity x unit price "
                f"({sale_data.computed_total}) for family {sale_data.family_id}"
            )

        logger.info(
            f"Recording sale - family: {sale_data.family_id}, item: {sale_data.item_id}, "
            f"quantity: {sale_data.quantity}"
        )

        sale = self.repository.create_sale_atomic(
            family_id=sale_data.family_id,
            item_id=sale_data.item_id,
            quantity=sale_data.quantity,
            unit_price=sale_data.unit_price,
            total_amount=total_amount
        )

        logger.info(f"Sale {sale.id} completed")
        return SaleResponse.model_validate(sale)

    def list_sales(self, family_id: Optional[str] = None) -> List[SaleResponse]:
        if family_id:
            sales = self.repository.get_by_family(family_id.strip())
        else:
            sales = self.repository.get_all()
        return [SaleResponse.model_validate(s) for s in sales]

    def get_today_sales(self, target_date: Optional[date] = None) -> TodaySalesResponse:
        summary = self.repository.get_daily_summary(target_date or date.today())
        return TodaySalesResponse(
            today_sales_amount=summary["total_amount"],
            today_sales_count=summary["count"]
        )

from sqlalchemy.orm import Session
from sqlalchemy import desc, func
from typing import Any, Dict, List, Union
from datetime import datetime, date, time, timedelta
from decimal import Decimal
import logging

from ration_store.core.exceptions import (
    InsufficientStockError, NotFoundError, ValidationError
)
from ration_store.shared.database.models import (
    QUANTITY, QUANTITY_SCALE, Family, Sale, StockItem
)
from ration_store.shared.database.transaction import atomic, reload, run_query

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]


def _as_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _rounded(quantity_expr):
    return func.round(quantity_expr, QUANTITY_SCALE, type_=QUANTITY)


def day_bounds(target_date: date):
    """[00:00 of target_date, 00:00 of the next day) in server-local time"""
    start = datetime.combine(target_date, time.min)
    return start, start + timedelta(days=1)


class SalesRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_sale_atomic(
        self,
        family_id: str,
        item_id: int,
        quantity: Number,
        unit_price: Number,
        total_amount: Number
    ) -> Sale:
        """
        Record a sale and decrement stock in one transaction.

        Steps:
        1. Lock the stock item row (SELECT FOR UPDATE where supported)
        2. Check the quantity against currentStock
        3. Check the family exists (by ration card number)
        4. Conditional decrement: only if currentStock >= quantity still holds
        5. Insert the Sale with the item name read in step 1
        6. Single commit; any failure rolls back both writes

        The conditional decrement in step 4 is what keeps currentStock from
        going negative on backends without row locks: of two racing sales
        only one can match the WHERE clause.

        Returns:
            Sale: the persisted sale

        Raises:
            ValidationError: a field is missing, zero or negative
            NotFoundError: unknown item or family
            InsufficientStockError: quantity exceeds currentStock
            StoreError: persistence failure
        """
        if not family_id or not item_id or not quantity or not unit_price or not total_amount:
            raise ValidationError("All fields are required")

        quantity = _as_decimal(quantity)
        unit_price = _as_decimal(unit_price)
        total_amount = _as_decimal(total_amount)

        if quantity < 0 or unit_price < 0 or total_amount < 0:
            raise ValidationError("Quantity, unit price and total amount must be positive")

        with atomic(self.db):
            # STEP 1: lock the item row
            item = self.db.query(StockItem).filter(
                StockItem.id == item_id
            ).with_for_update().first()

            if item is None:
                raise NotFoundError("Stock item not found", entity="item")

            # STEP 2: stock sufficiency
            if quantity > item.current_stock:
                logger.info(
                    f"Insufficient stock for item {item_id}: "
                    f"requested {quantity}, available {item.current_stock}"
                )
                raise InsufficientStockError(item.current_stock)

            # STEP 3: family by natural key
            family_exists = self.db.query(Family.id).filter(
                Family.family_id == family_id
            ).first()

            if family_exists is None:
                raise NotFoundError("Family not found", entity="family")

            # STEP 4: atomic check-and-decrement, rounded to the column scale
            # so SQLite's float arithmetic agrees with the check in step 2
            updated = self.db.query(StockItem).filter(
                StockItem.id == item_id,
                _rounded(StockItem.current_stock) >= quantity
            ).update(
                {
                    StockItem.current_stock: _rounded(StockItem.current_stock - quantity),
                    StockItem.updated_at: func.current_timestamp()
                },
                synchronize_session=False
            )

            if updated != 1:
                available = self.db.query(StockItem.current_stock).filter(
                    StockItem.id == item_id
                ).scalar()
                if available is None:
                    logger.info(f"Item {item_id} deleted during sale")
                    raise NotFoundError("Stock item not found", entity="item")
                logger.info(f"Lost stock race on item {item_id}, available {available}")
                raise InsufficientStockError(available)

            # STEP 5: append the sale
            sale = Sale(
                family_id=family_id,
                item_id=item.id,
                item_name=item.item_name,
                quantity=quantity,
                unit_price=unit_price,
                total_amount=total_amount,
                sale_date=datetime.now()
            )
            self.db.add(sale)
            self.db.flush()

            logger.info(f"Sale {sale.id} staged: item {item_id} -{quantity} for family {family_id}")

        # STEP 6 committed by atomic()
        reload(self.db, sale)
        return sale

    @run_query("listing sales")
    def get_all(self) -> List[Sale]:
        """All sales, most recent first"""
        return self.db.query(Sale).order_by(desc(Sale.sale_date), desc(Sale.id)).all()

    @run_query("listing sales by family")
    def get_by_family(self, family_id: str) -> List[Sale]:
        return self.db.query(Sale).filter(
            Sale.family_id == family_id
        ).order_by(desc(Sale.sale_date), desc(Sale.id)).all()

    @run_query("summarizing daily sales")
    def get_daily_summary(self, target_date: date) -> Dict[str, Any]:
        """
        Sum and count of the sales dated target_date.

        Aggregate query instead of loading the day's sales.
        """
        start, end = day_bounds(target_date)

        summary = self.db.query(
            func.coalesce(func.sum(Sale.total_amount), 0).label('total_amount'),
            func.count(Sale.id).label('count')
        ).filter(
            Sale.sale_date >= start,
            Sale.sale_date < end
        ).one()

        return {
            "total_amount": float(summary.total_amount or 0),
            "count": summary.count or 0
        }

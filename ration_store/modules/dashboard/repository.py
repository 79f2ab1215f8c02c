from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Any, Dict
from datetime import date

from ration_store.shared.database.models import Family, StockItem
from ration_store.shared.database.transaction import run_query
from ration_store.modules.sales.repository import SalesRepository


class DashboardRepository:
    def __init__(self, db: Session):
        self.db = db
        self.sales_repository = SalesRepository(db)

    @run_query("computing dashboard stats")
    def get_stats(self, target_date: date) -> Dict[str, Any]:
        """Counts over the current store contents; nothing is cached"""
        total_stock_items = self.db.query(func.count(StockItem.id)).scalar()

        registered_families = self.db.query(func.count(Family.id)).scalar()

        low_stock_items = self.db.query(func.count(StockItem.id)).filter(
            StockItem.current_stock <= StockItem.threshold
        ).scalar()

        today = self.sales_repository.get_daily_summary(target_date)

        return {
            'total_stock_items': total_stock_items or 0,
            'registered_families': registered_families or 0,
            'low_stock_items': low_stock_items or 0,
            'today_sales_amount': today['total_amount'],
            'today_sales_count': today['count']
        }

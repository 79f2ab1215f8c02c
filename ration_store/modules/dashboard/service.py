from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from .repository import DashboardRepository
from .schemas import DashboardStatsResponse


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = DashboardRepository(db)

    def get_stats(self, target_date: Optional[date] = None) -> DashboardStatsResponse:
        stats = self.repository.get_stats(target_date or date.today())
        return DashboardStatsResponse(**stats)

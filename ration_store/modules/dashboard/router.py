# ration_store/modules/dashboard/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ration_store.config.database import get_db
from .service import DashboardService
from .schemas import DashboardStatsResponse

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(db: Session = Depends(get_db)):
    """
    Dashboard summary

    **Includes:**
    - Number of stock items and of registered families
    - Items at or below their low-stock threshold
    - Today's sales amount and count
    """
    return DashboardService(db).get_stats()

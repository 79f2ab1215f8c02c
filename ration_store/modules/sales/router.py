# ration_store/modules/sales/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ration_store.config.database import get_db
from ration_store.shared.schemas.common import ErrorResponse
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse, TodaySalesResponse

router = APIRouter()


@router.get("", response_model=List[SaleResponse])
def list_sales(
    family_id: Optional[str] = Query(None, alias="familyId", description="Only this family's sales"),
    db: Session = Depends(get_db)
):
    """Sale log, most recent first"""
    return SalesService(db).list_sales(family_id)


@router.get("/today", response_model=TodaySalesResponse)
def get_today_sales(db: Session = Depends(get_db)):
    """Sum and count of today's sales (server-local date)"""
    return SalesService(db).get_today_sales()


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or insufficient stock"},
        404: {"model": ErrorResponse, "description": "Unknown family or stock item"},
    }
)
def create_sale(sale_data: SaleCreateRequest, db: Session = Depends(get_db)):
    """
    Record a sale

    **Includes:**
    - Stock sufficiency check (error carries the available quantity)
    - Family check by ration card number
    - Stock decrement and sale record in one transaction
    - Item name captured at sale time
    """
    return SalesService(db).record_sale(sale_data)

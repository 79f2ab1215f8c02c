# ration_store/modules/stock/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ration_store.config.database import get_db
from ration_store.shared.schemas.common import ErrorResponse, MessageResponse
from .service import StockService
from .schemas import StockItemCreate, StockItemUpdate, StockItemResponse

router = APIRouter()


@router.get("", response_model=List[StockItemResponse])
def list_stock_items(db: Session = Depends(get_db)):
    """All stock items, newest first"""
    return StockService(db).list_items()


@router.get("/low", response_model=List[StockItemResponse])
def list_low_stock_items(db: Session = Depends(get_db)):
    """Items whose current stock is at or below their threshold"""
    return StockService(db).list_low_stock()


@router.get("/{item_id}", response_model=StockItemResponse, responses={404: {"model": ErrorResponse}})
def get_stock_item(item_id: int, db: Session = Depends(get_db)):
    return StockService(db).get_item(item_id)


@router.post(
    "",
    response_model=StockItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}}
)
def create_stock_item(item_data: StockItemCreate, db: Session = Depends(get_db)):
    """
    Add a stock item

    **Validation:**
    - All fields required, quantities non-negative
    - currentStock cannot exceed totalStock
    """
    return StockService(db).create_item(item_data)


@router.put(
    "/{item_id}",
    response_model=StockItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
def update_stock_item(item_id: int, item_data: StockItemUpdate, db: Session = Depends(get_db)):
    return StockService(db).update_item(item_id, item_data)


@router.delete("/{item_id}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
def delete_stock_item(item_id: int, db: Session = Depends(get_db)):
    StockService(db).delete_item(item_id)
    return MessageResponse(message="Stock item deleted successfully", id=item_id)

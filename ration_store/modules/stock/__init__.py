# ration_store/modules/stock/__init__.py
"""
Stock Module - Inventory lines

Each item tracks its capacity (totalStock), quantity on hand (currentStock)
and low-stock threshold. currentStock never exceeds totalStock.

Architecture:
- router.py: Stock endpoints
- service.py: Business rules
- repository.py: Data access
- schemas.py: Request/response models
"""

from .router import router
from .service import StockService
from .repository import StockRepository

__all__ = [
    "router",
    "StockService",
    "StockRepository"
]

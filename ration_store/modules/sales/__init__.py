# ration_store/modules/sales/__init__.py
"""
Sales Module - Ration distribution

Handles the sale of rationed goods to registered families:
- Sale recording with atomic stock decrement
- Append-only sale log
- Today's sales totals

Architecture:
- router.py: Sales endpoints
- service.py: Business rules
- repository.py: Data access and the sale transaction
- schemas.py: Request/response models
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]

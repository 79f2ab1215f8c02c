# ration_store/modules/families/__init__.py
"""
Families Module - Registered households

Handles the families entitled to rationed goods:
- Registration, update and deletion
- Lookup by internal id or by ration card number (familyId)
- Uniqueness of the ration card number

Architecture:
- router.py: Family endpoints
- service.py: Business rules
- repository.py: Data access
- schemas.py: Request/response models
"""

from .router import router
from .service import FamiliesService
from .repository import FamiliesRepository

__all__ = [
    "router",
    "FamiliesService",
    "FamiliesRepository"
]

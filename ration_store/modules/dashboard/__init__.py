# ration_store/modules/dashboard/__init__.py
"""
Dashboard Module - Store summary

Read-only aggregates recomputed on every call.
"""

from .router import router
from .service import DashboardService
from .repository import DashboardRepository

__all__ = [
    "router",
    "DashboardService",
    "DashboardRepository"
]

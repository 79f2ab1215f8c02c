# ration_store/api/v1/router.py
from fastapi import APIRouter, Depends

from ration_store.api.v1.auth import router as auth_router
from ration_store.core.auth.dependencies import get_current_user
from ration_store.modules.families import router as families_router
from ration_store.modules.stock import router as stock_router
from ration_store.modules.sales import router as sales_router
from ration_store.modules.dashboard import router as dashboard_router


# Main API router
api_router = APIRouter()

# Every business module requires a logged-in operator
authenticated = [Depends(get_current_user)]

# ==================== AUTH ====================

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

# ==================== MODULES ====================

api_router.include_router(
    families_router,
    prefix="/families",
    tags=["Families"],
    dependencies=authenticated
)

api_router.include_router(
    stock_router,
    prefix="/stock",
    tags=["Stock"],
    dependencies=authenticated
)

api_router.include_router(
    sales_router,
    prefix="/sales",
    tags=["Sales"],
    dependencies=authenticated
)

api_router.include_router(
    dashboard_router,
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=authenticated
)


@api_router.get("/")
async def api_root():
    """API root"""
    return {
        "message": "Ration Store API",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "authentication": "/auth",
            "families": "/families",
            "stock": "/stock",
            "sales": "/sales",
            "dashboard": "/dashboard/stats"
        }
    }

from ration_store.shared.schemas.common import CamelModel


class DashboardStatsResponse(CamelModel):
    """Summary cards of the dashboard"""
    total_stock_items: int
    today_sales_amount: float
    today_sales_count: int
    registered_families: int
    low_stock_items: int

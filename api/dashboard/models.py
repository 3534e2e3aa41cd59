# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from core.schemas import CamelModel


class StatusBreakdown(CamelModel):
    """Asset count per status."""
    available: int = 0
    assigned: int = 0
    in_repair: int = 0
    retired: int = 0
    lost: int = 0
    damaged: int = 0


class CategoryBreakdown(CamelModel):
    """Asset count per status within one category."""
    name: str
    available: int = 0
    assigned: int = 0
    in_repair: int = 0


class DashboardSummary(CamelModel):
    """Inventory overview."""
    total_assets: int
    total_asset_value: float
    by_status: StatusBreakdown
    by_category: list[CategoryBreakdown]
    active_assignments: int
    open_maintenance: int
    maintenance_cost: float
    pending_requests: int

# api/dashboard/db_manager.py
"""
Business logic for dashboard statistics.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import AssetStatus
from . import queries
from api.assignments import queries as assignment_queries
from api.maintenance import queries as maintenance_queries
from api.requests import queries as request_queries

# Status value -> breakdown field
STATUS_FIELDS = {
    AssetStatus.AVAILABLE.value: "available",
    AssetStatus.ASSIGNED.value: "assigned",
    AssetStatus.IN_REPAIR.value: "in_repair",
    AssetStatus.RETIRED.value: "retired",
    AssetStatus.LOST.value: "lost",
    AssetStatus.DAMAGED.value: "damaged",
}

# Statuses charted per category
CATEGORY_STATUSES = (
    AssetStatus.AVAILABLE.value,
    AssetStatus.ASSIGNED.value,
    AssetStatus.IN_REPAIR.value,
)


async def get_summary(db: AsyncSession) -> dict:
    """
    Get the inventory overview shown on the admin dashboard.
    """
    result = await db.execute(queries.count_total_assets())
    total_assets = result.scalar() or 0

    result = await db.execute(queries.sum_asset_value())
    total_value = float(result.scalar() or 0.0)

    by_status = {field: 0 for field in STATUS_FIELDS.values()}
    result = await db.execute(queries.count_assets_by_status())
    for status_value, count in result.all():
        field = STATUS_FIELDS.get(status_value)
        if field:
            by_status[field] = count

    categories: dict[str, dict] = {}
    result = await db.execute(queries.count_assets_by_category_and_status())
    for category, status_value, count in result.all():
        entry = categories.setdefault(
            category, {"name": category, "available": 0, "assigned": 0, "in_repair": 0}
        )
        if status_value in CATEGORY_STATUSES:
            entry[STATUS_FIELDS[status_value]] = count

    result = await db.execute(assignment_queries.count_active_assignments())
    active_assignments = result.scalar() or 0

    result = await db.execute(maintenance_queries.count_open_logs())
    open_maintenance = result.scalar() or 0

    result = await db.execute(maintenance_queries.sum_maintenance_cost())
    maintenance_cost = float(result.scalar() or 0.0)

    result = await db.execute(request_queries.count_pending_requests())
    pending_requests = result.scalar() or 0

    return {
        "total_assets": total_assets,
        "total_asset_value": round(total_value, 2),
        "by_status": by_status,
        "by_category": list(categories.values()),
        "active_assignments": active_assignments,
        "open_maintenance": open_maintenance,
        "maintenance_cost": round(maintenance_cost, 2),
        "pending_requests": pending_requests,
    }

# api/maintenance/queries.py
"""
SQLAlchemy query builders for maintenance logs.
"""
from sqlalchemy import select, func

from db_models.maintenance_log import MaintenanceLog, MaintenanceStatus


def select_all_logs():
    """Select all maintenance logs, newest first."""
    return select(MaintenanceLog).order_by(MaintenanceLog.date.desc())


def count_open_logs():
    """Count logs still in progress."""
    return (
        select(func.count(MaintenanceLog.id))
        .where(MaintenanceLog.status == MaintenanceStatus.IN_PROGRESS.value)
    )


def sum_maintenance_cost():
    """Total spent on maintenance."""
    return select(func.coalesce(func.sum(MaintenanceLog.cost), 0.0))

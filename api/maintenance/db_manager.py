# api/maintenance/db_manager.py
"""
Business logic for maintenance logs.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.maintenance_log import MaintenanceLog
from .models import MaintenancePayload
from . import queries


async def list_logs(db: AsyncSession) -> list[MaintenanceLog]:
    result = await db.execute(queries.select_all_logs())
    return list(result.scalars().all())


async def upsert_log(db: AsyncSession, payload: MaintenancePayload) -> MaintenanceLog:
    """
    Record a new log; a repeated save of an existing log only changes its status.
    """
    log = await db.get(MaintenanceLog, payload.id)
    if log is None:
        values = payload.model_dump(mode="python")
        values["status"] = payload.status.value
        log = MaintenanceLog(**values)
        db.add(log)
    else:
        log.status = payload.status.value

    await db.commit()
    await db.refresh(log)
    return log

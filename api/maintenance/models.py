# api/maintenance/models.py
import datetime

from pydantic import Field

from core.schemas import CamelModel
from db_models.maintenance_log import MaintenanceStatus


class MaintenancePayload(CamelModel):
    """Repair job on an asset."""
    id: str = Field(..., min_length=1, max_length=50)
    asset_id: str
    description: str = Field(..., min_length=1)
    vendor: str = ""
    cost: float = Field(0.0, ge=0)
    date: datetime.date
    status: MaintenanceStatus = MaintenanceStatus.IN_PROGRESS

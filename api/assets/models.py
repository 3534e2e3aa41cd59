# api/assets/models.py
from datetime import date

from pydantic import Field

from core.schemas import CamelModel
from db_models.asset import AssetCondition, AssetStatus


class AssetPayload(CamelModel):
    """Full asset record; POST upserts by id."""
    id: str = Field(..., min_length=1, max_length=50)
    tag: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    serial_number: str = ""
    category: str = Field(..., min_length=1, max_length=100)
    vendor: str = ""
    purchase_date: date
    cost: float = Field(0.0, ge=0)
    status: AssetStatus = AssetStatus.AVAILABLE
    condition: AssetCondition = AssetCondition.GOOD
    location: str = ""
    assigned_to: str | None = None
    image: str | None = None

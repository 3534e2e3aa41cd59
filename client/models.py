# client/models.py
"""
Entities held by the client core.

Instances are frozen: the store replaces an entity with ``model_copy(update=...)``
instead of mutating it, so a captured original is safe to restore on rollback.
"""
import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from core.schemas import CamelModel


class Collection(str, Enum):
    """Remote collections; the value is the URL path segment."""
    ASSETS = "assets"
    EMPLOYEES = "employees"
    ASSIGNMENTS = "assignments"
    MAINTENANCE = "maintenance"
    REQUESTS = "requests"


class AssetStatus(str, Enum):
    AVAILABLE = "Available"
    ASSIGNED = "Assigned"
    IN_REPAIR = "In Repair"
    RETIRED = "Retired"
    LOST = "Lost"
    DAMAGED = "Damaged"


class AssetCondition(str, Enum):
    NEW = "New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    DAMAGED = "Damaged"


class MaintenanceStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class RequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CLOSED = "Closed"


class Entity(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str

    def to_wire(self) -> dict:
        """camelCase JSON-ready dict."""
        return self.model_dump(mode="json", by_alias=True)


class Asset(Entity):
    tag: str
    name: str
    serial_number: str = ""
    category: str
    vendor: str = ""
    purchase_date: datetime.date
    cost: float = 0.0
    status: AssetStatus = AssetStatus.AVAILABLE
    condition: AssetCondition = AssetCondition.GOOD
    location: str = ""
    assigned_to: str | None = None
    image: str | None = None


class Employee(Entity):
    name: str
    email: str
    department: str = ""
    role: str = ""
    join_date: datetime.date
    avatar: str | None = None


class Assignment(Entity):
    asset_id: str
    employee_id: str
    borrow_date: datetime.date
    expected_return_date: datetime.date | None = None
    returned_date: datetime.date | None = None
    notes: str | None = None
    is_active: bool = True


class MaintenanceLog(Entity):
    asset_id: str
    description: str
    vendor: str = ""
    cost: float = 0.0
    date: datetime.date
    status: MaintenanceStatus = MaintenanceStatus.IN_PROGRESS


class AssetRequest(Entity):
    """Service ticket. ``message_count`` is derived server side."""
    employee_id: str | None = None
    category: str
    reason: str = ""
    status: RequestStatus = RequestStatus.PENDING
    request_date: datetime.date
    user_id: str | None = None
    user_name: str | None = None
    user_email: str | None = None
    request_ip: str | None = None
    message_count: int = 0


class TicketMessage(Entity):
    request_id: str
    sender_id: str
    sender_name: str
    message: str
    timestamp: datetime.datetime


class AuthProfile(Entity):
    name: str
    email: str
    role: Literal["admin", "user"]
    employee_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Session(BaseModel):
    """Identity plus token; also the durable storage payload."""
    model_config = ConfigDict(frozen=True)

    user: AuthProfile
    token: str


ENTITY_TYPES: dict[Collection, type[Entity]] = {
    Collection.ASSETS: Asset,
    Collection.EMPLOYEES: Employee,
    Collection.ASSIGNMENTS: Assignment,
    Collection.MAINTENANCE: MaintenanceLog,
    Collection.REQUESTS: AssetRequest,
}

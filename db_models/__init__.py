# Import models so they are registered on Base.metadata
from db_models.asset import Asset, AssetCondition, AssetStatus
from db_models.employee import Employee
from db_models.assignment import Assignment
from db_models.maintenance_log import MaintenanceLog, MaintenanceStatus
from db_models.asset_request import AssetRequest, RequestMetadata, RequestStatus
from db_models.ticket_message import TicketMessage
from db_models.user import User, UserRole

# services/__init__.py
from .actor import ActorContext
from .bill_service import BillService
from .contract_request_service import ContractRequestService
from .contract_service import ContractService
from .property_service import MotelService, RoomService
from . import notification_service
from . import resource_registry

__all__ = [
     "ActorContext",
     "BillService",
     "ContractRequestService",
     "ContractService",
     "MotelService",
     "RoomService",
     "notification_service",
     "resource_registry",
]

# schemas/__init__.py
from .contract import (
     ContractCreate,
     ContractUpdate,
     ContractResponse,
     ContractListResponse,
     ContractDocumentResponse,
)
from .contract_request import (
     ContractRequestCreate,
     ContractRequestUpdate,
     RespondToContractRequest,
     ContractRequestDecision,
     ContractRequestDecisionBody,
     ContractRequestResponse,
     ContractRequestListResponse,
)
from .bill import BillCreate, BillResponse, BillListResponse
from .notification import NotificationResponse
from .resource import (
     RoomCreate,
     RoomUpdate,
     RoomResponse,
     RoomListResponse,
     RoomSort,
     MotelCreate,
     MotelUpdate,
     MotelResponse,
     MotelListResponse,
)

__all__ = [
     "ContractCreate",
     "ContractUpdate",
     "ContractResponse",
     "ContractListResponse",
     "ContractDocumentResponse",
     "ContractRequestCreate",
     "ContractRequestUpdate",
     "RespondToContractRequest",
     "ContractRequestDecision",
     "ContractRequestDecisionBody",
     "ContractRequestResponse",
     "ContractRequestListResponse",
     "BillCreate",
     "BillResponse",
     "BillListResponse",
     "NotificationResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "RoomListResponse",
     "RoomSort",
     "MotelCreate",
     "MotelUpdate",
     "MotelResponse",
     "MotelListResponse",
]

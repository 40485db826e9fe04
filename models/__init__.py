# models/__init__.py
from .base import Base
from .user import User, UserRole
from .room import Room, RoomStatus
from .motel import Motel
from .target import ContractType, RoomTarget, MotelTarget, Target, build_target
from .contract import Contract, ContractStatus
from .contract_request import ContractRequest, ContractRequestStatus, ContractRequestInitiator
from .bill import Bill, BillStatus
from .notification import Notification

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Room",
     "RoomStatus",
     "Motel",
     "ContractType",
     "RoomTarget",
     "MotelTarget",
     "Target",
     "build_target",
     "Contract",
     "ContractStatus",
     "ContractRequest",
     "ContractRequestStatus",
     "ContractRequestInitiator",
     "Bill",
     "BillStatus",
     "Notification",
]

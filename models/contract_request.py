# models/contract_request.py
import enum
from sqlalchemy import Column, Integer, Numeric, Date, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base
from .target import ContractType, MotelTarget, RoomTarget, Target


class ContractRequestStatus(str, enum.Enum):
     """PENDING is the only state a request can leave."""
     PENDING = "PENDING"
     APPROVED = "APPROVED"
     REJECTED = "REJECTED"
     CANCELLED = "CANCELLED"


class ContractRequestInitiator(str, enum.Enum):
     """Which party proposed the tenancy; the other party responds."""
     LANDLORD = "LANDLORD"
     TENANT = "TENANT"


class ContractRequest(Base):
     """
     ContractRequest model - proposed tenancy terms awaiting the counter-party.

     On approval the produced contract is linked through contract_id.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     type = Column(
          Enum(ContractType, name="contract_request_type", create_constraint=True),
          default=ContractType.ROOM,
          nullable=False,
     )
     initiated_by = Column(
          Enum(ContractRequestInitiator, name="contract_request_initiator", create_constraint=True),
          nullable=False,
     )
     status = Column(
          Enum(ContractRequestStatus, name="contract_request_status", create_constraint=True),
          default=ContractRequestStatus.PENDING,
          nullable=False,
          index=True,
     )

     # Room or motel being requested
     room_id = Column(Integer, ForeignKey("rooms.id"), nullable=True)
     motel_id = Column(Integer, ForeignKey("motels.id"), nullable=True)

     # Parties
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Proposed terms
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)
     monthly_rent = Column(Numeric(14, 2), nullable=False)
     deposit = Column(Numeric(14, 2), nullable=False)
     electricity_cost_per_kwh = Column(Numeric(12, 2), nullable=True)
     water_cost_per_cubic_meter = Column(Numeric(12, 2), nullable=True)
     internet_cost = Column(Numeric(12, 2), nullable=True)
     parking_cost = Column(Numeric(12, 2), nullable=True)
     service_fee = Column(Numeric(12, 2), nullable=True)
     special_terms = Column(Text, nullable=True)

     # Negotiation
     message = Column(Text, nullable=True)
     response_message = Column(Text, nullable=True)
     responded_at = Column(DateTime, nullable=True)

     # Set when approved
     contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     room = relationship("Room")
     motel = relationship("Motel")
     landlord = relationship("User", foreign_keys=[landlord_id])
     tenant = relationship("User", foreign_keys=[tenant_id])
     contract = relationship("Contract")

     @property
     def target(self) -> Target:
          if self.type == ContractType.ROOM:
               return RoomTarget(room_id=self.room_id)
          return MotelTarget(motel_id=self.motel_id)

     @property
     def initiator_id(self) -> int:
          if self.initiated_by == ContractRequestInitiator.LANDLORD:
               return self.landlord_id
          return self.tenant_id

     @property
     def counterparty_id(self) -> int:
          if self.initiated_by == ContractRequestInitiator.LANDLORD:
               return self.tenant_id
          return self.landlord_id

     def __repr__(self):
          return f"<ContractRequest(id={self.id}, status='{self.status.value}', initiated_by='{self.initiated_by.value}')>"

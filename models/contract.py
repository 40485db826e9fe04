# models/contract.py
import enum
from sqlalchemy import Column, Integer, Numeric, Date, Boolean, Text, DateTime, ForeignKey, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from .base import Base
from .target import ContractType, MotelTarget, RoomTarget, Target


class ContractStatus(str, enum.Enum):
     """Lifecycle of a binding contract."""
     PENDING_TENANT = "PENDING_TENANT"
     ACTIVE = "ACTIVE"
     TERMINATED = "TERMINATED"
     EXPIRED = "EXPIRED"


class Contract(Base):
     """
     Contract model - the binding tenancy agreement for a room or a whole motel.

     Financial and utility columns hold the effective terms resolved when the
     contract was created (contract value, else resource default, else hard
     default). Bills reference contracts; a contract with bills cannot be
     deleted.
     """
     __table_args__ = (
          CheckConstraint("end_date > start_date", name="ck_contracts_date_order"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     type = Column(
          Enum(ContractType, name="contract_type", create_constraint=True),
          default=ContractType.ROOM,
          nullable=False,
     )

     # Target (exactly one is set, matching type)
     room_id = Column(Integer, ForeignKey("rooms.id"), nullable=True, index=True)
     motel_id = Column(Integer, ForeignKey("motels.id"), nullable=True, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Contract period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     # Financial terms
     monthly_rent = Column(Numeric(14, 2), nullable=False)
     deposit = Column(Numeric(14, 2), nullable=False)
     payment_cycle_months = Column(Integer, default=1, nullable=False)
     payment_day = Column(Integer, default=5, nullable=False)
     max_occupants = Column(Integer, default=4, nullable=False)

     # Utility unit costs at signing time
     electricity_cost_per_kwh = Column(Numeric(12, 2), nullable=False)
     water_cost_per_cubic_meter = Column(Numeric(12, 2), nullable=False)
     internet_cost = Column(Numeric(12, 2), nullable=False)
     parking_cost = Column(Numeric(12, 2), nullable=False)
     service_fee = Column(Numeric(12, 2), nullable=False)

     has_wifi = Column(Boolean, default=False, nullable=False)
     has_parking = Column(Boolean, default=False, nullable=False)

     status = Column(
          Enum(ContractStatus, name="contract_status", create_constraint=True),
          default=ContractStatus.PENDING_TENANT,
          nullable=False,
          index=True,
     )

     # Document
     document_content = Column(Text, nullable=True)
     special_terms = Column(Text, nullable=True)
     regulations = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     room = relationship("Room", back_populates="contracts")
     motel = relationship("Motel", back_populates="contracts")
     tenant = relationship("User", back_populates="contracts")
     bills = relationship("Bill", back_populates="contract")

     @property
     def target(self) -> Target:
          if self.type == ContractType.ROOM:
               return RoomTarget(room_id=self.room_id)
          return MotelTarget(motel_id=self.motel_id)

     @property
     def is_active(self) -> bool:
          return self.status == ContractStatus.ACTIVE

     def __repr__(self):
          return f"<Contract(id={self.id}, type='{self.type.value}', tenant_id={self.tenant_id}, status='{self.status.value}')>"

# models/bill.py
import enum
from sqlalchemy import Column, Integer, Numeric, Date, DateTime, ForeignKey, Enum, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class BillStatus(str, enum.Enum):
     """Enumeration for bill payment status."""
     PENDING = "PENDING"
     PAID = "PAID"


class Bill(Base):
     """
     Bill model - one billed month of rent-side utilities for a contract.

     Meter readings and unit rates are stored so the total can be audited.
     The RESTRICT foreign key backs the rule that a billed contract is never
     hard-deleted.
     """
     __table_args__ = (
          UniqueConstraint("contract_id", "month", name="uq_bills_contract_month"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     contract_id = Column(
          Integer,
          ForeignKey("contracts.id", ondelete="RESTRICT"),
          nullable=False,
          index=True
     )

     # Billing period (first day of the month)
     month = Column(Date, nullable=False, index=True)

     # Meter readings
     electricity_start = Column(Integer, nullable=False)
     electricity_end = Column(Integer, nullable=False)
     water_start = Column(Integer, nullable=False)
     water_end = Column(Integer, nullable=False)

     # Rates and amounts
     electricity_rate = Column(Numeric(12, 2), nullable=False)
     water_rate = Column(Numeric(12, 2), nullable=False)
     other_fees = Column(Numeric(14, 2), default=0, nullable=False)
     total_amount = Column(Numeric(14, 2), nullable=False)

     status = Column(
          Enum(BillStatus, name="bill_status", create_constraint=True),
          default=BillStatus.PENDING,
          nullable=False,
          index=True
     )
     paid_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     contract = relationship("Contract", back_populates="bills")

     def __repr__(self):
          return f"<Bill(id={self.id}, contract_id={self.contract_id}, total={self.total_amount}, status='{self.status.value}')>"

     @property
     def is_paid(self) -> bool:
          return self.status == BillStatus.PAID

     def mark_as_paid(self, paid_at) -> None:
          """Mark the bill as paid."""
          self.status = BillStatus.PAID
          self.paid_at = paid_at

# models/motel.py
from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base
from .room import RoomStatus


class Motel(Base):
     """
     Motel model - a multi-room property that can also be rented as a whole.

     Pricing and utility columns are the defaults a whole-motel contract falls
     back to when the contract itself leaves them out.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)
     description = Column(Text, nullable=True)
     total_rooms = Column(Integer, nullable=False, default=0)

     # Contracts never write this column; whole-motel occupancy is not tracked
     status = Column(
          Enum(RoomStatus, name="motel_status", create_constraint=True),
          default=RoomStatus.VACANT,
          nullable=False,
     )

     # Pricing
     monthly_rent = Column(Numeric(14, 2), nullable=True)
     payment_cycle_months = Column(Integer, nullable=True)
     deposit_months = Column(Integer, nullable=True)

     # Utilities
     electricity_cost_per_kwh = Column(Numeric(12, 2), nullable=True)
     water_cost_per_cubic_meter = Column(Numeric(12, 2), nullable=True)
     internet_cost = Column(Numeric(12, 2), nullable=True)
     parking_cost = Column(Numeric(12, 2), nullable=True)

     # Amenities and house rules
     has_wifi = Column(Boolean, default=False, nullable=False)
     has_parking = Column(Boolean, default=False, nullable=False)
     allow_pets = Column(Boolean, default=False, nullable=False)
     allow_cooking = Column(Boolean, default=False, nullable=False)
     regulations = Column(Text, nullable=True)

     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     owner = relationship("User", back_populates="owned_motels")
     rooms = relationship("Room", back_populates="motel")
     contracts = relationship("Contract", back_populates="motel")

     def __repr__(self):
          return f"<Motel(id={self.id}, name='{self.name}', total_rooms={self.total_rooms})>"

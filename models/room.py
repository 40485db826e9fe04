# models/room.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class RoomStatus(str, enum.Enum):
     """Occupancy status of a rentable resource."""
     VACANT = "VACANT"
     OCCUPIED = "OCCUPIED"
     MAINTENANCE = "MAINTENANCE"


class Room(Base):
     """
     Room model - a standalone rentable room, optionally inside a motel.

     status and current_tenant_id are written only by the resource registry
     (services/resource_registry.py) as part of a contract transition.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     number = Column(String(50), nullable=False)
     address = Column(String(500), nullable=True)
     area = Column(Numeric(8, 2), nullable=True)
     floor = Column(Integer, nullable=True)

     # Pricing
     price = Column(Numeric(14, 2), nullable=False)
     payment_cycle_months = Column(Integer, nullable=True)
     deposit_months = Column(Integer, nullable=True)

     # Occupancy
     status = Column(
          Enum(RoomStatus, name="room_status", create_constraint=True),
          default=RoomStatus.VACANT,
          nullable=False,
          index=True,
     )
     current_tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     max_occupancy = Column(Integer, nullable=True)

     # Utilities
     electricity_cost_per_kwh = Column(Numeric(12, 2), nullable=True)
     water_cost_per_cubic_meter = Column(Numeric(12, 2), nullable=True)
     internet_cost = Column(Numeric(12, 2), nullable=True)
     parking_cost = Column(Numeric(12, 2), nullable=True)
     service_fee = Column(Numeric(12, 2), nullable=True)

     # Amenities and house rules
     has_wifi = Column(Boolean, default=False, nullable=False)
     has_parking = Column(Boolean, default=False, nullable=False)
     allow_pets = Column(Boolean, default=False, nullable=False)
     allow_cooking = Column(Boolean, default=False, nullable=False)

     owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     motel_id = Column(Integer, ForeignKey("motels.id"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     owner = relationship("User", back_populates="owned_rooms", foreign_keys=[owner_id])
     current_tenant = relationship("User", foreign_keys=[current_tenant_id])
     motel = relationship("Motel", back_populates="rooms")
     contracts = relationship("Contract", back_populates="room")

     @property
     def is_occupied(self) -> bool:
          return self.status == RoomStatus.OCCUPIED

     def __repr__(self):
          return f"<Room(id={self.id}, number='{self.number}', status='{self.status.value}')>"

# models/user.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class UserRole(str, enum.Enum):
     """Roles carried in the bearer token and stored on the user row."""
     ADMIN = "ADMIN"
     LANDLORD = "LANDLORD"
     TENANT = "TENANT"


class User(Base):
     """
     User model - landlords, tenants and administrators.

     Credentials and sessions live with the identity provider; this table only
     holds what contracts and notifications need to reference.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     first_name = Column(String(100), nullable=True)
     last_name = Column(String(100), nullable=True)
     phone_number = Column(String(50), nullable=True)
     role = Column(
          Enum(UserRole, name="user_role", create_constraint=True),
          default=UserRole.TENANT,
          nullable=False,
     )
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owned_motels = relationship("Motel", back_populates="owner")
     owned_rooms = relationship("Room", back_populates="owner", foreign_keys="Room.owner_id")
     contracts = relationship("Contract", back_populates="tenant")

     @property
     def full_name(self) -> str:
          """Display name used in notifications and contract documents."""
          parts = [p for p in (self.last_name, self.first_name) if p]
          return " ".join(parts) if parts else self.email

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"

# services/users.py
from sqlalchemy.orm import Session

from errors import DomainValidationError, NotFoundError
from models import User


def resolve_user(db: Session, user_id: int, label: str = "User") -> User:
     """Load a user or raise NotFoundError naming the missing party."""
     user = db.get(User, user_id)
     if user is None:
          raise NotFoundError(f"{label} not found")
     return user


def resolve_tenant(db: Session, tenant_id: int, landlord_id: int) -> User:
     """Load the proposed tenant. An owner cannot rent their own property."""
     tenant = resolve_user(db, tenant_id, "Tenant")
     if tenant.id == landlord_id:
          raise DomainValidationError("The property owner cannot be the tenant")
     return tenant

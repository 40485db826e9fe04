# services/property_service.py
"""
Property Service - landlords list, edit and withdraw their rooms and motels.

Occupancy (Room.status, Room.current_tenant_id) is not writable from here;
the resource registry changes it as part of contract transitions. Deleting
a property that contracts or requests still point at is refused so that
contract history always resolves to its room or motel.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from errors import ForbiddenError, ResourceInUseError
from models import Contract, ContractRequest, Motel, Room, RoomStatus, UserRole
from models.contract import ContractStatus

from . import resource_registry as registry
from .actor import ActorContext

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def _ensure_owner(resource, actor: ActorContext, action: str) -> None:
     if actor.is_admin or resource.owner_id == actor.id:
          return
     kind = "room" if isinstance(resource, Room) else "motel"
     raise ForbiddenError(f"You do not have permission to {action} this {kind}")


def _count(db: Session, stmt) -> int:
     return db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()


def _paginate(db: Session, stmt, page: int, limit: Optional[int]) -> Tuple[list, int]:
     """Run stmt for one page and return (rows, total matching rows)."""
     limit = min(max(limit or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)
     page = max(page, 1)
     total = _count(db, stmt.order_by(None))
     rows = db.execute(stmt.offset((page - 1) * limit).limit(limit)).scalars()
     return list(rows), total


def _like(keyword: str) -> str:
     return f"%{keyword.strip()}%"


class RoomService:
     """Service class for room management."""

     NULLABLE_FIELDS = (
          "address",
          "area",
          "floor",
          "payment_cycle_months",
          "deposit_months",
          "max_occupancy",
          "electricity_cost_per_kwh",
          "water_cost_per_cubic_meter",
          "internet_cost",
          "parking_cost",
          "service_fee",
          "motel_id",
     )

     @staticmethod
     def get(db: Session, room_id: int) -> Room:
          return registry.get_room(db, room_id)

     @staticmethod
     def _check_motel(db: Session, motel_id: Optional[int], owner_id: int, actor: ActorContext) -> None:
          if motel_id is None:
               return
          motel = registry.get_motel(db, motel_id)
          if motel.owner_id != owner_id and not actor.is_admin:
               raise ForbiddenError("Rooms can only be added to a motel you own")

     @staticmethod
     def create(db: Session, actor: ActorContext, data) -> Room:
          """
          List a new room owned by the caller.

          Args:
               db: SQLAlchemy database session
               actor: landlord or admin; becomes the owner
               data: RoomCreate

          Returns:
               Created Room, VACANT and without a tenant

          Raises:
               NotFoundError: motel_id names a missing motel
               ForbiddenError: the motel belongs to someone else
          """
          RoomService._check_motel(db, data.motel_id, actor.id, actor)

          room = Room(
               **data.model_dump(),
               owner_id=actor.id,
               status=RoomStatus.VACANT,
               current_tenant_id=None,
          )
          db.add(room)
          db.flush()

          logger.info("Room %s (%s) created by user %s", room.id, room.number, actor.id)
          return room

     @staticmethod
     def update(db: Session, room_id: int, actor: ActorContext, data) -> Room:
          """
          Edit a room's details. Only fields present in data change.

          Raises:
               NotFoundError: room or new motel missing
               ForbiddenError: actor is not the owner, or the new motel is not theirs
          """
          room = registry.get_room(db, room_id, for_update=True)
          _ensure_owner(room, actor, "update")

          changes = {
               name: value
               for name, value in data.model_dump(exclude_unset=True).items()
               if value is not None or name in RoomService.NULLABLE_FIELDS
          }
          if changes.get("motel_id") is not None and changes["motel_id"] != room.motel_id:
               RoomService._check_motel(db, changes["motel_id"], room.owner_id, actor)

          for name, value in changes.items():
               setattr(room, name, value)
          db.flush()

          logger.info("Room %s updated (%s)", room.id, ", ".join(sorted(changes)) or "no changes")
          return room

     @staticmethod
     def remove(db: Session, room_id: int, actor: ActorContext) -> None:
          """
          Delete a room that no contract or request refers to.

          The row lock makes this wait for any contract being created on the
          room, so the checks below see it.

          Raises:
               NotFoundError: room doesn't exist
               ForbiddenError: actor is not the owner
               ResourceInUseError: the room has an ACTIVE contract or any
                    contract or request history
          """
          room = registry.get_room(db, room_id, for_update=True)
          _ensure_owner(room, actor, "delete")

          active = _count(
               db,
               select(Contract.id).where(Contract.room_id == room.id, Contract.status == ContractStatus.ACTIVE),
          )
          if active or room.is_occupied:
               raise ResourceInUseError("Cannot delete room with active contracts")

          history = _count(db, select(Contract.id).where(Contract.room_id == room.id))
          history += _count(db, select(ContractRequest.id).where(ContractRequest.room_id == room.id))
          if history:
               raise ResourceInUseError("Cannot delete a room that has contracts or contract requests")

          db.delete(room)
          db.flush()
          logger.info("Room %s deleted by user %s", room_id, actor.id)

     @staticmethod
     def list_mine(
          db: Session,
          actor: ActorContext,
          status: Optional[RoomStatus] = None,
     ) -> List[Room]:
          """Tenants get the rooms they occupy; landlords and admins the rooms they own."""
          if actor.role == UserRole.TENANT:
               stmt = select(Room).where(Room.current_tenant_id == actor.id)
          else:
               stmt = select(Room).where(Room.owner_id == actor.id)
          if status is not None:
               stmt = stmt.where(Room.status == status)
          stmt = stmt.order_by(Room.created_at.desc(), Room.id.desc())
          return list(db.execute(stmt).scalars())

     @staticmethod
     def search_vacant(
          db: Session,
          keyword: Optional[str] = None,
          min_price=None,
          max_price=None,
          has_wifi: Optional[bool] = None,
          has_parking: Optional[bool] = None,
          allow_pets: Optional[bool] = None,
          allow_cooking: Optional[bool] = None,
          sort: str = "newest",
          page: int = 1,
          limit: Optional[int] = None,
     ) -> Tuple[List[Room], int]:
          """
          Vacant rooms matching the filters, one page at a time.

          Returns:
               (rooms on the page, total matching rooms)
          """
          stmt = (
               select(Room)
               .outerjoin(Motel, Room.motel_id == Motel.id)
               .where(Room.status == RoomStatus.VACANT)
          )
          if keyword:
               pattern = _like(keyword)
               stmt = stmt.where(
                    or_(
                         Room.number.ilike(pattern),
                         Room.address.ilike(pattern),
                         Motel.name.ilike(pattern),
                    )
               )
          if min_price is not None:
               stmt = stmt.where(Room.price >= min_price)
          if max_price is not None:
               stmt = stmt.where(Room.price <= max_price)
          for column, wanted in (
               (Room.has_wifi, has_wifi),
               (Room.has_parking, has_parking),
               (Room.allow_pets, allow_pets),
               (Room.allow_cooking, allow_cooking),
          ):
               if wanted:
                    stmt = stmt.where(column)

          if sort == "price_asc":
               stmt = stmt.order_by(Room.price.asc(), Room.id.asc())
          elif sort == "price_desc":
               stmt = stmt.order_by(Room.price.desc(), Room.id.desc())
          else:
               stmt = stmt.order_by(Room.created_at.desc(), Room.id.desc())

          return _paginate(db, stmt, page, limit)


class MotelService:
     """Service class for motel management."""

     NULLABLE_FIELDS = (
          "description",
          "monthly_rent",
          "payment_cycle_months",
          "deposit_months",
          "electricity_cost_per_kwh",
          "water_cost_per_cubic_meter",
          "internet_cost",
          "parking_cost",
          "regulations",
     )

     @staticmethod
     def get(db: Session, motel_id: int) -> Motel:
          return registry.get_motel(db, motel_id)

     @staticmethod
     def create(db: Session, actor: ActorContext, data) -> Motel:
          motel = Motel(**data.model_dump(), owner_id=actor.id, status=RoomStatus.VACANT)
          db.add(motel)
          db.flush()

          logger.info("Motel %s (%s) created by user %s", motel.id, motel.name, actor.id)
          return motel

     @staticmethod
     def update(db: Session, motel_id: int, actor: ActorContext, data) -> Motel:
          """
          Edit a motel's details. Only fields present in data change.

          Raises:
               NotFoundError: motel doesn't exist
               ForbiddenError: actor is not the owner
          """
          motel = registry.get_motel(db, motel_id, for_update=True)
          _ensure_owner(motel, actor, "update")

          changes = {
               name: value
               for name, value in data.model_dump(exclude_unset=True).items()
               if value is not None or name in MotelService.NULLABLE_FIELDS
          }
          for name, value in changes.items():
               setattr(motel, name, value)
          db.flush()

          logger.info("Motel %s updated (%s)", motel.id, ", ".join(sorted(changes)) or "no changes")
          return motel

     @staticmethod
     def remove(db: Session, motel_id: int, actor: ActorContext) -> None:
          """
          Delete a motel with no rooms, contracts or requests left.

          Raises:
               NotFoundError: motel doesn't exist
               ForbiddenError: actor is not the owner
               ResourceInUseError: rooms, contracts or requests still refer to it
          """
          motel = registry.get_motel(db, motel_id, for_update=True)
          _ensure_owner(motel, actor, "delete")

          if _count(db, select(Room.id).where(Room.motel_id == motel.id)):
               raise ResourceInUseError("Cannot delete a motel that still has rooms")
          history = _count(db, select(Contract.id).where(Contract.motel_id == motel.id))
          history += _count(db, select(ContractRequest.id).where(ContractRequest.motel_id == motel.id))
          if history:
               raise ResourceInUseError("Cannot delete a motel that has contracts or contract requests")

          db.delete(motel)
          db.flush()
          logger.info("Motel %s deleted by user %s", motel_id, actor.id)

     @staticmethod
     def list_mine(db: Session, actor: ActorContext) -> List[Motel]:
          stmt = (
               select(Motel)
               .where(Motel.owner_id == actor.id)
               .order_by(Motel.created_at.desc(), Motel.id.desc())
          )
          return list(db.execute(stmt).scalars())

     @staticmethod
     def search(
          db: Session,
          keyword: Optional[str] = None,
          has_wifi: Optional[bool] = None,
          has_parking: Optional[bool] = None,
          allow_pets: Optional[bool] = None,
          allow_cooking: Optional[bool] = None,
          page: int = 1,
          limit: Optional[int] = None,
     ) -> Tuple[List[Motel], int]:
          """Motels matching the filters, newest first, one page at a time."""
          stmt = select(Motel)
          if keyword:
               pattern = _like(keyword)
               stmt = stmt.where(
                    or_(
                         Motel.name.ilike(pattern),
                         Motel.address.ilike(pattern),
                         Motel.description.ilike(pattern),
                    )
               )
          for column, wanted in (
               (Motel.has_wifi, has_wifi),
               (Motel.has_parking, has_parking),
               (Motel.allow_pets, allow_pets),
               (Motel.allow_cooking, allow_cooking),
          ):
               if wanted:
                    stmt = stmt.where(column)
          stmt = stmt.order_by(Motel.created_at.desc(), Motel.id.desc())
          return _paginate(db, stmt, page, limit)

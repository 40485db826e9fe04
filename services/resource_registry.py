# services/resource_registry.py
"""
Resource registry - rooms and motels as the rentable units of a contract.

lock/unlock are the only writers of Room.status and Room.current_tenant_id.
They must run inside the caller's transaction, next to the contract change
that depends on them; the caller commits both or neither.

Locking happens in two layers:
1. the room row is read with SELECT ... FOR UPDATE, so concurrent
   transactions on the same room queue behind each other;
2. the status write is a guarded UPDATE (WHERE status != OCCUPIED) whose
   row count is checked, so a stale read can never double-book a room.
"""
import logging
from typing import Optional, Union

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from errors import NotFoundError, ResourceOccupiedError
from models import Motel, Room, RoomStatus
from models.target import MotelTarget, RoomTarget, Target

logger = logging.getLogger(__name__)

Resource = Union[Room, Motel]


def get_room(db: Session, room_id: int, for_update: bool = False) -> Room:
     """Load a room, optionally holding its row lock until the transaction ends."""
     stmt = select(Room).where(Room.id == room_id)
     if for_update:
          stmt = stmt.with_for_update().execution_options(populate_existing=True)
     room = db.execute(stmt).scalar_one_or_none()
     if room is None:
          raise NotFoundError("Room not found")
     return room


def get_motel(db: Session, motel_id: int, for_update: bool = False) -> Motel:
     """Load a motel, optionally holding its row lock until the transaction ends."""
     stmt = select(Motel).where(Motel.id == motel_id)
     if for_update:
          stmt = stmt.with_for_update().execution_options(populate_existing=True)
     motel = db.execute(stmt).scalar_one_or_none()
     if motel is None:
          raise NotFoundError("Motel not found")
     return motel


def resolve_resource(db: Session, target: Target, for_update: bool = False) -> Resource:
     """Load the room or motel a target points at."""
     if isinstance(target, RoomTarget):
          return get_room(db, target.room_id, for_update=for_update)
     if isinstance(target, MotelTarget):
          return get_motel(db, target.motel_id, for_update=for_update)
     raise TypeError(f"Unknown contract target: {target!r}")


def landlord_id_of(resource: Resource) -> int:
     return resource.owner_id


def resource_label(resource: Resource) -> str:
     """How a resource is named in notifications and contract documents."""
     if isinstance(resource, Room):
          if resource.motel is not None:
               return f"room {resource.number} at {resource.motel.name}"
          return f"room {resource.number}"
     return f"the whole motel {resource.name}"


def resource_address(resource: Resource) -> Optional[str]:
     if isinstance(resource, Room) and not resource.address and resource.motel is not None:
          return resource.motel.address
     return resource.address


def ensure_available(resource: Resource, message: str = "Room is already occupied") -> None:
     """Raise ResourceOccupiedError if the resource is an occupied room."""
     if isinstance(resource, Room) and resource.status == RoomStatus.OCCUPIED:
          raise ResourceOccupiedError(message)


def lock(db: Session, target: Target, tenant_id: int) -> Resource:
     """
     Mark the target occupied by tenant_id.

     Whole-motel targets have no per-unit flag to set and are returned as is.

     Raises:
          NotFoundError: the room or motel does not exist.
          ResourceOccupiedError: the room is already occupied.
     """
     if isinstance(target, MotelTarget):
          return get_motel(db, target.motel_id, for_update=True)

     room = get_room(db, target.room_id, for_update=True)
     ensure_available(room)

     result = db.execute(
          update(Room)
          .where(Room.id == room.id, Room.status != RoomStatus.OCCUPIED)
          .values(status=RoomStatus.OCCUPIED, current_tenant_id=tenant_id)
     )
     if result.rowcount != 1:
          raise ResourceOccupiedError("Room is already occupied")

     logger.info("Room %s locked for tenant %s", room.id, tenant_id)
     return room


def unlock(db: Session, target: Target, tenant_id: Optional[int] = None) -> Resource:
     """
     Release the target back to the vacant pool.

     When tenant_id is given the room is only released if that tenant is the
     one occupying it; a room held by someone else is left untouched.

     Raises:
          NotFoundError: the room or motel does not exist.
     """
     if isinstance(target, MotelTarget):
          return get_motel(db, target.motel_id, for_update=True)

     room = get_room(db, target.room_id, for_update=True)
     if tenant_id is not None and room.current_tenant_id not in (None, tenant_id):
          logger.warning(
               "Room %s is held by tenant %s, not %s; leaving it locked",
               room.id, room.current_tenant_id, tenant_id,
          )
          return room

     values = {"current_tenant_id": None}
     if room.status == RoomStatus.OCCUPIED:
          values["status"] = RoomStatus.VACANT
     db.execute(update(Room).where(Room.id == room.id).values(**values))

     logger.info("Room %s unlocked", room.id)
     return room

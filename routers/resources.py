# routers/resources.py
"""
Room and motel API routes.

Role-based access:
- Landlord / Admin: list, edit and delete their own rooms and motels
- Tenant: see the rooms they occupy
- Any signed-in user: search vacant rooms and motels, read details

Occupancy is never written here; it only changes through contract operations.
"""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_actor, require_roles
from models.room import RoomStatus
from models.user import UserRole
from schemas.resource import (
     RoomCreate,
     RoomUpdate,
     RoomResponse,
     RoomListResponse,
     RoomSort,
     MotelCreate,
     MotelUpdate,
     MotelResponse,
     MotelListResponse,
)
from services.actor import ActorContext
from services.property_service import MotelService, RoomService

router = APIRouter(prefix="/api", tags=["resources"])

owner_roles = require_roles(UserRole.ADMIN, UserRole.LANDLORD)


# Rooms. Fixed paths are declared before /rooms/{room_id}.

@router.get(
     "/rooms/vacant",
     response_model=RoomListResponse,
     summary="Search rooms available to rent"
)
def search_vacant_rooms(
     keyword: Optional[str] = Query(None, description="Room number, address or motel name"),
     min_price: Optional[Decimal] = Query(None, ge=0),
     max_price: Optional[Decimal] = Query(None, ge=0),
     has_wifi: bool = False,
     has_parking: bool = False,
     allow_pets: bool = False,
     allow_cooking: bool = False,
     sort: RoomSort = RoomSort.NEWEST,
     page: int = Query(1, ge=1),
     limit: int = Query(12, ge=1, le=100),
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     """
     Vacant rooms only.

     - **keyword**: case-insensitive match on room number, address or motel name
     - **min_price / max_price**: monthly rent range
     - **has_wifi, has_parking, allow_pets, allow_cooking**: only rooms offering it
     - **sort**: newest (default), price_asc or price_desc
     """
     rooms, total = RoomService.search_vacant(
          db,
          keyword=keyword,
          min_price=min_price,
          max_price=max_price,
          has_wifi=has_wifi,
          has_parking=has_parking,
          allow_pets=allow_pets,
          allow_cooking=allow_cooking,
          sort=sort,
          page=page,
          limit=limit,
     )
     return RoomListResponse(
          rooms=[RoomResponse.model_validate(room) for room in rooms],
          total=total,
          page=page,
          limit=limit,
     )


@router.get(
     "/rooms/my-rooms",
     response_model=List[RoomResponse],
     summary="Rooms the caller owns, or occupies as a tenant"
)
def list_my_rooms(
     room_status: Optional[RoomStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     rooms = RoomService.list_mine(db, actor, status=room_status)
     return [RoomResponse.model_validate(room) for room in rooms]


@router.get("/rooms/{room_id}", response_model=RoomResponse, summary="Get room by ID")
def get_room(
     room_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return RoomResponse.model_validate(RoomService.get(db, room_id))


@router.post(
     "/rooms",
     response_model=RoomResponse,
     status_code=status.HTTP_201_CREATED,
     summary="List a new room"
)
def create_room(
     room_data: RoomCreate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     """
     Create a VACANT room owned by the caller.

     - **motel_id**: optional; the motel must belong to the caller
     """
     room = RoomService.create(db, actor, room_data)
     db.commit()
     return RoomResponse.model_validate(room)


@router.put("/rooms/{room_id}", response_model=RoomResponse, summary="Update room details")
def update_room(
     room_id: int,
     room_data: RoomUpdate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     room = RoomService.update(db, room_id, actor, room_data)
     db.commit()
     return RoomResponse.model_validate(room)


@router.delete(
     "/rooms/{room_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete a room without contracts"
)
def delete_room(
     room_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     RoomService.remove(db, room_id, actor)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# Motels

@router.get("/motels", response_model=MotelListResponse, summary="Search motels")
def search_motels(
     keyword: Optional[str] = Query(None, description="Name, address or description"),
     has_wifi: bool = False,
     has_parking: bool = False,
     allow_pets: bool = False,
     allow_cooking: bool = False,
     page: int = Query(1, ge=1),
     limit: int = Query(12, ge=1, le=100),
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     motels, total = MotelService.search(
          db,
          keyword=keyword,
          has_wifi=has_wifi,
          has_parking=has_parking,
          allow_pets=allow_pets,
          allow_cooking=allow_cooking,
          page=page,
          limit=limit,
     )
     return MotelListResponse(
          motels=[MotelResponse.model_validate(motel) for motel in motels],
          total=total,
          page=page,
          limit=limit,
     )


@router.get(
     "/motels/my-motels",
     response_model=List[MotelResponse],
     summary="Motels the caller owns"
)
def list_my_motels(
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     return [MotelResponse.model_validate(motel) for motel in MotelService.list_mine(db, actor)]


@router.get("/motels/{motel_id}", response_model=MotelResponse, summary="Get motel by ID")
def get_motel(
     motel_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return MotelResponse.model_validate(MotelService.get(db, motel_id))


@router.post(
     "/motels",
     response_model=MotelResponse,
     status_code=status.HTTP_201_CREATED,
     summary="List a new motel"
)
def create_motel(
     motel_data: MotelCreate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     motel = MotelService.create(db, actor, motel_data)
     db.commit()
     return MotelResponse.model_validate(motel)


@router.put("/motels/{motel_id}", response_model=MotelResponse, summary="Update motel details")
def update_motel(
     motel_id: int,
     motel_data: MotelUpdate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     motel = MotelService.update(db, motel_id, actor, motel_data)
     db.commit()
     return MotelResponse.model_validate(motel)


@router.delete(
     "/motels/{motel_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete a motel without rooms or contracts"
)
def delete_motel(
     motel_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(owner_roles)
):
     MotelService.remove(db, motel_id, actor)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)

# tests/test_property_service.py
from decimal import Decimal

import pytest

from errors import ForbiddenError, NotFoundError, ResourceInUseError
from models import Motel, Room, RoomStatus, UserRole
from schemas.resource import MotelCreate, MotelUpdate, RoomCreate, RoomUpdate
from services.contract_service import ContractService
from services.property_service import MotelService, RoomService
from tests.conftest import actor_for, load, room_contract_data


def _activate(db, room, tenant, landlord):
     contract = ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(landlord))
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()
     return contract


def test_create_room_starts_vacant_and_owned_by_caller(db, session_factory, landlord):
     room = RoomService.create(
          db, actor_for(landlord), RoomCreate(number="201", price=Decimal("1500000"), has_wifi=True)
     )
     db.commit()

     stored = load(session_factory, Room, room.id)
     assert stored.owner_id == landlord.id
     assert stored.status == RoomStatus.VACANT
     assert stored.current_tenant_id is None
     assert stored.has_wifi is True


def test_create_room_in_someone_elses_motel_is_forbidden(db, seed, motel):
     stranger = seed.user(role=UserRole.LANDLORD)
     with pytest.raises(ForbiddenError):
          RoomService.create(
               db, actor_for(stranger), RoomCreate(number="301", price=Decimal("1"), motel_id=motel.id)
          )


def test_create_room_in_missing_motel(db, landlord):
     with pytest.raises(NotFoundError):
          RoomService.create(db, actor_for(landlord), RoomCreate(number="301", price=Decimal("1"), motel_id=999))


def test_update_changes_details_but_not_occupancy(db, session_factory, room, tenant, landlord):
     _activate(db, room, tenant, landlord)

     RoomService.update(db, room.id, actor_for(landlord), RoomUpdate(price=Decimal("2500000"), address=None))
     db.commit()

     stored = load(session_factory, Room, room.id)
     assert stored.price == Decimal("2500000")
     assert stored.address is None
     assert stored.status == RoomStatus.OCCUPIED
     assert stored.current_tenant_id == tenant.id


def test_update_ignores_null_for_required_fields(db, session_factory, room, landlord):
     RoomService.update(db, room.id, actor_for(landlord), RoomUpdate(number=None, price=None))
     db.commit()

     stored = load(session_factory, Room, room.id)
     assert stored.number == "101"
     assert stored.price == Decimal("2000000")


def test_only_owner_or_admin_can_update(db, room, tenant, admin):
     with pytest.raises(ForbiddenError):
          RoomService.update(db, room.id, actor_for(tenant), RoomUpdate(price=Decimal("1")))
     db.rollback()

     assert RoomService.update(db, room.id, actor_for(admin), RoomUpdate(floor=3)).floor == 3


def test_remove_refuses_room_with_active_contract(db, session_factory, room, tenant, landlord):
     _activate(db, room, tenant, landlord)

     with pytest.raises(ResourceInUseError, match="active contracts"):
          RoomService.remove(db, room.id, actor_for(landlord))
     db.rollback()

     assert load(session_factory, Room, room.id) is not None


def test_remove_refuses_room_with_contract_history(db, session_factory, room, tenant, landlord):
     contract = _activate(db, room, tenant, landlord)
     ContractService.terminate(db, contract.id, actor_for(landlord))
     db.commit()

     with pytest.raises(ResourceInUseError, match="contracts or contract requests"):
          RoomService.remove(db, room.id, actor_for(landlord))
     db.rollback()

     assert load(session_factory, Room, room.id).status == RoomStatus.VACANT


def test_remove_unused_room(db, session_factory, room, landlord, tenant):
     with pytest.raises(ForbiddenError):
          RoomService.remove(db, room.id, actor_for(tenant))
     db.rollback()

     RoomService.remove(db, room.id, actor_for(landlord))
     db.commit()

     assert load(session_factory, Room, room.id) is None


def test_list_mine_for_owner_and_tenant(db, seed, room, tenant, landlord, other_tenant):
     second = seed.room(landlord, number="102")
     _activate(db, room, tenant, landlord)

     owned = RoomService.list_mine(db, actor_for(landlord))
     assert {r.id for r in owned} == {room.id, second.id}
     vacant = RoomService.list_mine(db, actor_for(landlord), status=RoomStatus.VACANT)
     assert [r.id for r in vacant] == [second.id]

     assert [r.id for r in RoomService.list_mine(db, actor_for(tenant))] == [room.id]
     assert RoomService.list_mine(db, actor_for(other_tenant)) == []


def test_search_vacant_filters_and_sorts(db, seed, landlord, motel):
     cheap = seed.room(landlord, number="A1", price=Decimal("1000000"), has_wifi=True)
     mid = seed.room(landlord, number="A2", price=Decimal("2000000"), motel_id=motel.id)
     seed.room(landlord, number="A3", price=Decimal("3000000"))
     seed.room(landlord, number="A4", price=Decimal("500000"), status=RoomStatus.OCCUPIED)

     rooms, total = RoomService.search_vacant(db, sort="price_asc")
     assert total == 3
     assert [r.number for r in rooms] == ["A1", "A2", "A3"]

     rooms, total = RoomService.search_vacant(db, min_price=Decimal("1500000"), sort="price_desc")
     assert [r.number for r in rooms] == ["A3", "A2"]

     rooms, _ = RoomService.search_vacant(db, has_wifi=True)
     assert [r.id for r in rooms] == [cheap.id]

     rooms, _ = RoomService.search_vacant(db, keyword="sunrise")
     assert [r.id for r in rooms] == [mid.id]

     rooms, total = RoomService.search_vacant(db, sort="price_asc", page=2, limit=2)
     assert total == 3
     assert [r.number for r in rooms] == ["A3"]


def test_motel_lifecycle(db, session_factory, landlord, seed):
     motel = MotelService.create(
          db, actor_for(landlord), MotelCreate(name="Lotus Inn", address="5 Hai Ba Trung", total_rooms=4)
     )
     db.commit()
     motel_id = motel.id

     MotelService.update(db, motel_id, actor_for(landlord), MotelUpdate(regulations="No smoking"))
     db.commit()
     assert load(session_factory, Motel, motel_id).regulations == "No smoking"

     assert [m.id for m in MotelService.list_mine(db, actor_for(landlord))] == [motel_id]
     motels, total = MotelService.search(db, keyword="lotus")
     assert total == 1 and motels[0].id == motel_id
     db.rollback()

     room = seed.room(landlord, number="L1", motel_id=motel_id)
     with pytest.raises(ResourceInUseError, match="still has rooms"):
          MotelService.remove(db, motel_id, actor_for(landlord))
     db.rollback()

     RoomService.remove(db, room.id, actor_for(landlord))
     MotelService.remove(db, motel_id, actor_for(landlord))
     db.commit()

     assert load(session_factory, Motel, motel_id) is None


def test_motel_update_by_stranger_is_forbidden(db, seed, motel):
     stranger = seed.user(role=UserRole.LANDLORD)
     with pytest.raises(ForbiddenError):
          MotelService.update(db, motel.id, actor_for(stranger), MotelUpdate(name="Mine now"))

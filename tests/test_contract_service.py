# tests/test_contract_service.py
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from errors import (
     ContractHasBillsError,
     DomainValidationError,
     ForbiddenError,
     InvalidStateError,
     NotFoundError,
     ResourceOccupiedError,
)
from models import Bill, Contract, ContractStatus, Room, RoomStatus
from schemas.contract import ContractCreate, ContractUpdate
from services.contract_service import ContractService
from tests.conftest import actor_for, load, room_contract_data


def _create(db, room, tenant, landlord, **overrides):
     contract = ContractService.create(db, room_contract_data(room, tenant, **overrides), actor=actor_for(landlord))
     db.commit()
     return contract


def test_create_leaves_contract_pending_and_room_vacant(db, session_factory, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)

     assert contract.status == ContractStatus.PENDING_TENANT
     assert contract.monthly_rent == Decimal("2000000")
     assert contract.payment_day == 5
     assert "RESIDENTIAL LEASE AGREEMENT" in contract.document_content
     assert load(session_factory, Room, room.id).status == RoomStatus.VACANT


def test_owner_cannot_be_own_tenant(db, session_factory, room, landlord):
     with pytest.raises(DomainValidationError):
          ContractService.create(db, room_contract_data(room, landlord), actor=actor_for(landlord))
     db.rollback()

     assert load(session_factory, Room, room.id).status == RoomStatus.VACANT


def test_create_with_bad_dates_persists_nothing(db, room, tenant, landlord):
     with pytest.raises(DomainValidationError):
          ContractService.create(
               db,
               room_contract_data(room, tenant, end_date=date(2024, 1, 1)),
               actor=actor_for(landlord),
          )
     db.rollback()
     assert db.execute(select(Contract)).scalars().all() == []


def test_create_rejects_missing_target_and_tenant(db, room, landlord):
     with pytest.raises(NotFoundError, match="Room not found"):
          ContractService.create(
               db,
               ContractCreate(type="ROOM", room_id=999, tenant_id=1,
                              start_date=date(2024, 1, 1), end_date=date(2024, 6, 1)),
          )
     with pytest.raises(NotFoundError, match="Tenant not found"):
          ContractService.create(
               db,
               ContractCreate(type="ROOM", room_id=room.id, tenant_id=999,
                              start_date=date(2024, 1, 1), end_date=date(2024, 6, 1)),
          )


def test_create_requires_ownership(db, room, tenant, other_tenant):
     with pytest.raises(ForbiddenError):
          ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(other_tenant))


def test_create_on_occupied_room_conflicts(db, room, tenant, other_tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()

     with pytest.raises(ResourceOccupiedError, match="Room is already occupied"):
          ContractService.create(db, room_contract_data(room, other_tenant), actor=actor_for(landlord))


def test_motel_contract_uses_motel_defaults(db, motel, tenant, landlord):
     contract = ContractService.create(
          db,
          ContractCreate(type="MOTEL", motel_id=motel.id, tenant_id=tenant.id,
                         start_date=date(2024, 1, 1), end_date=date(2025, 1, 1)),
          actor=actor_for(landlord),
     )
     assert contract.room_id is None
     assert contract.monthly_rent == Decimal("30000000")
     assert contract.max_occupants == 20


def test_approve_activates_and_locks_room(db, session_factory, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)

     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()

     assert load(session_factory, Contract, contract.id).status == ContractStatus.ACTIVE
     stored_room = load(session_factory, Room, room.id)
     assert stored_room.status == RoomStatus.OCCUPIED
     assert stored_room.current_tenant_id == tenant.id


def test_only_the_tenant_can_approve(db, room, tenant, landlord, admin):
     contract = _create(db, room, tenant, landlord)
     for actor in (landlord, admin):
          with pytest.raises(ForbiddenError):
               ContractService.approve(db, contract.id, actor_for(actor))


def test_approving_twice_conflicts(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()

     with pytest.raises(InvalidStateError):
          ContractService.approve(db, contract.id, actor_for(tenant))


def test_update_regenerates_document_when_rent_changes(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     original = contract.document_content

     ContractService.update(db, contract.id, actor_for(landlord), ContractUpdate(monthly_rent=Decimal("2500000")))
     db.commit()

     assert contract.monthly_rent == Decimal("2500000")
     assert contract.document_content != original
     assert "2,500,000 VND" in contract.document_content


def test_update_keeps_document_for_other_fields(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     original = contract.document_content

     ContractService.update(db, contract.id, actor_for(landlord), ContractUpdate(payment_day=10))
     assert contract.payment_day == 10
     assert contract.document_content == original


def test_update_validates_dates_and_ownership(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     with pytest.raises(DomainValidationError):
          ContractService.update(db, contract.id, actor_for(landlord), ContractUpdate(end_date=date(2023, 12, 1)))
     with pytest.raises(ForbiddenError):
          ContractService.update(db, contract.id, actor_for(tenant), ContractUpdate(payment_day=10))


def test_terminate_releases_room(db, session_factory, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()

     ContractService.terminate(db, contract.id, actor_for(landlord))
     db.commit()

     assert load(session_factory, Contract, contract.id).status == ContractStatus.TERMINATED
     stored_room = load(session_factory, Room, room.id)
     assert stored_room.status == RoomStatus.VACANT
     assert stored_room.current_tenant_id is None


def test_terminating_twice_conflicts(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     ContractService.terminate(db, contract.id, actor_for(tenant))
     db.commit()

     with pytest.raises(InvalidStateError):
          ContractService.terminate(db, contract.id, actor_for(tenant))


def test_terminate_requires_a_party(db, room, tenant, other_tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     with pytest.raises(ForbiddenError):
          ContractService.terminate(db, contract.id, actor_for(other_tenant))


def test_update_of_terminated_contract_conflicts(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     ContractService.terminate(db, contract.id, actor_for(landlord))
     db.commit()
     with pytest.raises(InvalidStateError):
          ContractService.update(db, contract.id, actor_for(landlord), ContractUpdate(payment_day=10))


def test_remove_is_admin_only(db, room, tenant, landlord):
     contract = _create(db, room, tenant, landlord)
     with pytest.raises(ForbiddenError):
          ContractService.remove(db, contract.id, actor_for(landlord))


def test_remove_unlocks_active_room(db, session_factory, room, tenant, landlord, admin):
     contract = _create(db, room, tenant, landlord)
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()

     ContractService.remove(db, contract.id, actor_for(admin))
     db.commit()

     assert load(session_factory, Contract, contract.id) is None
     assert load(session_factory, Room, room.id).status == RoomStatus.VACANT


def test_remove_refuses_billed_contract(db, session_factory, room, tenant, landlord, admin):
     contract = _create(db, room, tenant, landlord)
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.add(Bill(
          contract_id=contract.id,
          month=date(2024, 2, 1),
          electricity_start=0,
          electricity_end=10,
          water_start=0,
          water_end=1,
          electricity_rate=Decimal("3500"),
          water_rate=Decimal("20000"),
          other_fees=Decimal("0"),
          total_amount=Decimal("55000"),
     ))
     db.commit()
     contract_id = contract.id

     with pytest.raises(ContractHasBillsError) as excinfo:
          ContractService.remove(db, contract_id, actor_for(admin))
     assert excinfo.value.bill_count == 1
     db.rollback()

     assert load(session_factory, Contract, contract_id) is not None
     assert load(session_factory, Room, room.id).status == RoomStatus.OCCUPIED


def test_visibility_rules(db, room, tenant, other_tenant, landlord, admin):
     contract = _create(db, room, tenant, landlord)

     for actor in (tenant, landlord, admin):
          assert ContractService.get(db, contract.id, actor_for(actor)).id == contract.id
     with pytest.raises(ForbiddenError):
          ContractService.get(db, contract.id, actor_for(other_tenant))

     assert [c.id for c in ContractService.list_for_actor(db, actor_for(landlord))] == [contract.id]
     assert ContractService.list_for_actor(db, actor_for(other_tenant)) == []

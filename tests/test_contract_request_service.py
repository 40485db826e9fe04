# tests/test_contract_request_service.py
from datetime import date
from decimal import Decimal

import pytest

from errors import DomainValidationError, ForbiddenError, InvalidStateError, NotFoundError, ResourceOccupiedError
from models import Contract, ContractRequest, ContractStatus, Room, RoomStatus
from models.contract_request import ContractRequestInitiator, ContractRequestStatus
from schemas.contract_request import ContractRequestDecision, ContractRequestUpdate
from services.contract_request_service import ContractRequestService
from tests.conftest import actor_for, load, room_request_data


def _propose(db, room, tenant, initiator, **overrides):
     request = ContractRequestService.create(db, actor_for(initiator), room_request_data(room, tenant, **overrides))
     db.commit()
     return request


def test_landlord_offer_is_pending(db, room, tenant, landlord):
     request = _propose(db, room, tenant, landlord)

     assert request.status == ContractRequestStatus.PENDING
     assert request.initiated_by == ContractRequestInitiator.LANDLORD
     assert request.landlord_id == landlord.id
     assert request.counterparty_id == tenant.id


def test_tenant_request_records_tenant_as_initiator(db, room, tenant, landlord):
     request = _propose(db, room, tenant, tenant)
     assert request.initiated_by == ContractRequestInitiator.TENANT
     assert request.counterparty_id == landlord.id


def test_owner_cannot_propose_renting_own_room(db, room, landlord):
     with pytest.raises(DomainValidationError, match="owner cannot be the tenant"):
          ContractRequestService.create(db, actor_for(landlord), room_request_data(room, landlord))
     db.rollback()

     assert ContractRequestService.list_for_actor(db, actor_for(landlord)) == []


def test_outsider_cannot_propose(db, room, tenant, other_tenant):
     with pytest.raises(ForbiddenError):
          ContractRequestService.create(db, actor_for(other_tenant), room_request_data(room, tenant))


def test_create_validates_inputs(db, room, tenant, landlord):
     with pytest.raises(DomainValidationError):
          ContractRequestService.create(
               db, actor_for(landlord), room_request_data(room, tenant, end_date=date(2023, 1, 1))
          )
     with pytest.raises(NotFoundError, match="Tenant not found"):
          ContractRequestService.create(db, actor_for(landlord), room_request_data(room, tenant, tenant_id=999))
     with pytest.raises(DomainValidationError):
          ContractRequestService.create(
               db, actor_for(landlord), room_request_data(room, tenant, type="MOTEL")
          )


def test_approval_creates_active_contract_and_locks_room(db, session_factory, room, tenant, landlord):
     request = _propose(db, room, tenant, landlord)

     ContractRequestService.respond(db, request.id, actor_for(tenant), ContractRequestDecision.APPROVE, "Deal")
     db.commit()

     stored = load(session_factory, ContractRequest, request.id)
     assert stored.status == ContractRequestStatus.APPROVED
     assert stored.responded_at is not None
     assert stored.response_message == "Deal"

     contract = load(session_factory, Contract, stored.contract_id)
     assert contract.status == ContractStatus.ACTIVE
     assert contract.tenant_id == tenant.id
     assert contract.monthly_rent == Decimal("2000000")

     stored_room = load(session_factory, Room, room.id)
     assert stored_room.status == RoomStatus.OCCUPIED
     assert stored_room.current_tenant_id == tenant.id


def test_initiator_cannot_approve_own_request(db, room, tenant, landlord):
     request = _propose(db, room, tenant, landlord)
     with pytest.raises(ForbiddenError):
          ContractRequestService.approve(db, request.id, actor_for(landlord))


def test_admin_override_still_needs_pending(db, room, tenant, landlord, admin):
     request = _propose(db, room, tenant, landlord)
     ContractRequestService.reject(db, request.id, actor_for(admin), "Duplicate")
     db.commit()

     with pytest.raises(InvalidStateError):
          ContractRequestService.approve(db, request.id, actor_for(admin))


def test_approving_twice_conflicts(db, room, tenant, landlord):
     request = _propose(db, room, tenant, landlord)
     ContractRequestService.approve(db, request.id, actor_for(tenant))
     db.commit()

     with pytest.raises(InvalidStateError):
          ContractRequestService.approve(db, request.id, actor_for(tenant))


def test_approval_rechecks_availability(db, session_factory, room, tenant, other_tenant, landlord):
     first = _propose(db, room, tenant, landlord)
     second = _propose(db, room, other_tenant, landlord)

     ContractRequestService.approve(db, first.id, actor_for(tenant))
     db.commit()
     second_id = second.id

     with pytest.raises(ResourceOccupiedError, match="no longer available"):
          ContractRequestService.approve(db, second_id, actor_for(other_tenant))
     db.rollback()

     assert load(session_factory, ContractRequest, second_id).status == ContractRequestStatus.PENDING
     assert load(session_factory, Room, room.id).current_tenant_id == tenant.id


def test_reject_stores_response(db, session_factory, room, tenant, landlord):
     request = _propose(db, room, tenant, tenant)
     ContractRequestService.respond(db, request.id, actor_for(landlord), ContractRequestDecision.REJECT, "Taken")
     db.commit()

     stored = load(session_factory, ContractRequest, request.id)
     assert stored.status == ContractRequestStatus.REJECTED
     assert stored.response_message == "Taken"
     assert stored.contract_id is None
     assert load(session_factory, Room, room.id).status == RoomStatus.VACANT


def test_only_initiator_can_cancel(db, session_factory, room, tenant, landlord):
     request = _propose(db, room, tenant, tenant)
     with pytest.raises(ForbiddenError):
          ContractRequestService.cancel(db, request.id, actor_for(landlord))

     ContractRequestService.cancel(db, request.id, actor_for(tenant))
     db.commit()
     assert load(session_factory, ContractRequest, request.id).status == ContractRequestStatus.CANCELLED

     with pytest.raises(InvalidStateError):
          ContractRequestService.cancel(db, request.id, actor_for(tenant))


def test_initiator_updates_pending_request(db, room, tenant, landlord):
     request = _propose(db, room, tenant, landlord)

     ContractRequestService.update(
          db, request.id, actor_for(landlord), ContractRequestUpdate(monthly_rent=Decimal("1800000"), message="Discount")
     )
     db.commit()
     assert request.monthly_rent == Decimal("1800000")
     assert request.message == "Discount"

     with pytest.raises(ForbiddenError):
          ContractRequestService.update(db, request.id, actor_for(tenant), ContractRequestUpdate(message="x"))
     with pytest.raises(DomainValidationError):
          ContractRequestService.update(
               db, request.id, actor_for(landlord), ContractRequestUpdate(start_date=date(2025, 6, 1))
          )


def test_visibility(db, room, tenant, other_tenant, landlord, admin):
     request = _propose(db, room, tenant, landlord)

     assert ContractRequestService.get(db, request.id, actor_for(admin)).id == request.id
     with pytest.raises(ForbiddenError):
          ContractRequestService.get(db, request.id, actor_for(other_tenant))
     assert [r.id for r in ContractRequestService.list_for_actor(db, actor_for(tenant))] == [request.id]
     assert ContractRequestService.list_for_actor(db, actor_for(other_tenant)) == []

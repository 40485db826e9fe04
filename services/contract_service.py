# services/contract_service.py
"""
Contract Service - the contract lifecycle engine.

Owns every Contract status transition and the room lock/unlock that goes
with it. All methods work inside the caller's transaction and only flush;
the router commits once per request, so the contract row and the room row
are written together or not at all.

States:
     PENDING_TENANT --approve--> ACTIVE --terminate--> TERMINATED
     PENDING_TENANT --terminate--> TERMINATED
EXPIRED is set by an external scheduler and is terminal here.
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from errors import (
     ContractHasBillsError,
     DomainValidationError,
     ForbiddenError,
     InvalidStateError,
     NotFoundError,
)
from models import Bill, Contract, ContractRequest, Motel, Room, User
from models.contract import ContractStatus
from models.target import RoomTarget, build_target, target_columns

from . import resource_registry as registry
from .actor import ActorContext
from .contract_document import ContractParties, render_contract_document
from .contract_terms import ResolvedTerms, resolve_effective_terms, validate_date_range
from .notification_service import notify
from .users import resolve_tenant

logger = logging.getLogger(__name__)

# Changing any of these rewrites the stored document
DOCUMENT_FIELDS = ("monthly_rent", "deposit", "start_date", "end_date")

UPDATABLE_FIELDS = (
     "start_date",
     "end_date",
     "monthly_rent",
     "deposit",
     "payment_cycle_months",
     "payment_day",
     "max_occupants",
     "electricity_cost_per_kwh",
     "water_cost_per_cubic_meter",
     "internet_cost",
     "parking_cost",
     "service_fee",
     "special_terms",
)


def _contract_parties(resource, landlord: Optional[User], tenant: User) -> ContractParties:
     return ContractParties(
          landlord_name=landlord.full_name if landlord is not None else "",
          tenant_name=tenant.full_name,
          resource_label=registry.resource_label(resource),
          resource_address=registry.resource_address(resource),
          landlord_phone=landlord.phone_number if landlord is not None else None,
          tenant_email=tenant.email,
          tenant_phone=tenant.phone_number,
     )


def _terms_of(contract: Contract, resource) -> ResolvedTerms:
     """Rebuild resolved terms from the values stored on a contract."""
     return ResolvedTerms(
          start_date=contract.start_date,
          end_date=contract.end_date,
          monthly_rent=contract.monthly_rent,
          deposit=contract.deposit,
          payment_cycle_months=contract.payment_cycle_months,
          payment_day=contract.payment_day,
          max_occupants=contract.max_occupants,
          electricity_cost_per_kwh=contract.electricity_cost_per_kwh,
          water_cost_per_cubic_meter=contract.water_cost_per_cubic_meter,
          internet_cost=contract.internet_cost,
          parking_cost=contract.parking_cost,
          service_fee=contract.service_fee,
          has_wifi=contract.has_wifi,
          has_parking=contract.has_parking,
          allow_cooking=bool(resource.allow_cooking),
          allow_pets=bool(resource.allow_pets),
          regulations=contract.regulations,
     )


class ContractService:
     """Service class for contract lifecycle operations."""

     @staticmethod
     def get_contract(db: Session, contract_id: int, for_update: bool = False) -> Contract:
          stmt = select(Contract).where(Contract.id == contract_id)
          if for_update:
               stmt = stmt.with_for_update().execution_options(populate_existing=True)
          contract = db.execute(stmt).scalar_one_or_none()
          if contract is None:
               raise NotFoundError("Contract not found")
          return contract

     @staticmethod
     def can_view(db: Session, contract: Contract, actor: ActorContext) -> bool:
          if actor.is_admin or contract.tenant_id == actor.id:
               return True
          resource = registry.resolve_resource(db, contract.target)
          return registry.landlord_id_of(resource) == actor.id

     @staticmethod
     def get(db: Session, contract_id: int, actor: ActorContext) -> Contract:
          """
          Load a contract visible to the actor.

          Raises:
               NotFoundError: no such contract.
               ForbiddenError: the actor is not the tenant, the owner or an admin.
          """
          contract = ContractService.get_contract(db, contract_id)
          if not ContractService.can_view(db, contract, actor):
               raise ForbiddenError("You do not have permission to view this contract")
          return contract

     @staticmethod
     def list_for_actor(db: Session, actor: ActorContext) -> List[Contract]:
          """Admins see every contract; others see contracts they rent or own."""
          stmt = select(Contract).order_by(Contract.created_at.desc(), Contract.id.desc())
          if not actor.is_admin:
               owned_rooms = select(Room.id).where(Room.owner_id == actor.id)
               owned_motels = select(Motel.id).where(Motel.owner_id == actor.id)
               stmt = stmt.where(
                    or_(
                         Contract.tenant_id == actor.id,
                         Contract.room_id.in_(owned_rooms),
                         Contract.motel_id.in_(owned_motels),
                    )
               )
          return list(db.execute(stmt).scalars())

     @staticmethod
     def create(
          db: Session,
          data,
          actor: Optional[ActorContext] = None,
          activate: bool = False,
     ) -> Contract:
          """
          Create a contract from the given terms.

          Direct creation leaves the contract PENDING_TENANT and the room
          untouched until the tenant approves. With activate=True (used when
          a contract request is approved) the contract starts ACTIVE and the
          room is locked for the tenant in the same transaction.

          Args:
               db: SQLAlchemy database session
               data: object with type, room_id, motel_id, tenant_id, start_date,
                    end_date and optional term overrides (see ContractCreate)
               actor: caller; when given it must own the target or be an admin
               activate: create ACTIVE and lock the room

          Raises:
               DomainValidationError: bad target fields, date order, no rent.
               NotFoundError: target or tenant missing.
               ResourceOccupiedError: the room is already occupied.
               ForbiddenError: actor does not own the target.
          """
          target = build_target(data.type, data.room_id, data.motel_id)
          resource = registry.resolve_resource(db, target, for_update=True)
          registry.ensure_available(resource)

          landlord_id = registry.landlord_id_of(resource)
          if actor is not None and not actor.is_admin and actor.id != landlord_id:
               raise ForbiddenError("Only the owner of this property can create a contract for it")

          tenant = resolve_tenant(db, data.tenant_id, landlord_id)
          terms = resolve_effective_terms(data, resource)
          landlord = db.get(User, landlord_id)
          special_terms = getattr(data, "special_terms", None)

          document = render_contract_document(
               terms,
               _contract_parties(resource, landlord, tenant),
               special_terms,
          )

          status = ContractStatus.ACTIVE if activate else ContractStatus.PENDING_TENANT
          if activate:
               registry.lock(db, target, tenant.id)

          contract = Contract(
               **target_columns(target),
               tenant_id=tenant.id,
               start_date=terms.start_date,
               end_date=terms.end_date,
               monthly_rent=terms.monthly_rent,
               deposit=terms.deposit,
               payment_cycle_months=terms.payment_cycle_months,
               payment_day=terms.payment_day,
               max_occupants=terms.max_occupants,
               electricity_cost_per_kwh=terms.electricity_cost_per_kwh,
               water_cost_per_cubic_meter=terms.water_cost_per_cubic_meter,
               internet_cost=terms.internet_cost,
               parking_cost=terms.parking_cost,
               service_fee=terms.service_fee,
               has_wifi=terms.has_wifi,
               has_parking=terms.has_parking,
               status=status,
               document_content=document,
               special_terms=special_terms,
               regulations=terms.regulations,
          )
          db.add(contract)
          db.flush()

          if not activate:
               notify(
                    db,
                    tenant.id,
                    "New contract to review",
                    f"A contract for {registry.resource_label(resource)} is waiting for your approval.",
                    created_by_id=actor.id if actor is not None else None,
               )

          logger.info(
               "Contract %s created for %s %s, tenant %s, status %s",
               contract.id, target.type.value, target.id, tenant.id, status.value,
          )
          return contract

     @staticmethod
     def _transition(
          db: Session,
          contract: Contract,
          from_statuses: Iterable[ContractStatus],
          to_status: ContractStatus,
     ) -> None:
          """Move the contract to to_status only if it is still in one of from_statuses."""
          from_statuses = tuple(from_statuses)
          result = db.execute(
               update(Contract)
               .where(Contract.id == contract.id, Contract.status.in_(from_statuses))
               .values(status=to_status)
          )
          if result.rowcount != 1:
               db.refresh(contract)
               raise InvalidStateError(
                    f"Contract is {contract.status.value}, expected {' or '.join(s.value for s in from_statuses)}",
                    current_state=contract.status.value,
               )

     @staticmethod
     def approve(db: Session, contract_id: int, actor: ActorContext) -> Contract:
          """
          Tenant accepts a PENDING_TENANT contract.

          The contract becomes ACTIVE and, for room contracts, the room is
          locked for the tenant.

          Raises:
               NotFoundError: no such contract.
               ForbiddenError: actor is not the contract's tenant.
               InvalidStateError: contract is not PENDING_TENANT.
               ResourceOccupiedError: the room was taken in the meantime.
          """
          contract = ContractService.get_contract(db, contract_id, for_update=True)
          if contract.tenant_id != actor.id:
               raise ForbiddenError("Only the tenant of this contract can approve it")
          if contract.status != ContractStatus.PENDING_TENANT:
               raise InvalidStateError(
                    "Contract is not awaiting tenant approval",
                    current_state=contract.status.value,
               )

          target = contract.target
          if isinstance(target, RoomTarget):
               registry.lock(db, target, contract.tenant_id)
          ContractService._transition(db, contract, [ContractStatus.PENDING_TENANT], ContractStatus.ACTIVE)
          db.flush()

          resource = registry.resolve_resource(db, target)
          notify(
               db,
               registry.landlord_id_of(resource),
               "Contract approved",
               f"The tenant approved the contract for {registry.resource_label(resource)}.",
               created_by_id=actor.id,
          )
          logger.info("Contract %s approved by tenant %s", contract.id, actor.id)
          return contract

     @staticmethod
     def update(db: Session, contract_id: int, actor: ActorContext, data) -> Contract:
          """
          Change the terms of a contract.

          Only fields present in data are applied. Changing rent, deposit or
          either date regenerates the stored document.

          Raises:
               NotFoundError: no such contract.
               ForbiddenError: actor neither owns the target nor is an admin.
               InvalidStateError: contract is TERMINATED or EXPIRED.
               DomainValidationError: resulting dates are out of order.
          """
          contract = ContractService.get_contract(db, contract_id, for_update=True)
          resource = registry.resolve_resource(db, contract.target)
          if not actor.is_admin and registry.landlord_id_of(resource) != actor.id:
               raise ForbiddenError("Only the owner of this property can update the contract")
          if contract.status in (ContractStatus.TERMINATED, ContractStatus.EXPIRED):
               raise InvalidStateError(
                    f"Cannot update a {contract.status.value} contract",
                    current_state=contract.status.value,
               )

          changes = {
               name: value
               for name, value in data.model_dump(exclude_unset=True).items()
               if name in UPDATABLE_FIELDS
          }
          for name in UPDATABLE_FIELDS:
               if name in changes and changes[name] is None and name != "special_terms":
                    raise DomainValidationError(f"{name} cannot be cleared")

          start_date = changes.get("start_date", contract.start_date)
          end_date = changes.get("end_date", contract.end_date)
          if "start_date" in changes or "end_date" in changes:
               validate_date_range(start_date, end_date)

          regenerate = any(
               name in changes and changes[name] != getattr(contract, name)
               for name in DOCUMENT_FIELDS
          )
          for name, value in changes.items():
               setattr(contract, name, value)

          if regenerate or "special_terms" in changes:
               contract.document_content = render_contract_document(
                    _terms_of(contract, resource),
                    _contract_parties(resource, db.get(User, resource.owner_id), contract.tenant),
                    contract.special_terms,
               )
          db.flush()

          logger.info("Contract %s updated (%s)", contract.id, ", ".join(sorted(changes)) or "no changes")
          return contract

     @staticmethod
     def terminate(db: Session, contract_id: int, actor: ActorContext) -> Contract:
          """
          End a contract early.

          ACTIVE and PENDING_TENANT contracts can be terminated by the owner,
          the tenant or an admin. An ACTIVE room contract releases its room.

          Raises:
               NotFoundError: no such contract.
               ForbiddenError: actor is not a party to the contract.
               InvalidStateError: contract is already TERMINATED or EXPIRED.
          """
          contract = ContractService.get_contract(db, contract_id, for_update=True)
          resource = registry.resolve_resource(db, contract.target)
          landlord_id = registry.landlord_id_of(resource)
          if not (actor.is_admin or actor.id in (landlord_id, contract.tenant_id)):
               raise ForbiddenError("You do not have permission to terminate this contract")
          if contract.status not in (ContractStatus.ACTIVE, ContractStatus.PENDING_TENANT):
               raise InvalidStateError(
                    f"Contract is already {contract.status.value}",
                    current_state=contract.status.value,
               )

          was_active = contract.is_active
          ContractService._transition(db, contract, [contract.status], ContractStatus.TERMINATED)
          if was_active and isinstance(contract.target, RoomTarget):
               registry.unlock(db, contract.target, contract.tenant_id)
          db.flush()

          label = registry.resource_label(resource)
          for user_id in {landlord_id, contract.tenant_id} - {actor.id}:
               notify(
                    db,
                    user_id,
                    "Contract terminated",
                    f"The contract for {label} has been terminated.",
                    created_by_id=actor.id,
               )
          logger.info("Contract %s terminated by user %s", contract.id, actor.id)
          return contract

     @staticmethod
     def count_bills(db: Session, contract_id: int) -> int:
          return db.execute(
               select(func.count(Bill.id)).where(Bill.contract_id == contract_id)
          ).scalar_one()

     @staticmethod
     def remove(db: Session, contract_id: int, actor: ActorContext) -> None:
          """
          Hard-delete a contract (admin only).

          A contract referenced by any bill is kept; it has to be terminated
          instead. An ACTIVE room contract releases its room first, and
          requests that produced the contract lose their link to it.

          Raises:
               ForbiddenError: actor is not an admin.
               NotFoundError: no such contract.
               ContractHasBillsError: bills reference the contract.
          """
          if not actor.is_admin:
               raise ForbiddenError("Only administrators can delete contracts")

          contract = ContractService.get_contract(db, contract_id, for_update=True)
          bill_count = ContractService.count_bills(db, contract.id)
          if bill_count:
               raise ContractHasBillsError(contract.id, bill_count)

          target = contract.target
          if contract.is_active and isinstance(target, RoomTarget):
               registry.unlock(db, target, contract.tenant_id)

          db.execute(
               update(ContractRequest)
               .where(ContractRequest.contract_id == contract.id)
               .values(contract_id=None)
          )
          db.delete(contract)
          db.flush()

          logger.info("Contract %s deleted by admin %s", contract_id, actor.id)

     @staticmethod
     def document(db: Session, contract_id: int, actor: ActorContext) -> str:
          """Stored agreement text of a contract visible to the actor."""
          contract = ContractService.get(db, contract_id, actor)
          return contract.document_content or ""


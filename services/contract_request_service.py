# services/contract_request_service.py
"""
Contract Request Service - negotiation between landlord and tenant.

Either party may propose a tenancy. The other party (the counter-party)
approves or rejects it; the initiator may revise or cancel it. PENDING is
the only state a request ever leaves. Administrators bypass the party
checks but not the PENDING guard.

Approval creates an ACTIVE contract through ContractService and locks the
room in the same transaction as the request update.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from errors import ForbiddenError, InvalidStateError, NotFoundError
from models import ContractRequest
from models.contract_request import ContractRequestInitiator, ContractRequestStatus
from models.target import build_target, target_columns
from schemas.contract import ContractCreate
from schemas.contract_request import ContractRequestDecision

from . import resource_registry as registry
from .actor import ActorContext
from .contract_service import ContractService
from .contract_terms import UTILITY_FIELDS, validate_date_range
from .notification_service import notify
from .users import resolve_tenant

logger = logging.getLogger(__name__)

UTILITY_NAMES = tuple(name for name, _ in UTILITY_FIELDS)

UPDATABLE_FIELDS = (
     "start_date",
     "end_date",
     "monthly_rent",
     "deposit",
     "special_terms",
     "message",
) + UTILITY_NAMES

REQUIRED_FIELDS = ("start_date", "end_date", "monthly_rent", "deposit")


def _utcnow() -> datetime:
     return datetime.now(timezone.utc).replace(tzinfo=None)


class ContractRequestService:
     """Service class for contract request negotiation."""

     @staticmethod
     def get_request(db: Session, request_id: int, for_update: bool = False) -> ContractRequest:
          stmt = select(ContractRequest).where(ContractRequest.id == request_id)
          if for_update:
               stmt = stmt.with_for_update().execution_options(populate_existing=True)
          request = db.execute(stmt).scalar_one_or_none()
          if request is None:
               raise NotFoundError("Contract request not found")
          return request

     @staticmethod
     def _ensure_visible(request: ContractRequest, actor: ActorContext) -> None:
          if not (actor.is_admin or actor.id in (request.landlord_id, request.tenant_id)):
               raise ForbiddenError("You do not have permission to view this request")

     @staticmethod
     def _ensure_pending(request: ContractRequest) -> None:
          if request.status != ContractRequestStatus.PENDING:
               raise InvalidStateError(
                    f"Request is already {request.status.value}",
                    current_state=request.status.value,
               )

     @staticmethod
     def _ensure_counterparty(request: ContractRequest, actor: ActorContext, action: str) -> None:
          if actor.is_admin or actor.id == request.counterparty_id:
               return
          party = "tenant" if request.initiated_by == ContractRequestInitiator.LANDLORD else "landlord"
          raise ForbiddenError(f"Only the {party} can {action} this request")

     @staticmethod
     def _ensure_initiator(request: ContractRequest, actor: ActorContext, action: str) -> None:
          if actor.is_admin or actor.id == request.initiator_id:
               return
          raise ForbiddenError(f"Only the party who sent this request can {action} it")

     @staticmethod
     def _close(
          db: Session,
          request: ContractRequest,
          to_status: ContractRequestStatus,
          **values,
     ) -> None:
          """Move a PENDING request to a terminal status, guarded against concurrent responses."""
          result = db.execute(
               update(ContractRequest)
               .where(
                    ContractRequest.id == request.id,
                    ContractRequest.status == ContractRequestStatus.PENDING,
               )
               .values(status=to_status, **values)
          )
          if result.rowcount != 1:
               db.refresh(request)
               raise InvalidStateError(
                    f"Request is already {request.status.value}",
                    current_state=request.status.value,
               )

     @staticmethod
     def create(db: Session, actor: ActorContext, data) -> ContractRequest:
          """
          Propose a tenancy.

          The actor's side is worked out from the target: its owner is the
          landlord, data.tenant_id the tenant. An actor who is neither cannot
          propose.

          Raises:
               DomainValidationError: bad target fields or date order.
               NotFoundError: target or tenant missing.
               ResourceOccupiedError: the room is already occupied.
               ForbiddenError: actor is neither the owner nor the tenant.
          """
          target = build_target(data.type, data.room_id, data.motel_id)
          resource = registry.resolve_resource(db, target)
          registry.ensure_available(resource)

          landlord_id = registry.landlord_id_of(resource)
          tenant = resolve_tenant(db, data.tenant_id, landlord_id)

          if actor.id == landlord_id:
               initiated_by = ContractRequestInitiator.LANDLORD
          elif actor.id == tenant.id:
               initiated_by = ContractRequestInitiator.TENANT
          else:
               raise ForbiddenError("Only the property owner or the proposed tenant can create this request")

          validate_date_range(data.start_date, data.end_date)

          request = ContractRequest(
               **target_columns(target),
               initiated_by=initiated_by,
               status=ContractRequestStatus.PENDING,
               landlord_id=landlord_id,
               tenant_id=tenant.id,
               start_date=data.start_date,
               end_date=data.end_date,
               monthly_rent=data.monthly_rent,
               deposit=data.deposit,
               special_terms=data.special_terms,
               message=data.message,
               **{name: getattr(data, name) for name in UTILITY_NAMES},
          )
          db.add(request)
          db.flush()

          if initiated_by == ContractRequestInitiator.LANDLORD:
               title = "New rental offer"
               body = f"You have been offered {registry.resource_label(resource)}."
          else:
               title = "New rental request"
               body = f"A tenant has asked to rent {registry.resource_label(resource)}."
          notify(db, request.counterparty_id, title, body, created_by_id=actor.id)

          logger.info(
               "Contract request %s created by %s %s for %s %s",
               request.id, initiated_by.value.lower(), actor.id, target.type.value, target.id,
          )
          return request

     @staticmethod
     def list_for_actor(db: Session, actor: ActorContext) -> List[ContractRequest]:
          """Admins see every request; others see requests they are a party to."""
          stmt = select(ContractRequest).order_by(
               ContractRequest.created_at.desc(), ContractRequest.id.desc()
          )
          if not actor.is_admin:
               stmt = stmt.where(
                    or_(
                         ContractRequest.landlord_id == actor.id,
                         ContractRequest.tenant_id == actor.id,
                    )
               )
          return list(db.execute(stmt).scalars())

     @staticmethod
     def get(db: Session, request_id: int, actor: ActorContext) -> ContractRequest:
          request = ContractRequestService.get_request(db, request_id)
          ContractRequestService._ensure_visible(request, actor)
          return request

     @staticmethod
     def approve(
          db: Session,
          request_id: int,
          actor: ActorContext,
          response_message: Optional[str] = None,
     ) -> ContractRequest:
          """
          Counter-party accepts the request.

          Creates an ACTIVE contract with the request's terms, locks the room
          for the tenant and links the contract to the request. Nothing is
          written unless all of it succeeds.

          Raises:
               NotFoundError: no such request, or the target/tenant vanished.
               ForbiddenError: actor is not a party, or is the initiator.
               InvalidStateError: request is not PENDING.
               ResourceOccupiedError: the room was taken since the proposal.
          """
          request = ContractRequestService.get_request(db, request_id, for_update=True)
          ContractRequestService._ensure_visible(request, actor)
          ContractRequestService._ensure_pending(request)
          ContractRequestService._ensure_counterparty(request, actor, "approve")

          # Availability may have changed since the request was made
          resource = registry.resolve_resource(db, request.target, for_update=True)
          registry.ensure_available(resource, "Room is no longer available")

          contract = ContractService.create(
               db,
               ContractCreate(
                    type=request.type,
                    room_id=request.room_id,
                    motel_id=request.motel_id,
                    tenant_id=request.tenant_id,
                    start_date=request.start_date,
                    end_date=request.end_date,
                    monthly_rent=request.monthly_rent,
                    deposit=request.deposit,
                    special_terms=request.special_terms,
                    **{name: getattr(request, name) for name in UTILITY_NAMES},
               ),
               activate=True,
          )

          ContractRequestService._close(
               db,
               request,
               ContractRequestStatus.APPROVED,
               response_message=response_message,
               responded_at=_utcnow(),
               contract_id=contract.id,
          )
          db.flush()

          notify(
               db,
               request.initiator_id,
               "Request approved",
               f"Your request for {registry.resource_label(resource)} was approved. The contract is now active.",
               created_by_id=actor.id,
          )
          logger.info(
               "Contract request %s approved by user %s, contract %s",
               request.id, actor.id, contract.id,
          )
          return request

     @staticmethod
     def reject(
          db: Session,
          request_id: int,
          actor: ActorContext,
          response_message: Optional[str] = None,
     ) -> ContractRequest:
          """
          Counter-party declines the request.

          Raises:
               NotFoundError, ForbiddenError, InvalidStateError: as for approve.
          """
          request = ContractRequestService.get_request(db, request_id, for_update=True)
          ContractRequestService._ensure_visible(request, actor)
          ContractRequestService._ensure_pending(request)
          ContractRequestService._ensure_counterparty(request, actor, "reject")

          ContractRequestService._close(
               db,
               request,
               ContractRequestStatus.REJECTED,
               response_message=response_message,
               responded_at=_utcnow(),
          )
          db.flush()

          message = "Your rental request was rejected."
          if response_message:
               message = f"{message} Reason: {response_message}"
          notify(db, request.initiator_id, "Request rejected", message, created_by_id=actor.id)
          logger.info("Contract request %s rejected by user %s", request.id, actor.id)
          return request

     @staticmethod
     def respond(
          db: Session,
          request_id: int,
          actor: ActorContext,
          decision: ContractRequestDecision,
          response_message: Optional[str] = None,
     ) -> ContractRequest:
          """Approve or reject in one call."""
          if ContractRequestDecision(decision) == ContractRequestDecision.APPROVE:
               return ContractRequestService.approve(db, request_id, actor, response_message)
          return ContractRequestService.reject(db, request_id, actor, response_message)

     @staticmethod
     def cancel(db: Session, request_id: int, actor: ActorContext) -> ContractRequest:
          """
          Initiator withdraws the request.

          Raises:
               NotFoundError: no such request.
               ForbiddenError: actor is not the initiator.
               InvalidStateError: request is not PENDING.
          """
          request = ContractRequestService.get_request(db, request_id, for_update=True)
          ContractRequestService._ensure_visible(request, actor)
          ContractRequestService._ensure_pending(request)
          ContractRequestService._ensure_initiator(request, actor, "cancel")

          ContractRequestService._close(db, request, ContractRequestStatus.CANCELLED)
          db.flush()

          notify(
               db,
               request.counterparty_id,
               "Request cancelled",
               "A rental request sent to you has been cancelled.",
               created_by_id=actor.id,
          )
          logger.info("Contract request %s cancelled by user %s", request.id, actor.id)
          return request

     @staticmethod
     def update(db: Session, request_id: int, actor: ActorContext, data) -> ContractRequest:
          """
          Initiator revises a pending request. Only fields present in data change.

          Raises:
               NotFoundError: no such request.
               ForbiddenError: actor is not the initiator.
               InvalidStateError: request is not PENDING.
               DomainValidationError: resulting dates are out of order.
          """
          request = ContractRequestService.get_request(db, request_id, for_update=True)
          ContractRequestService._ensure_visible(request, actor)
          ContractRequestService._ensure_pending(request)
          ContractRequestService._ensure_initiator(request, actor, "update")

          changes = {
               name: value
               for name, value in data.model_dump(exclude_unset=True).items()
               if name in UPDATABLE_FIELDS and not (name in REQUIRED_FIELDS and value is None)
          }
          if "start_date" in changes or "end_date" in changes:
               validate_date_range(
                    changes.get("start_date", request.start_date),
                    changes.get("end_date", request.end_date),
               )

          for name, value in changes.items():
               setattr(request, name, value)
          db.flush()

          logger.info("Contract request %s updated (%s)", request.id, ", ".join(sorted(changes)) or "no changes")
          return request

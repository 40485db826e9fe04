# services/bill_service.py
"""
Bill Service - Business logic layer for monthly utility bills.

A bill belongs to exactly one contract. Its existence is what stops a
contract from being hard-deleted (see ContractService.remove).
"""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from errors import ConflictError, DomainValidationError, ForbiddenError, InvalidStateError, NotFoundError
from models import Bill, Contract, Motel, Room
from models.bill import BillStatus

from . import resource_registry as registry
from .actor import ActorContext
from .contract_service import ContractService
from .notification_service import notify

logger = logging.getLogger(__name__)


def billing_month(value: date) -> date:
     """First day of the month containing value."""
     return value.replace(day=1)


def calculate_total(
     electricity_start: int,
     electricity_end: int,
     water_start: int,
     water_end: int,
     electricity_rate: Decimal,
     water_rate: Decimal,
     other_fees: Decimal = Decimal("0"),
) -> Decimal:
     """
     Total of a bill: metered electricity and water at their unit rates plus
     other fees.

     Raises:
          DomainValidationError: a meter reading runs backwards.
     """
     if electricity_end < electricity_start:
          raise DomainValidationError("Electricity end reading is lower than the start reading")
     if water_end < water_start:
          raise DomainValidationError("Water end reading is lower than the start reading")

     electricity = Decimal(electricity_end - electricity_start) * Decimal(electricity_rate)
     water = Decimal(water_end - water_start) * Decimal(water_rate)
     return electricity + water + Decimal(other_fees)


class BillService:
     """Service class for bill-related business logic."""

     @staticmethod
     def create(db: Session, actor: ActorContext, data) -> Bill:
          """
          Bill one month of an ACTIVE contract.

          Args:
               db: SQLAlchemy database session
               actor: the property owner or an admin
               data: BillCreate-like object; rates default to the contract's
                    utility costs

          Returns:
               Created Bill object

          Raises:
               NotFoundError: contract doesn't exist
               ForbiddenError: actor doesn't own the contract's property
               InvalidStateError: contract is not ACTIVE
               ConflictError: the month is already billed
               DomainValidationError: a meter runs backwards
          """
          contract = ContractService.get_contract(db, data.contract_id, for_update=True)
          resource = registry.resolve_resource(db, contract.target)
          if not actor.is_admin and registry.landlord_id_of(resource) != actor.id:
               raise ForbiddenError("Only the owner of this property can create bills")
          if not contract.is_active:
               raise InvalidStateError(
                    "Bills can only be created for active contracts",
                    current_state=contract.status.value,
               )

          month = billing_month(data.month)
          existing = db.execute(
               select(Bill.id).where(Bill.contract_id == contract.id, Bill.month == month)
          ).first()
          if existing is not None:
               raise ConflictError(f"Contract {contract.id} is already billed for {month:%m/%Y}")

          electricity_rate = (
               data.electricity_rate if data.electricity_rate is not None else contract.electricity_cost_per_kwh
          )
          water_rate = (
               data.water_rate if data.water_rate is not None else contract.water_cost_per_cubic_meter
          )
          other_fees = data.other_fees if data.other_fees is not None else Decimal("0")

          total = calculate_total(
               data.electricity_start,
               data.electricity_end,
               data.water_start,
               data.water_end,
               electricity_rate,
               water_rate,
               other_fees,
          )

          bill = Bill(
               contract_id=contract.id,
               month=month,
               electricity_start=data.electricity_start,
               electricity_end=data.electricity_end,
               water_start=data.water_start,
               water_end=data.water_end,
               electricity_rate=electricity_rate,
               water_rate=water_rate,
               other_fees=other_fees,
               total_amount=total,
               status=BillStatus.PENDING,
          )
          db.add(bill)
          db.flush()  # Flush to get the ID without committing

          notify(
               db,
               contract.tenant_id,
               "New bill",
               f"Your bill for {month:%m/%Y} is {total:,.0f} VND.",
               created_by_id=actor.id,
          )
          logger.info("Bill %s created for contract %s, total %s", bill.id, contract.id, total)
          return bill

     @staticmethod
     def get(db: Session, bill_id: int, actor: ActorContext) -> Bill:
          bill = db.get(Bill, bill_id)
          if bill is None:
               raise NotFoundError("Bill not found")
          if not ContractService.can_view(db, bill.contract, actor):
               raise ForbiddenError("You do not have permission to view this bill")
          return bill

     @staticmethod
     def list_for_actor(
          db: Session,
          actor: ActorContext,
          contract_id: Optional[int] = None,
     ) -> List[Bill]:
          """Bills of contracts the actor rents or owns (all bills for admins), newest month first."""
          stmt = select(Bill).join(Contract, Bill.contract_id == Contract.id)
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
          if contract_id is not None:
               stmt = stmt.where(Bill.contract_id == contract_id)
          stmt = stmt.order_by(Bill.month.desc(), Bill.id.desc())
          return list(db.execute(stmt).scalars())

     @staticmethod
     def mark_paid(db: Session, bill_id: int, actor: ActorContext) -> Bill:
          """
          Record payment of a bill.

          Raises:
               NotFoundError: bill doesn't exist
               ForbiddenError: actor doesn't own the contract's property
               InvalidStateError: bill is already paid
          """
          bill = db.execute(
               select(Bill).where(Bill.id == bill_id).with_for_update().execution_options(populate_existing=True)
          ).scalar_one_or_none()
          if bill is None:
               raise NotFoundError("Bill not found")

          resource = registry.resolve_resource(db, bill.contract.target)
          if not actor.is_admin and registry.landlord_id_of(resource) != actor.id:
               raise ForbiddenError("Only the owner of this property can mark bills as paid")
          if bill.is_paid:
               raise InvalidStateError("Bill is already paid", current_state=bill.status.value)

          bill.mark_as_paid(datetime.now(timezone.utc).replace(tzinfo=None))
          db.flush()

          logger.info("Bill %s marked paid by user %s", bill.id, actor.id)
          return bill

     @staticmethod
     def count_for_contract(db: Session, contract_id: int) -> int:
          return ContractService.count_bills(db, contract_id)

# routers/bills.py
"""
Bill API routes.

Role-based access:
- Landlord / Admin: create bills and mark them paid
- Tenant: read bills of own contracts
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_actor, require_roles
from models.user import UserRole
from schemas.bill import BillCreate, BillResponse, BillListResponse
from services.actor import ActorContext
from services.bill_service import BillService


router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.post(
     "",
     response_model=BillResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Bill one month of an active contract"
)
def create_bill(
     bill_data: BillCreate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.ADMIN, UserRole.LANDLORD))
):
     """
     Create a bill from meter readings.

     - **month**: any day of the billed month
     - **electricity_rate / water_rate**: default to the contract's unit costs
     - **total**: metered usage at the unit rates plus other fees
     """
     bill = BillService.create(db, actor, bill_data)
     db.commit()
     return BillResponse.model_validate(bill)


@router.get(
     "",
     response_model=BillListResponse,
     summary="List bills visible to the caller"
)
def list_bills(
     contract_id: Optional[int] = Query(None, description="Filter by contract ID"),
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     bills = BillService.list_for_actor(db, actor, contract_id=contract_id)
     return BillListResponse(
          bills=[BillResponse.model_validate(b) for b in bills],
          total=len(bills),
     )


@router.get(
     "/{bill_id}",
     response_model=BillResponse,
     summary="Get bill by ID"
)
def get_bill(
     bill_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return BillResponse.model_validate(BillService.get(db, bill_id, actor))


@router.patch(
     "/{bill_id}/mark-paid",
     response_model=BillResponse,
     summary="Mark a bill as paid"
)
def mark_bill_paid(
     bill_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.ADMIN, UserRole.LANDLORD))
):
     bill = BillService.mark_paid(db, bill_id, actor)
     db.commit()
     return BillResponse.model_validate(bill)

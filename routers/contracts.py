# routers/contracts.py
"""
Contract API routes.

Role-based access:
- Landlord / Admin: create and update contracts on their properties
- Tenant: approve contracts addressed to them
- Any party: read and terminate their contracts
- Admin: delete contracts without billing history
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_actor, require_roles
from models.user import UserRole
from schemas.contract import (
     ContractCreate,
     ContractUpdate,
     ContractResponse,
     ContractListResponse,
     ContractDocumentResponse,
)
from services.actor import ActorContext
from services.contract_service import ContractService


router = APIRouter(prefix="/api/contracts", tags=["contracts"])


@router.post(
     "",
     response_model=ContractResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a contract awaiting the tenant's approval"
)
def create_contract(
     contract_data: ContractCreate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.ADMIN, UserRole.LANDLORD))
):
     """
     Create a contract for a room or a whole motel.

     - **type**: ROOM (needs room_id) or MOTEL (needs motel_id)
     - **tenant_id**: the tenant who must approve the contract
     - **start_date / end_date**: end must be after start
     - omitted terms fall back to the property's defaults
     """
     contract = ContractService.create(db, contract_data, actor=actor)
     db.commit()
     return ContractResponse.model_validate(contract)


@router.get(
     "",
     response_model=ContractListResponse,
     summary="List contracts visible to the caller"
)
def list_contracts(
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     contracts = ContractService.list_for_actor(db, actor)
     return ContractListResponse(
          contracts=[ContractResponse.model_validate(c) for c in contracts],
          total=len(contracts),
     )


@router.get(
     "/{contract_id}",
     response_model=ContractResponse,
     summary="Get contract by ID"
)
def get_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return ContractResponse.model_validate(ContractService.get(db, contract_id, actor))


@router.get(
     "/{contract_id}/document",
     response_model=ContractDocumentResponse,
     summary="Get the agreement text of a contract"
)
def get_contract_document(
     contract_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     document = ContractService.document(db, contract_id, actor)
     return ContractDocumentResponse(contract_id=contract_id, document=document)


@router.put(
     "/{contract_id}",
     response_model=ContractResponse,
     summary="Update contract terms"
)
def update_contract(
     contract_id: int,
     contract_data: ContractUpdate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.ADMIN, UserRole.LANDLORD))
):
     """
     Update a contract. Only provided fields are changed.

     Changing rent, deposit or dates regenerates the contract document.
     """
     contract = ContractService.update(db, contract_id, actor, contract_data)
     db.commit()
     return ContractResponse.model_validate(contract)


@router.post(
     "/{contract_id}/approve",
     response_model=ContractResponse,
     summary="Tenant approves a contract"
)
def approve_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.TENANT))
):
     contract = ContractService.approve(db, contract_id, actor)
     db.commit()
     return ContractResponse.model_validate(contract)


@router.post(
     "/{contract_id}/terminate",
     response_model=ContractResponse,
     summary="Terminate a contract"
)
def terminate_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     contract = ContractService.terminate(db, contract_id, actor)
     db.commit()
     return ContractResponse.model_validate(contract)


@router.delete(
     "/{contract_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete a contract without bills"
)
def delete_contract(
     contract_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(require_roles(UserRole.ADMIN))
):
     """
     Hard-delete a contract. Contracts with bills must be terminated instead.
     """
     ContractService.remove(db, contract_id, actor)
     db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)

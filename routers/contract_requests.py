# routers/contract_requests.py
"""
Contract request API routes.

Either party proposes; the other party approves or rejects; the proposer
may revise or cancel while the request is pending.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_actor
from schemas.contract_request import (
     ContractRequestCreate,
     ContractRequestUpdate,
     RespondToContractRequest,
     ContractRequestDecisionBody,
     ContractRequestResponse,
     ContractRequestListResponse,
)
from services.actor import ActorContext
from services.contract_request_service import ContractRequestService


router = APIRouter(prefix="/api/contract-requests", tags=["contract-requests"])


@router.post(
     "",
     response_model=ContractRequestResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Propose a tenancy"
)
def create_contract_request(
     request_data: ContractRequestCreate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     """
     Create a contract request. The caller must own the property (landlord
     offer) or be the proposed tenant (tenant request).
     """
     request = ContractRequestService.create(db, actor, request_data)
     db.commit()
     return ContractRequestResponse.model_validate(request)


@router.get(
     "",
     response_model=ContractRequestListResponse,
     summary="List requests the caller is a party to"
)
def list_contract_requests(
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     requests = ContractRequestService.list_for_actor(db, actor)
     return ContractRequestListResponse(
          requests=[ContractRequestResponse.model_validate(r) for r in requests],
          total=len(requests),
     )


@router.get(
     "/{request_id}",
     response_model=ContractRequestResponse,
     summary="Get contract request by ID"
)
def get_contract_request(
     request_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     return ContractRequestResponse.model_validate(ContractRequestService.get(db, request_id, actor))


@router.patch(
     "/{request_id}/approve",
     response_model=ContractRequestResponse,
     summary="Approve a request and activate its contract"
)
def approve_contract_request(
     request_id: int,
     body: Optional[RespondToContractRequest] = None,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     message = body.response_message if body is not None else None
     request = ContractRequestService.approve(db, request_id, actor, message)
     db.commit()
     return ContractRequestResponse.model_validate(request)


@router.patch(
     "/{request_id}/reject",
     response_model=ContractRequestResponse,
     summary="Reject a request"
)
def reject_contract_request(
     request_id: int,
     body: Optional[RespondToContractRequest] = None,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     message = body.response_message if body is not None else None
     request = ContractRequestService.reject(db, request_id, actor, message)
     db.commit()
     return ContractRequestResponse.model_validate(request)


@router.post(
     "/{request_id}/respond",
     response_model=ContractRequestResponse,
     summary="Approve or reject a request"
)
def respond_to_contract_request(
     request_id: int,
     body: ContractRequestDecisionBody,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     request = ContractRequestService.respond(db, request_id, actor, body.decision, body.response_message)
     db.commit()
     return ContractRequestResponse.model_validate(request)


@router.patch(
     "/{request_id}/cancel",
     response_model=ContractRequestResponse,
     summary="Cancel a pending request"
)
def cancel_contract_request(
     request_id: int,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     request = ContractRequestService.cancel(db, request_id, actor)
     db.commit()
     return ContractRequestResponse.model_validate(request)


@router.patch(
     "/{request_id}",
     response_model=ContractRequestResponse,
     summary="Revise a pending request"
)
def update_contract_request(
     request_id: int,
     request_data: ContractRequestUpdate,
     db: Session = Depends(get_session),
     actor: ActorContext = Depends(get_actor)
):
     request = ContractRequestService.update(db, request_id, actor, request_data)
     db.commit()
     return ContractRequestResponse.model_validate(request)

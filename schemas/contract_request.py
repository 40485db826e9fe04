# schemas/contract_request.py
"""
Pydantic schemas for the contract request (negotiation) API.
"""
import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.contract_request import ContractRequestInitiator, ContractRequestStatus
from models.target import ContractType


class ContractRequestCreate(BaseModel):
     """Schema for proposing a tenancy; either party may create one."""
     type: ContractType = Field(default=ContractType.ROOM)
     room_id: Optional[int] = Field(None, gt=0)
     motel_id: Optional[int] = Field(None, gt=0)
     tenant_id: int = Field(..., gt=0, description="Proposed tenant (must exist)")
     start_date: date
     end_date: date
     monthly_rent: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
     deposit: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
     electricity_cost_per_kwh: Optional[Decimal] = Field(None, ge=0)
     water_cost_per_cubic_meter: Optional[Decimal] = Field(None, ge=0)
     internet_cost: Optional[Decimal] = Field(None, ge=0)
     parking_cost: Optional[Decimal] = Field(None, ge=0)
     service_fee: Optional[Decimal] = Field(None, ge=0)
     special_terms: Optional[str] = Field(None, max_length=2000)
     message: Optional[str] = Field(None, max_length=1000, description="Message to the other party")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "type": "ROOM",
                    "room_id": 1,
                    "tenant_id": 2,
                    "start_date": "2024-01-01",
                    "end_date": "2024-12-31",
                    "monthly_rent": 2000000,
                    "deposit": 2000000,
                    "message": "Available from January"
               }
          }
     )


class ContractRequestUpdate(BaseModel):
     """Schema for revising a pending request. Only provided fields are changed."""
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     monthly_rent: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     deposit: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     electricity_cost_per_kwh: Optional[Decimal] = Field(None, ge=0)
     water_cost_per_cubic_meter: Optional[Decimal] = Field(None, ge=0)
     internet_cost: Optional[Decimal] = Field(None, ge=0)
     parking_cost: Optional[Decimal] = Field(None, ge=0)
     service_fee: Optional[Decimal] = Field(None, ge=0)
     special_terms: Optional[str] = Field(None, max_length=2000)
     message: Optional[str] = Field(None, max_length=1000)


class RespondToContractRequest(BaseModel):
     """Body for approving or rejecting a request."""
     response_message: Optional[str] = Field(None, max_length=1000)


class ContractRequestDecision(str, enum.Enum):
     APPROVE = "APPROVE"
     REJECT = "REJECT"


class ContractRequestDecisionBody(RespondToContractRequest):
     decision: ContractRequestDecision


class ContractRequestResponse(BaseModel):
     """Schema for contract request response."""
     id: int
     type: ContractType
     room_id: Optional[int] = None
     motel_id: Optional[int] = None
     landlord_id: int
     tenant_id: int
     initiated_by: ContractRequestInitiator
     status: ContractRequestStatus
     start_date: date
     end_date: date
     monthly_rent: Decimal
     deposit: Decimal
     electricity_cost_per_kwh: Optional[Decimal] = None
     water_cost_per_cubic_meter: Optional[Decimal] = None
     internet_cost: Optional[Decimal] = None
     parking_cost: Optional[Decimal] = None
     service_fee: Optional[Decimal] = None
     special_terms: Optional[str] = None
     message: Optional[str] = None
     response_message: Optional[str] = None
     responded_at: Optional[datetime] = None
     contract_id: Optional[int] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ContractRequestListResponse(BaseModel):
     requests: List[ContractRequestResponse]
     total: int

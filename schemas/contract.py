# schemas/contract.py
"""
Pydantic schemas for Contract API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.contract import ContractStatus
from models.target import ContractType


class ContractTermsFields(BaseModel):
     """Optional per-contract terms; anything left out falls back to the resource default."""
     monthly_rent: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     deposit: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
     payment_cycle_months: Optional[int] = Field(None, ge=1, le=12)
     payment_day: Optional[int] = Field(None, ge=1, le=31, description="Day of month rent is due")
     max_occupants: Optional[int] = Field(None, ge=1)
     electricity_cost_per_kwh: Optional[Decimal] = Field(None, ge=0)
     water_cost_per_cubic_meter: Optional[Decimal] = Field(None, ge=0)
     internet_cost: Optional[Decimal] = Field(None, ge=0)
     parking_cost: Optional[Decimal] = Field(None, ge=0)
     service_fee: Optional[Decimal] = Field(None, ge=0)
     special_terms: Optional[str] = Field(None, max_length=2000)


class ContractCreate(ContractTermsFields):
     """Schema for creating a contract directly (awaits the tenant's approval)."""
     type: ContractType = Field(default=ContractType.ROOM, description="ROOM or MOTEL")
     room_id: Optional[int] = Field(None, gt=0, description="Required for ROOM contracts")
     motel_id: Optional[int] = Field(None, gt=0, description="Required for MOTEL contracts")
     tenant_id: int = Field(..., gt=0, description="Tenant user ID (must exist)")
     start_date: date
     end_date: date

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
                    "payment_day": 5
               }
          }
     )


class ContractUpdate(ContractTermsFields):
     """Schema for updating a contract. Only provided fields are changed."""
     start_date: Optional[date] = None
     end_date: Optional[date] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "monthly_rent": 2200000
               }
          }
     )


class ContractResponse(BaseModel):
     """Schema for contract response."""
     id: int
     type: ContractType
     room_id: Optional[int] = None
     motel_id: Optional[int] = None
     tenant_id: int
     status: ContractStatus
     start_date: date
     end_date: date
     monthly_rent: Decimal
     deposit: Decimal
     payment_cycle_months: int
     payment_day: int
     max_occupants: int
     electricity_cost_per_kwh: Decimal
     water_cost_per_cubic_meter: Decimal
     internet_cost: Decimal
     parking_cost: Decimal
     service_fee: Decimal
     has_wifi: bool
     has_parking: bool
     special_terms: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ContractListResponse(BaseModel):
     contracts: List[ContractResponse]
     total: int


class ContractDocumentResponse(BaseModel):
     """Stored agreement text of a contract."""
     contract_id: int
     document: str

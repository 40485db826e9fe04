# schemas/bill.py
"""
Pydantic schemas for Bill API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.bill import BillStatus


class BillCreate(BaseModel):
     """Schema for billing one month of a contract."""
     contract_id: int = Field(..., gt=0, description="Contract ID (must be ACTIVE)")
     month: date = Field(..., description="Any day in the billed month")
     electricity_start: int = Field(..., ge=0)
     electricity_end: int = Field(..., ge=0)
     water_start: int = Field(..., ge=0)
     water_end: int = Field(..., ge=0)
     electricity_rate: Optional[Decimal] = Field(None, ge=0, description="Defaults to the contract's rate")
     water_rate: Optional[Decimal] = Field(None, ge=0, description="Defaults to the contract's rate")
     other_fees: Decimal = Field(default=Decimal("0"), ge=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "contract_id": 1,
                    "month": "2024-02-01",
                    "electricity_start": 120,
                    "electricity_end": 220,
                    "water_start": 10,
                    "water_end": 14,
                    "other_fees": 100000
               }
          }
     )


class BillResponse(BaseModel):
     """Schema for bill response."""
     id: int
     contract_id: int
     month: date
     electricity_start: int
     electricity_end: int
     water_start: int
     water_end: int
     electricity_rate: Decimal
     water_rate: Decimal
     other_fees: Decimal
     total_amount: Decimal
     status: BillStatus
     paid_at: Optional[datetime] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class BillListResponse(BaseModel):
     bills: List[BillResponse]
     total: int

# schemas/resource.py
"""
Pydantic schemas for room and motel management.

Create and update bodies have no status, tenant or owner fields: occupancy
only changes through contracts and the owner is always the caller.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.room import RoomStatus


class RoomSort(str, Enum):
     NEWEST = "newest"
     PRICE_ASC = "price_asc"
     PRICE_DESC = "price_desc"


class RoomFields(BaseModel):
     """Optional room fields shared by create and update."""
     address: Optional[str] = Field(None, max_length=500)
     area: Optional[Decimal] = Field(None, gt=0, description="Floor area in m²")
     floor: Optional[int] = None
     payment_cycle_months: Optional[int] = Field(None, ge=1)
     deposit_months: Optional[int] = Field(None, ge=0)
     max_occupancy: Optional[int] = Field(None, ge=1)
     electricity_cost_per_kwh: Optional[Decimal] = Field(None, ge=0)
     water_cost_per_cubic_meter: Optional[Decimal] = Field(None, ge=0)
     internet_cost: Optional[Decimal] = Field(None, ge=0)
     parking_cost: Optional[Decimal] = Field(None, ge=0)
     service_fee: Optional[Decimal] = Field(None, ge=0)
     motel_id: Optional[int] = Field(None, gt=0, description="Motel the room belongs to, if any")


class RoomCreate(RoomFields):
     """Schema for listing a new room."""
     number: str = Field(..., min_length=1, max_length=50)
     price: Decimal = Field(..., gt=0, description="Monthly rent")
     has_wifi: bool = False
     has_parking: bool = False
     allow_pets: bool = False
     allow_cooking: bool = False

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "number": "101",
                    "address": "34 Tran Hung Dao, District 1",
                    "area": 25,
                    "price": 2000000,
                    "max_occupancy": 2,
                    "has_wifi": True,
                    "allow_cooking": True
               }
          }
     )


class RoomUpdate(RoomFields):
     """Schema for editing a room. Only fields sent are changed."""
     number: Optional[str] = Field(None, min_length=1, max_length=50)
     price: Optional[Decimal] = Field(None, gt=0)
     has_wifi: Optional[bool] = None
     has_parking: Optional[bool] = None
     allow_pets: Optional[bool] = None
     allow_cooking: Optional[bool] = None


class RoomResponse(BaseModel):
     id: int
     number: str
     address: Optional[str] = None
     area: Optional[Decimal] = None
     floor: Optional[int] = None
     price: Decimal
     status: RoomStatus
     current_tenant_id: Optional[int] = None
     max_occupancy: Optional[int] = None
     owner_id: int
     motel_id: Optional[int] = None
     has_wifi: bool
     has_parking: bool
     allow_pets: bool
     allow_cooking: bool
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
     rooms: List[RoomResponse]
     total: int
     page: int = 1
     limit: Optional[int] = None


class MotelFields(BaseModel):
     """Optional motel fields shared by create and update."""
     description: Optional[str] = None
     monthly_rent: Optional[Decimal] = Field(None, gt=0, description="Rent for the whole motel")
     payment_cycle_months: Optional[int] = Field(None, ge=1)
     deposit_months: Optional[int] = Field(None, ge=0)
     electricity_cost_per_kwh: Optional[Decimal] = Field(None, ge=0)
     water_cost_per_cubic_meter: Optional[Decimal] = Field(None, ge=0)
     internet_cost: Optional[Decimal] = Field(None, ge=0)
     parking_cost: Optional[Decimal] = Field(None, ge=0)
     regulations: Optional[str] = None


class MotelCreate(MotelFields):
     """Schema for listing a new motel."""
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)
     total_rooms: int = Field(default=0, ge=0)
     has_wifi: bool = False
     has_parking: bool = False
     allow_pets: bool = False
     allow_cooking: bool = False

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Sunrise Motel",
                    "address": "12 Le Loi, District 1",
                    "total_rooms": 10,
                    "monthly_rent": 30000000,
                    "regulations": "Quiet hours after 22:00"
               }
          }
     )


class MotelUpdate(MotelFields):
     """Schema for editing a motel. Only fields sent are changed."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, min_length=1, max_length=500)
     total_rooms: Optional[int] = Field(None, ge=0)
     has_wifi: Optional[bool] = None
     has_parking: Optional[bool] = None
     allow_pets: Optional[bool] = None
     allow_cooking: Optional[bool] = None


class MotelResponse(BaseModel):
     id: int
     name: str
     address: str
     description: Optional[str] = None
     total_rooms: int
     status: RoomStatus
     monthly_rent: Optional[Decimal] = None
     owner_id: int
     has_wifi: bool
     has_parking: bool
     allow_pets: bool
     allow_cooking: bool
     regulations: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class MotelListResponse(BaseModel):
     motels: List[MotelResponse]
     total: int
     page: int = 1
     limit: Optional[int] = None

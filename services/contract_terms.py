# services/contract_terms.py
"""
Effective contract terms.

Every per-contract value is resolved through the same chain:

     1. the value given for this contract
     2. the default stored on the room or motel being rented
     3. the hard default below

resolve_effective_terms is pure: it only reads attributes off the objects it
is given and returns a new value.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from errors import DomainValidationError
from models.motel import Motel

# Hard defaults
DEFAULT_PAYMENT_DAY = 5
DEFAULT_PAYMENT_CYCLE_MONTHS = 1
DEFAULT_DEPOSIT_MONTHS = 1
DEFAULT_MAX_OCCUPANTS = 4
OCCUPANTS_PER_MOTEL_ROOM = 2
DEFAULT_ELECTRICITY_COST_PER_KWH = Decimal("3500")
DEFAULT_WATER_COST_PER_CUBIC_METER = Decimal("20000")
DEFAULT_INTERNET_COST = Decimal("0")
DEFAULT_PARKING_COST = Decimal("0")
DEFAULT_SERVICE_FEE = Decimal("0")

DAYS_PER_CONTRACT_MONTH = 30

UTILITY_FIELDS = (
     ("electricity_cost_per_kwh", DEFAULT_ELECTRICITY_COST_PER_KWH),
     ("water_cost_per_cubic_meter", DEFAULT_WATER_COST_PER_CUBIC_METER),
     ("internet_cost", DEFAULT_INTERNET_COST),
     ("parking_cost", DEFAULT_PARKING_COST),
     ("service_fee", DEFAULT_SERVICE_FEE),
)


@dataclass(frozen=True)
class ResolvedTerms:
     """The values a contract is created with after defaults are applied."""
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
     has_wifi: bool = False
     has_parking: bool = False
     allow_cooking: bool = False
     allow_pets: bool = False
     regulations: Optional[str] = None

     @property
     def duration_months(self) -> int:
          return contract_duration_months(self.start_date, self.end_date)


def validate_date_range(start_date: date, end_date: date) -> None:
     """Raise DomainValidationError unless end_date is after start_date."""
     if end_date <= start_date:
          raise DomainValidationError("End date must be after start date")


def contract_duration_months(start_date: date, end_date: date) -> int:
     """Whole months between two dates, counting 30 days a month, half rounded up."""
     days = Decimal((end_date - start_date).days)
     months = days / Decimal(DAYS_PER_CONTRACT_MONTH)
     return int(months.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _first_set(*values: Any) -> Any:
     for value in values:
          if value is not None:
               return value
     return None


def _resource_rent(resource: Any) -> Optional[Decimal]:
     if isinstance(resource, Motel):
          return resource.monthly_rent
     return getattr(resource, "price", None)


def _resource_regulations(resource: Any) -> Optional[str]:
     if isinstance(resource, Motel):
          return resource.regulations
     motel = getattr(resource, "motel", None)
     return motel.regulations if motel is not None else None


def _resource_max_occupants(resource: Any) -> int:
     if isinstance(resource, Motel):
          if resource.total_rooms:
               return resource.total_rooms * OCCUPANTS_PER_MOTEL_ROOM
          return DEFAULT_MAX_OCCUPANTS
     return _first_set(getattr(resource, "max_occupancy", None), DEFAULT_MAX_OCCUPANTS)


def resolve_effective_terms(terms: Any, resource: Any) -> ResolvedTerms:
     """
     Resolve the effective terms of a contract.

     Args:
          terms: object exposing start_date, end_date and any of the optional
               term attributes (monthly_rent, deposit, payment_cycle_months,
               payment_day, max_occupants and the utility costs); missing
               or None attributes fall through to the resource default.
          resource: the Room or Motel being rented.

     Raises:
          DomainValidationError: bad date order, or no rent anywhere in the chain.
     """
     start_date = terms.start_date
     end_date = terms.end_date
     validate_date_range(start_date, end_date)

     monthly_rent = _first_set(getattr(terms, "monthly_rent", None), _resource_rent(resource))
     if monthly_rent is None:
          raise DomainValidationError("Monthly rent is required: neither the contract nor the resource sets one")
     monthly_rent = Decimal(monthly_rent)

     deposit_months = _first_set(getattr(resource, "deposit_months", None), DEFAULT_DEPOSIT_MONTHS)
     deposit = _first_set(getattr(terms, "deposit", None), monthly_rent * deposit_months)

     utilities = {
          name: Decimal(_first_set(getattr(terms, name, None), getattr(resource, name, None), default))
          for name, default in UTILITY_FIELDS
     }

     return ResolvedTerms(
          start_date=start_date,
          end_date=end_date,
          monthly_rent=monthly_rent,
          deposit=Decimal(deposit),
          payment_cycle_months=_first_set(
               getattr(terms, "payment_cycle_months", None),
               getattr(resource, "payment_cycle_months", None),
               DEFAULT_PAYMENT_CYCLE_MONTHS,
          ),
          payment_day=_first_set(getattr(terms, "payment_day", None), DEFAULT_PAYMENT_DAY),
          max_occupants=_first_set(getattr(terms, "max_occupants", None), _resource_max_occupants(resource)),
          has_wifi=bool(getattr(resource, "has_wifi", False)),
          has_parking=bool(getattr(resource, "has_parking", False)),
          allow_cooking=bool(getattr(resource, "allow_cooking", False)),
          allow_pets=bool(getattr(resource, "allow_pets", False)),
          regulations=_resource_regulations(resource),
          **utilities,
     )

# tests/test_bill_service.py
from datetime import date
from decimal import Decimal

import pytest

from errors import ConflictError, DomainValidationError, ForbiddenError, InvalidStateError
from models.bill import BillStatus
from schemas.bill import BillCreate
from services.bill_service import BillService, calculate_total
from services.contract_service import ContractService
from tests.conftest import actor_for, room_contract_data


@pytest.fixture
def active_contract(db, room, tenant, landlord):
     contract = ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(landlord))
     ContractService.approve(db, contract.id, actor_for(tenant))
     db.commit()
     return contract


def _bill_data(contract, **overrides):
     values = dict(
          contract_id=contract.id,
          month=date(2024, 2, 15),
          electricity_start=100,
          electricity_end=200,
          water_start=10,
          water_end=14,
          other_fees=Decimal("50000"),
     )
     values.update(overrides)
     return BillCreate(**values)


def test_calculate_total():
     total = calculate_total(100, 200, 10, 14, Decimal("3500"), Decimal("20000"), Decimal("50000"))
     assert total == Decimal("480000")


def test_meters_cannot_run_backwards():
     with pytest.raises(DomainValidationError):
          calculate_total(200, 100, 0, 1, Decimal("1"), Decimal("1"))
     with pytest.raises(DomainValidationError):
          calculate_total(0, 1, 5, 4, Decimal("1"), Decimal("1"))


def test_create_uses_contract_rates(db, active_contract, landlord):
     bill = BillService.create(db, actor_for(landlord), _bill_data(active_contract))
     db.commit()

     assert bill.month == date(2024, 2, 1)
     assert bill.electricity_rate == Decimal("3500")
     assert bill.water_rate == Decimal("20000")
     assert bill.total_amount == Decimal("480000")
     assert bill.status == BillStatus.PENDING


def test_month_is_billed_once(db, active_contract, landlord):
     BillService.create(db, actor_for(landlord), _bill_data(active_contract))
     db.commit()
     with pytest.raises(ConflictError):
          BillService.create(db, actor_for(landlord), _bill_data(active_contract, month=date(2024, 2, 28)))


def test_only_active_contracts_are_billed(db, room, tenant, landlord):
     contract = ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(landlord))
     db.commit()
     with pytest.raises(InvalidStateError):
          BillService.create(db, actor_for(landlord), _bill_data(contract))


def test_tenant_cannot_create_bills(db, active_contract, tenant):
     with pytest.raises(ForbiddenError):
          BillService.create(db, actor_for(tenant), _bill_data(active_contract))


def test_mark_paid_once(db, active_contract, landlord):
     bill = BillService.create(db, actor_for(landlord), _bill_data(active_contract))
     db.commit()

     BillService.mark_paid(db, bill.id, actor_for(landlord))
     db.commit()
     assert bill.status == BillStatus.PAID
     assert bill.paid_at is not None

     with pytest.raises(InvalidStateError):
          BillService.mark_paid(db, bill.id, actor_for(landlord))


def test_tenant_sees_own_bills(db, active_contract, landlord, tenant, other_tenant):
     bill = BillService.create(db, actor_for(landlord), _bill_data(active_contract))
     db.commit()

     assert [b.id for b in BillService.list_for_actor(db, actor_for(tenant))] == [bill.id]
     assert BillService.list_for_actor(db, actor_for(other_tenant)) == []
     assert BillService.count_for_contract(db, active_contract.id) == 1
     with pytest.raises(ForbiddenError):
          BillService.get(db, bill.id, actor_for(other_tenant))

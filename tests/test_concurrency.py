# tests/test_concurrency.py
"""
Two transactions racing for the same contract or room: exactly one wins, the
loser gets a ConflictError, and the room ends up occupied once.
"""
import threading

from sqlalchemy import func, select

from errors import ConflictError
from models import Contract, ContractStatus, Room, RoomStatus
from services.contract_request_service import ContractRequestService
from services.contract_service import ContractService
from tests.conftest import actor_for, room_contract_data, room_request_data


def _race(session_factory, *calls):
     """Run each call(db) in its own thread and session; return the outcomes in order."""
     barrier = threading.Barrier(len(calls))
     outcomes = [None] * len(calls)

     def _run(index, call):
          session = session_factory()
          try:
               barrier.wait()
               call(session)
               session.commit()
               outcomes[index] = "ok"
          except ConflictError as exc:
               session.rollback()
               outcomes[index] = exc
          finally:
               session.close()

     threads = [threading.Thread(target=_run, args=(i, call)) for i, call in enumerate(calls)]
     for thread in threads:
          thread.start()
     for thread in threads:
          thread.join(timeout=60)
     return outcomes


def _active_contracts_on(session_factory, room_id):
     with session_factory() as session:
          return session.execute(
               select(func.count(Contract.id)).where(
                    Contract.room_id == room_id, Contract.status == ContractStatus.ACTIVE
               )
          ).scalar_one()


def _assert_one_winner(outcomes):
     assert sorted(o == "ok" for o in outcomes) == [False, True]
     assert any(isinstance(o, ConflictError) for o in outcomes)


def test_concurrent_approvals_of_same_contract(db, session_factory, room, tenant, landlord):
     contract = ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(landlord))
     db.commit()
     contract_id = contract.id

     approve = lambda session: ContractService.approve(session, contract_id, actor_for(tenant))
     outcomes = _race(session_factory, approve, approve)

     _assert_one_winner(outcomes)
     assert _active_contracts_on(session_factory, room.id) == 1
     with session_factory() as session:
          assert session.get(Room, room.id).status == RoomStatus.OCCUPIED


def test_concurrent_approvals_of_two_contracts_on_one_room(db, session_factory, room, tenant, other_tenant, landlord):
     first = ContractService.create(db, room_contract_data(room, tenant), actor=actor_for(landlord))
     second = ContractService.create(db, room_contract_data(room, other_tenant), actor=actor_for(landlord))
     db.commit()
     first_id, second_id = first.id, second.id

     outcomes = _race(
          session_factory,
          lambda session: ContractService.approve(session, first_id, actor_for(tenant)),
          lambda session: ContractService.approve(session, second_id, actor_for(other_tenant)),
     )

     _assert_one_winner(outcomes)
     assert _active_contracts_on(session_factory, room.id) == 1
     with session_factory() as session:
          stored = session.get(Room, room.id)
          assert stored.status == RoomStatus.OCCUPIED
          assert stored.current_tenant_id in (tenant.id, other_tenant.id)


def test_concurrent_request_approvals_on_one_room(db, session_factory, room, tenant, other_tenant, landlord):
     first = ContractRequestService.create(db, actor_for(landlord), room_request_data(room, tenant))
     second = ContractRequestService.create(db, actor_for(landlord), room_request_data(room, other_tenant))
     db.commit()
     first_id, second_id = first.id, second.id

     outcomes = _race(
          session_factory,
          lambda session: ContractRequestService.approve(session, first_id, actor_for(tenant)),
          lambda session: ContractRequestService.approve(session, second_id, actor_for(other_tenant)),
     )

     _assert_one_winner(outcomes)
     assert _active_contracts_on(session_factory, room.id) == 1

# tests/test_models.py
from models import Base, Contract, ContractRequest, ContractStatus, Room, RoomStatus
from models.target import MotelTarget, RoomTarget


def test_table_names_match_migrations():
     assert set(Base.metadata.tables) == {
          "users",
          "motels",
          "rooms",
          "contracts",
          "contract_requests",
          "bills",
          "notifications",
     }


def test_rows_expose_their_target():
     assert Contract(type="ROOM", room_id=4).target == RoomTarget(room_id=4)
     assert ContractRequest(type="MOTEL", motel_id=2).target == MotelTarget(motel_id=2)


def test_room_occupancy_flag():
     assert Room(status=RoomStatus.OCCUPIED).is_occupied
     assert not Room(status=RoomStatus.VACANT).is_occupied


def test_contract_active_flag():
     assert Contract(status=ContractStatus.ACTIVE).is_active
     assert not Contract(status=ContractStatus.PENDING_TENANT).is_active

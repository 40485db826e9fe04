# models/target.py
"""
Contract target - the room or motel a contract (or contract request) rents.

Rows store the target as two nullable columns (room_id, motel_id); code works
with the sum type below, which can only be built with exactly the id its
type calls for.
"""
import enum
from dataclasses import dataclass
from typing import Optional, Union

from errors import DomainValidationError


class ContractType(str, enum.Enum):
     """What a contract rents: a single room or a whole motel."""
     ROOM = "ROOM"
     MOTEL = "MOTEL"


@dataclass(frozen=True)
class RoomTarget:
     room_id: int

     @property
     def type(self) -> ContractType:
          return ContractType.ROOM

     @property
     def id(self) -> int:
          return self.room_id


@dataclass(frozen=True)
class MotelTarget:
     motel_id: int

     @property
     def type(self) -> ContractType:
          return ContractType.MOTEL

     @property
     def id(self) -> int:
          return self.motel_id


Target = Union[RoomTarget, MotelTarget]


def build_target(
     contract_type: Union[ContractType, str, None],
     room_id: Optional[int] = None,
     motel_id: Optional[int] = None,
) -> Target:
     """
     Build the target for a contract type.

     Raises:
          DomainValidationError: unknown type, missing id for the type, or
               both ids supplied.
     """
     try:
          contract_type = ContractType(contract_type)
     except ValueError:
          raise DomainValidationError(f"Invalid contract type: {contract_type!r}")

     if room_id is not None and motel_id is not None:
          raise DomainValidationError("roomId and motelId are mutually exclusive")

     if contract_type == ContractType.ROOM:
          if room_id is None:
               raise DomainValidationError("roomId is required for ROOM contracts")
          return RoomTarget(room_id=room_id)

     if motel_id is None:
          raise DomainValidationError("motelId is required for MOTEL contracts")
     return MotelTarget(motel_id=motel_id)


def target_columns(target: Target) -> dict:
     """Column values for persisting a target on a contract or request row."""
     if isinstance(target, RoomTarget):
          return {"type": ContractType.ROOM, "room_id": target.room_id, "motel_id": None}
     return {"type": ContractType.MOTEL, "room_id": None, "motel_id": target.motel_id}

# errors.py
"""
Typed errors for the rental core.

Every error is an expected outcome surfaced to the caller, never a process
level failure. Catch by type; `code` is the machine-readable value the API
returns next to the message.

    RentalError
    +-- NotFoundError
    +-- ConflictError
    |   +-- ResourceOccupiedError
    |   +-- InvalidStateError
    |   +-- ContractHasBillsError
    |   +-- ResourceInUseError
    +-- ForbiddenError
    +-- DomainValidationError
"""
from typing import Optional


class RentalError(Exception):
     """Base class for all rental core errors."""
     code: str = "RENTAL_ERROR"

     def __init__(self, message: str, code: Optional[str] = None):
          super().__init__(message)
          self.message = message
          if code is not None:
               self.code = code


class NotFoundError(RentalError):
     """A target, tenant, contract, request or bill does not exist."""
     code = "NOT_FOUND"


class ConflictError(RentalError):
     """The entity is not in a state that allows the operation."""
     code = "CONFLICT"


class ResourceOccupiedError(ConflictError):
     """The room is already occupied."""
     code = "RESOURCE_OCCUPIED"


class InvalidStateError(ConflictError):
     """A contract, request or bill is not in the state the operation requires."""
     code = "INVALID_STATE"

     def __init__(self, message: str, current_state: Optional[str] = None):
          super().__init__(message)
          self.current_state = current_state


class ContractHasBillsError(ConflictError):
     """A contract with billing history can only be terminated, not deleted."""
     code = "CONTRACT_HAS_BILLS"

     def __init__(self, contract_id: int, bill_count: int):
          super().__init__(
               f"Contract {contract_id} has {bill_count} bill(s); terminate it instead of deleting"
          )
          self.contract_id = contract_id
          self.bill_count = bill_count


class ResourceInUseError(ConflictError):
     """A room or motel is still referenced by contracts, requests or rooms."""
     code = "RESOURCE_IN_USE"


class ForbiddenError(RentalError):
     """The actor is not allowed to perform the operation."""
     code = "FORBIDDEN"


class DomainValidationError(RentalError):
     """Input is well-formed but violates a business rule (date order, target fields)."""
     code = "VALIDATION_ERROR"

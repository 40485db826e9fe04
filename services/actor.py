# services/actor.py
from dataclasses import dataclass

from models.user import UserRole


@dataclass(frozen=True)
class ActorContext:
     """Who is calling a core operation. Built once per request from the token."""
     id: int
     role: UserRole

     @property
     def is_admin(self) -> bool:
          return self.role == UserRole.ADMIN

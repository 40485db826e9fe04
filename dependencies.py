# dependencies.py
"""
Request-scoped dependencies: bearer token verification and the actor context
every service operation receives.
"""
import os
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from dotenv import load_dotenv

from models.user import UserRole
from services.actor import ActorContext

load_dotenv()


def _jwt_settings():
     return os.getenv("JWT_SECRET"), os.getenv("JWT_ALGORITHM", "HS256")


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     secret, algorithm = _jwt_settings()
     if not secret:
          raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="JWT_SECRET is not configured")
     try:
          return jwt.decode(token, secret, algorithms=[algorithm])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_actor(token: dict = Depends(verify_token)) -> ActorContext:
     """Build the caller's ActorContext from a verified token payload."""
     user_id = token.get("id")
     role = token.get("role")
     try:
          return ActorContext(id=int(user_id), role=UserRole(str(role).upper()))
     except (TypeError, ValueError):
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def require_roles(*roles: UserRole) -> Callable[..., ActorContext]:
     """
     Dependency factory restricting an endpoint to the given roles.

     Usage:
          @router.delete("/{contract_id}")
          def remove(actor: ActorContext = Depends(require_roles(UserRole.ADMIN))):
               ...
     """
     allowed = frozenset(roles)

     def _checker(actor: ActorContext = Depends(get_actor)) -> ActorContext:
          if actor.role not in allowed:
               raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Insufficient permissions for this operation",
               )
          return actor

     return _checker

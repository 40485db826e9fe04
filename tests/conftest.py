# tests/conftest.py
import os

os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker

from database import create_db_engine, get_session
from models import Base, Motel, Room, RoomStatus, User, UserRole
from schemas.contract import ContractCreate
from schemas.contract_request import ContractRequestCreate
from services.actor import ActorContext

ROOM_PRICE = Decimal("2000000")


@pytest.fixture
def engine(tmp_path):
     engine = create_db_engine(f"sqlite:///{tmp_path / 'rental.db'}")
     Base.metadata.create_all(bind=engine)
     yield engine
     engine.dispose()


@pytest.fixture
def session_factory(engine):
     return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
     session = session_factory()
     yield session
     session.rollback()
     session.close()


class Seed:
     """Creates committed rows in short-lived sessions and returns them detached."""

     def __init__(self, session_factory):
          self.session_factory = session_factory
          self._emails = 0

     def _save(self, obj):
          with self.session_factory() as session:
               session.add(obj)
               session.commit()
          return obj

     def user(self, role=UserRole.TENANT, first_name="An", last_name="Nguyen", **kwargs):
          self._emails += 1
          kwargs.setdefault("email", f"user{self._emails}@example.com")
          return self._save(User(role=role, first_name=first_name, last_name=last_name, **kwargs))

     def motel(self, owner, **kwargs):
          kwargs.setdefault("name", "Sunrise Motel")
          kwargs.setdefault("address", "12 Le Loi, District 1")
          kwargs.setdefault("total_rooms", 10)
          return self._save(Motel(owner_id=owner.id, **kwargs))

     def room(self, owner, number="101", price=ROOM_PRICE, **kwargs):
          kwargs.setdefault("status", RoomStatus.VACANT)
          kwargs.setdefault("address", "34 Tran Hung Dao")
          return self._save(Room(owner_id=owner.id, number=number, price=price, **kwargs))


@pytest.fixture
def seed(session_factory):
     return Seed(session_factory)


@pytest.fixture
def landlord(seed):
     return seed.user(UserRole.LANDLORD, first_name="Binh", last_name="Tran")


@pytest.fixture
def tenant(seed):
     return seed.user(UserRole.TENANT, first_name="Chi", last_name="Le")


@pytest.fixture
def other_tenant(seed):
     return seed.user(UserRole.TENANT, first_name="Dung", last_name="Pham")


@pytest.fixture
def admin(seed):
     return seed.user(UserRole.ADMIN, first_name="Admin", last_name="Root")


@pytest.fixture
def room(seed, landlord):
     return seed.room(landlord)


@pytest.fixture
def motel(seed, landlord):
     return seed.motel(landlord, monthly_rent=Decimal("30000000"))


def actor_for(user) -> ActorContext:
     return ActorContext(id=user.id, role=user.role)


def room_contract_data(room, tenant, **overrides) -> ContractCreate:
     values = dict(
          type="ROOM",
          room_id=room.id,
          tenant_id=tenant.id,
          start_date=date(2024, 1, 1),
          end_date=date(2024, 12, 31),
     )
     values.update(overrides)
     return ContractCreate(**values)


def room_request_data(room, tenant, **overrides) -> ContractRequestCreate:
     values = dict(
          type="ROOM",
          room_id=room.id,
          tenant_id=tenant.id,
          start_date=date(2024, 1, 1),
          end_date=date(2024, 12, 31),
          monthly_rent=ROOM_PRICE,
          deposit=ROOM_PRICE,
     )
     values.update(overrides)
     return ContractRequestCreate(**values)


def load(session_factory, model, object_id):
     """Read a row in a fresh session so the result reflects committed state."""
     with session_factory() as session:
          return session.get(model, object_id)


def token_for(user) -> str:
     return jwt.encode({"id": user.id, "role": user.role.value}, "test-secret", algorithm="HS256")


def auth_headers(user) -> dict:
     return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def client(session_factory):
     from main import app

     def _override_get_session():
          session = session_factory()
          try:
               yield session
               session.commit()
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     app.dependency_overrides[get_session] = _override_get_session
     with TestClient(app) as test_client:
          yield test_client
     app.dependency_overrides.clear()

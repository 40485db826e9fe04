# models/base.py
import re

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all rental models.

     Table names are derived from the class name, so the migrations under
     alembic/versions must use the same plural snake_case names.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Example: ContractRequest -> contract_requests
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'

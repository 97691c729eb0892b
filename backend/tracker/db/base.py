"""SQLAlchemy Declarative Base — shared base class for the tracker's ORM models.

Invariants:
    - User, Project and Task inherit from Base
    - Constraint and index names are deterministic (naming convention), so
      migrations can drop/alter them by name on any backend

Design Decisions:
    - Separate file for Base: models import it without importing each other
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

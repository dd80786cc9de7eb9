"""SQLAlchemy declarative Base with the constraint naming used by the migrations."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Keep in sync with alembic/versions: index and check constraint names are referenced there.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

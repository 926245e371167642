"""
Declarative base shared by every ORM model.

Tables follow the numbered layout used across the back-office: `F_00` is the
surrogate key and `F_01..F_0n` hold business fields. Unique constraints carry
explicit `<table>_UK_nn` names; the naming convention below only covers the
constraints and indexes that are not named by hand.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


class IdMixin:
    """Surrogate integer key stored in column F_00."""

    id: Mapped[int] = mapped_column("F_00", Integer, primary_key=True, autoincrement=True)

"""
Records owned by other parts of the organisation and only referenced by id here:
the organizational Structure receiving distributions and the Documents attached
to budget modifications.
"""

from datetime import date

from sqlalchemy import Date, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from raas.database.base import Base, IdMixin


class Structure(IdMixin, Base):
    __tablename__ = "T_01_04_07"
    __table_args__ = (UniqueConstraint("F_03", name="T_01_04_07_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)
    acronym_fr: Mapped[str | None] = mapped_column("F_04", String(20))

    def __repr__(self) -> str:
        return f"<Structure(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class Document(IdMixin, Base):
    __tablename__ = "T_01_03_02"
    __table_args__ = (UniqueConstraint("F_01", name="T_01_03_02_UK_01"),)

    reference: Mapped[str] = mapped_column("F_01", String(100), nullable=False)
    issue_date: Mapped[date | None] = mapped_column("F_02", Date)

    def __repr__(self) -> str:
        return f"<Document(id={self.id!r}, reference={self.reference!r})>"

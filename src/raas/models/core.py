"""
Core referentials: currencies and the realization / approval vocabularies.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from raas.database.base import Base, IdMixin


class Currency(IdMixin, Base):
    """Currency; every designation and both codes are mandatory and unique."""

    __tablename__ = "T_02_01_01"
    __table_args__ = (
        UniqueConstraint("F_01", name="T_02_01_01_UK_01"),
        UniqueConstraint("F_02", name="T_02_01_01_UK_02"),
        UniqueConstraint("F_03", name="T_02_01_01_UK_03"),
        UniqueConstraint("F_04", name="T_02_01_01_UK_04"),
        UniqueConstraint("F_05", name="T_02_01_01_UK_05"),
    )

    designation_ar: Mapped[str] = mapped_column("F_01", String(50), nullable=False)
    designation_en: Mapped[str] = mapped_column("F_02", String(50), nullable=False)
    designation_fr: Mapped[str] = mapped_column("F_03", String(50), nullable=False)
    code_ar: Mapped[str] = mapped_column("F_04", String(20), nullable=False)
    code_lt: Mapped[str] = mapped_column("F_05", String(20), nullable=False)  # ISO 4217, e.g. DZD

    def __repr__(self) -> str:
        return f"<Currency(id={self.id!r}, code_lt={self.code_lt!r})>"


class ApprovalStatus(IdMixin, Base):
    __tablename__ = "T_02_01_02"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_01_02_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<ApprovalStatus(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class RealizationDirector(IdMixin, Base):
    __tablename__ = "T_02_01_03"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_01_03_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(300))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(300))
    designation_fr: Mapped[str] = mapped_column("F_03", String(300), nullable=False)

    def __repr__(self) -> str:
        return f"<RealizationDirector(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class RealizationNature(IdMixin, Base):
    __tablename__ = "T_02_01_04"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_01_04_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<RealizationNature(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class RealizationStatus(IdMixin, Base):
    __tablename__ = "T_02_01_05"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_01_05_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<RealizationStatus(id={self.id!r}, designation_fr={self.designation_fr!r})>"

"""
Budget planning models.

Ownership chain: Domain -> Rubric -> Item -> PlannedItem -> ItemDistribution.
Each child references exactly one parent through a required foreign key; the
parent side only exposes the collection (no delete cascade, deletions of
non-empty parents are refused by the services).
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raas.database.base import Base, IdMixin

if TYPE_CHECKING:
    from .collaborators import Document, Structure


class BudgetType(IdMixin, Base):
    __tablename__ = "T_02_02_01"
    __table_args__ = (
        UniqueConstraint("F_03", name="T_02_02_01_UK_01"),
        UniqueConstraint("F_06", name="T_02_02_01_UK_02"),
    )

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)
    acronym_ar: Mapped[str | None] = mapped_column("F_04", String(20))
    acronym_en: Mapped[str | None] = mapped_column("F_05", String(20))
    acronym_fr: Mapped[str] = mapped_column("F_06", String(20), nullable=False)

    financial_operations: Mapped[list["FinancialOperation"]] = relationship(
        back_populates="budget_type", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<BudgetType(id={self.id!r}, acronym_fr={self.acronym_fr!r})>"


class ItemStatus(IdMixin, Base):
    __tablename__ = "T_02_02_02"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_02_02_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<ItemStatus(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class FinancialOperation(IdMixin, Base):
    __tablename__ = "T_02_02_03"
    __table_args__ = (UniqueConstraint("F_01", name="T_02_02_03_UK_01"),)

    operation: Mapped[str] = mapped_column("F_01", String(200), nullable=False)
    budget_year: Mapped[str] = mapped_column("F_02", String(4), nullable=False)
    budget_type_id: Mapped[int] = mapped_column("F_03", ForeignKey("T_02_02_01.F_00"), nullable=False)

    budget_type: Mapped["BudgetType"] = relationship(back_populates="financial_operations", lazy="select")
    planned_items: Mapped[list["PlannedItem"]] = relationship(back_populates="financial_operation", lazy="select")

    def __repr__(self) -> str:
        return f"<FinancialOperation(id={self.id!r}, operation={self.operation!r}, budget_year={self.budget_year!r})>"


class Domain(IdMixin, Base):
    __tablename__ = "T_02_02_04"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_02_04_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)

    rubrics: Mapped[list["Rubric"]] = relationship(back_populates="domain", lazy="select")

    def __repr__(self) -> str:
        return f"<Domain(id={self.id!r}, designation_fr={self.designation_fr!r})>"


class Rubric(IdMixin, Base):
    __tablename__ = "T_02_02_05"
    __table_args__ = (UniqueConstraint("F_03", name="T_02_02_05_UK_01"),)

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)
    domain_id: Mapped[int] = mapped_column("F_04", ForeignKey("T_02_02_04.F_00"), nullable=False)

    domain: Mapped["Domain"] = relationship(back_populates="rubrics", lazy="select")
    items: Mapped[list["Item"]] = relationship(back_populates="rubric", lazy="select")

    def __repr__(self) -> str:
        return f"<Rubric(id={self.id!r}, designation_fr={self.designation_fr!r}, domain_id={self.domain_id!r})>"


class Item(IdMixin, Base):
    __tablename__ = "T_02_02_06"

    designation_ar: Mapped[str | None] = mapped_column("F_01", String(200))
    designation_en: Mapped[str | None] = mapped_column("F_02", String(200))
    designation_fr: Mapped[str] = mapped_column("F_03", String(200), nullable=False)
    rubric_id: Mapped[int] = mapped_column("F_04", ForeignKey("T_02_02_05.F_00"), nullable=False)

    rubric: Mapped["Rubric"] = relationship(back_populates="items", lazy="select")
    planned_items: Mapped[list["PlannedItem"]] = relationship(back_populates="item", lazy="select")

    def __repr__(self) -> str:
        return f"<Item(id={self.id!r}, designation_fr={self.designation_fr!r}, rubric_id={self.rubric_id!r})>"


class BudgetModification(IdMixin, Base):
    __tablename__ = "T_02_02_07"
    __table_args__ = (UniqueConstraint("F_03", "F_04", name="T_02_02_07_UK_01"),)

    object: Mapped[str | None] = mapped_column("F_01", String(200))
    description: Mapped[str | None] = mapped_column("F_02", String(500))
    approval_date: Mapped[date | None] = mapped_column("F_03", Date)
    demande_id: Mapped[int] = mapped_column("F_04", ForeignKey("T_01_03_02.F_00"), nullable=False)
    response_id: Mapped[int] = mapped_column("F_05", ForeignKey("T_01_03_02.F_00"), nullable=False)

    demande: Mapped["Document"] = relationship(foreign_keys=[demande_id], lazy="select")
    response: Mapped["Document"] = relationship(foreign_keys=[response_id], lazy="select")
    planned_items: Mapped[list["PlannedItem"]] = relationship(back_populates="budget_modification", lazy="select")

    def __repr__(self) -> str:
        return f"<BudgetModification(id={self.id!r}, approval_date={self.approval_date!r}, demande_id={self.demande_id!r})>"


class PlannedItem(IdMixin, Base):
    __tablename__ = "T_02_02_08"

    designation: Mapped[str] = mapped_column("F_01", String(200), nullable=False)
    unitair_cost: Mapped[float | None] = mapped_column("F_02", Float)
    planed_quantity: Mapped[float] = mapped_column("F_03", Float, nullable=False)
    allocated_amount: Mapped[float | None] = mapped_column("F_04", Float)
    item_status_id: Mapped[int] = mapped_column("F_05", ForeignKey("T_02_02_02.F_00"), nullable=False)
    item_id: Mapped[int] = mapped_column("F_06", ForeignKey("T_02_02_06.F_00"), nullable=False)
    financial_operation_id: Mapped[int] = mapped_column("F_07", ForeignKey("T_02_02_03.F_00"), nullable=False)
    budget_modification_id: Mapped[int | None] = mapped_column("F_08", ForeignKey("T_02_02_07.F_00"))

    item_status: Mapped["ItemStatus"] = relationship(lazy="select")
    item: Mapped["Item"] = relationship(back_populates="planned_items", lazy="select")
    financial_operation: Mapped["FinancialOperation"] = relationship(back_populates="planned_items", lazy="select")
    budget_modification: Mapped["BudgetModification | None"] = relationship(
        back_populates="planned_items", lazy="select"
    )
    distributions: Mapped[list["ItemDistribution"]] = relationship(back_populates="planned_item", lazy="select")

    def __repr__(self) -> str:
        return f"<PlannedItem(id={self.id!r}, designation={self.designation!r}, planed_quantity={self.planed_quantity!r})>"


class ItemDistribution(IdMixin, Base):
    """Share of a planned quantity handed to one Structure."""

    __tablename__ = "T_02_02_09"

    quantity: Mapped[float] = mapped_column("F_01", Float, nullable=False)
    planned_item_id: Mapped[int] = mapped_column("F_02", ForeignKey("T_02_02_08.F_00"), nullable=False)
    structure_id: Mapped[int] = mapped_column("F_03", ForeignKey("T_01_04_07.F_00"), nullable=False)

    planned_item: Mapped["PlannedItem"] = relationship(back_populates="distributions", lazy="select")
    structure: Mapped["Structure"] = relationship(lazy="select")

    def __repr__(self) -> str:
        return f"<ItemDistribution(id={self.id!r}, quantity={self.quantity!r}, planned_item_id={self.planned_item_id!r})>"

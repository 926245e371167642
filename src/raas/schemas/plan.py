"""
Planning DTOs.

`XxxWithRelations` variants embed the plain DTOs of directly related records,
one level deep. Because the nested types are the plain variants, a Rubric
embeds its Domain but that Domain does not embed its Rubrics again.
"""

from datetime import date

from .collaborators import DocumentDTO, StructureDTO
from .common import DTO


class BudgetTypeDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None
    acronym_ar: str | None = None
    acronym_en: str | None = None
    acronym_fr: str | None = None


class ItemStatusDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None


class FinancialOperationDTO(DTO):
    id: int | None = None
    operation: str | None = None
    budget_year: str | None = None
    budget_type_id: int | None = None


class DomainDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None


class RubricDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None
    domain_id: int | None = None


class ItemDTO(DTO):
    id: int | None = None
    designation_ar: str | None = None
    designation_en: str | None = None
    designation_fr: str | None = None
    rubric_id: int | None = None


class BudgetModificationDTO(DTO):
    id: int | None = None
    object: str | None = None
    description: str | None = None
    approval_date: date | None = None
    demande_id: int | None = None
    response_id: int | None = None


class PlannedItemDTO(DTO):
    id: int | None = None
    designation: str | None = None
    unitair_cost: float | None = None
    planed_quantity: float | None = None
    allocated_amount: float | None = None
    item_status_id: int | None = None
    item_id: int | None = None
    financial_operation_id: int | None = None
    budget_modification_id: int | None = None


class ItemDistributionDTO(DTO):
    id: int | None = None
    quantity: float | None = None
    planned_item_id: int | None = None
    structure_id: int | None = None


# ---------------------------------------------------------------------------
# One-level expansions
# ---------------------------------------------------------------------------

class BudgetTypeWithRelations(BudgetTypeDTO):
    financial_operations: list[FinancialOperationDTO] = []


class FinancialOperationWithRelations(FinancialOperationDTO):
    budget_type: BudgetTypeDTO | None = None
    planned_items: list[PlannedItemDTO] = []


class DomainWithRelations(DomainDTO):
    rubrics: list[RubricDTO] = []


class RubricWithRelations(RubricDTO):
    domain: DomainDTO | None = None
    items: list[ItemDTO] = []


class ItemWithRelations(ItemDTO):
    rubric: RubricDTO | None = None
    planned_items: list[PlannedItemDTO] = []


class BudgetModificationWithRelations(BudgetModificationDTO):
    demande: DocumentDTO | None = None
    response: DocumentDTO | None = None


class PlannedItemWithRelations(PlannedItemDTO):
    item: ItemDTO | None = None
    item_status: ItemStatusDTO | None = None
    financial_operation: FinancialOperationDTO | None = None
    budget_modification: BudgetModificationDTO | None = None
    distributions: list[ItemDistributionDTO] = []


class ItemDistributionWithRelations(ItemDistributionDTO):
    planned_item: PlannedItemDTO | None = None
    structure: StructureDTO | None = None

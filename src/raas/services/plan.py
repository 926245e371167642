"""
Budget planning services.

The numeric and format rules of the planning chain live here as
`business_check` overrides; they run after the required-field check and before
the uniqueness and reference lookups. Rules that only deserve a warning
(cost variance, very large distributions, far-future approvals) are evaluated
once the record is written and never block it.
"""

import logging
from datetime import date
from typing import Any

from raas.models import (
    BudgetModification,
    BudgetType,
    Domain,
    FinancialOperation,
    Item,
    ItemDistribution,
    ItemStatus,
    PlannedItem,
    Rubric,
)
from raas.repositories.base_repository import PageRequest
from raas.repositories.catalog import LARGE_QUANTITY_WARNING
from raas.repositories.plan import (
    BudgetModificationRepository,
    BudgetTypeRepository,
    DomainRepository,
    FinancialOperationRepository,
    ItemDistributionRepository,
    ItemRepository,
    ItemStatusRepository,
    PlannedItemRepository,
    RubricRepository,
)
from raas.schemas import (
    BudgetModificationDTO,
    BudgetModificationWithRelations,
    BudgetTypeDTO,
    BudgetTypeWithRelations,
    DomainDTO,
    DomainWithRelations,
    FinancialOperationDTO,
    FinancialOperationWithRelations,
    ItemDistributionDTO,
    ItemDistributionWithRelations,
    ItemDTO,
    ItemStatusDTO,
    ItemWithRelations,
    Page,
    PlannedItemDTO,
    PlannedItemWithRelations,
    RubricDTO,
    RubricWithRelations,
)
from raas.validators import rules as entity_rules
from raas.validators.formats import check_budget_year, check_positive
from raas.validators.quantity import check_distribution_headroom, check_planned_quantity_covers
from raas.validators.text import is_blank
from .base import BaseService, DeleteGuard

logger = logging.getLogger(__name__)

# |unit cost x quantity - allocated| above this share of the allocation is reported
COST_VARIANCE_RATIO = 0.5
APPROVAL_HORIZON_DAYS = 2 * 365


class BudgetTypeService(BaseService[BudgetType, BudgetTypeDTO]):
    model = BudgetType
    rules = entity_rules.BUDGET_TYPE
    dto_cls = BudgetTypeDTO
    relations_dto_cls = BudgetTypeWithRelations
    repository_cls = BudgetTypeRepository
    delete_guards = (DeleteGuard(FinancialOperation, "budget_type_id", "financial operations"),)

    async def by_category(self, category: str, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_category(category, page))


class ItemStatusService(BaseService[ItemStatus, ItemStatusDTO]):
    model = ItemStatus
    rules = entity_rules.ITEM_STATUS
    dto_cls = ItemStatusDTO
    repository_cls = ItemStatusRepository
    delete_guards = (DeleteGuard(PlannedItem, "item_status_id", "planned items"),)


class FinancialOperationService(BaseService[FinancialOperation, FinancialOperationDTO]):
    model = FinancialOperation
    rules = entity_rules.FINANCIAL_OPERATION
    dto_cls = FinancialOperationDTO
    relations_dto_cls = FinancialOperationWithRelations
    repository_cls = FinancialOperationRepository
    delete_guards = (DeleteGuard(PlannedItem, "financial_operation_id", "planned items"),)

    async def business_check(self, data: dict[str, Any], entity_id: Any, operation: str) -> None:
        check_budget_year(
            data["budget_year"],
            operation=operation,
            minimum=self.settings.BUDGET_YEAR_MIN,
            horizon=self.settings.BUDGET_YEAR_HORIZON,
        )

    async def by_budget_type(self, budget_type_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_budget_type(budget_type_id, page))

    async def by_budget_year(self, budget_year: str, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_budget_year(budget_year, page))


class DomainService(BaseService[Domain, DomainDTO]):
    model = Domain
    rules = entity_rules.DOMAIN
    dto_cls = DomainDTO
    relations_dto_cls = DomainWithRelations
    repository_cls = DomainRepository
    delete_guards = (DeleteGuard(Rubric, "domain_id", "rubrics"),)


class RubricService(BaseService[Rubric, RubricDTO]):
    model = Rubric
    rules = entity_rules.RUBRIC
    dto_cls = RubricDTO
    relations_dto_cls = RubricWithRelations
    repository_cls = RubricRepository
    delete_guards = (DeleteGuard(Item, "rubric_id", "items"),)

    async def by_domain(self, domain_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_domain(domain_id, page))


class ItemService(BaseService[Item, ItemDTO]):
    model = Item
    rules = entity_rules.ITEM
    dto_cls = ItemDTO
    relations_dto_cls = ItemWithRelations
    repository_cls = ItemRepository
    delete_guards = (DeleteGuard(PlannedItem, "item_id", "planned items"),)

    async def by_rubric(self, rubric_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_rubric(rubric_id, page))


class BudgetModificationService(BaseService[BudgetModification, BudgetModificationDTO]):
    model = BudgetModification
    rules = entity_rules.BUDGET_MODIFICATION
    dto_cls = BudgetModificationDTO
    relations_dto_cls = BudgetModificationWithRelations
    repository_cls = BudgetModificationRepository
    delete_guards = (DeleteGuard(PlannedItem, "budget_modification_id", "planned items"),)

    def after_write(self, entity: BudgetModification, operation: str) -> None:
        if entity.approval_date is not None and (entity.approval_date - date.today()).days > APPROVAL_HORIZON_DAYS:
            logger.warning(
                "validation.approval_date_far_future",
                extra={"entity": self.kind, "id": entity.id, "approval_date": entity.approval_date.isoformat()},
            )
        if is_blank(entity.object) and is_blank(entity.description):
            logger.warning("validation.budget_modification_undocumented", extra={"entity": self.kind, "id": entity.id})

    async def by_demande(self, demande_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_demande(demande_id, page))

    async def by_approval_date_range(self, start: date | None, end: date | None, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_approval_date_range(start, end, page))


class PlannedItemService(BaseService[PlannedItem, PlannedItemDTO]):
    model = PlannedItem
    rules = entity_rules.PLANNED_ITEM
    dto_cls = PlannedItemDTO
    relations_dto_cls = PlannedItemWithRelations
    repository_cls = PlannedItemRepository
    delete_guards = (DeleteGuard(ItemDistribution, "planned_item_id", "distributions"),)

    async def business_check(self, data: dict[str, Any], entity_id: Any, operation: str) -> None:
        check_positive(data.get("unitair_cost"), field="unitair_cost", label="Unit cost", operation=operation)
        check_positive(data.get("planed_quantity"), field="planed_quantity", label="Planned quantity",
                       operation=operation)
        check_positive(data.get("allocated_amount"), field="allocated_amount", label="Allocated amount",
                       operation=operation, allow_zero=True)
        if entity_id is not None:
            await check_planned_quantity_covers(self.db, entity_id, data.get("planed_quantity"))

    def after_write(self, entity: PlannedItem, operation: str) -> None:
        if entity.unitair_cost is None or not entity.allocated_amount:
            return
        expected = entity.unitair_cost * entity.planed_quantity
        if abs(expected - entity.allocated_amount) > COST_VARIANCE_RATIO * entity.allocated_amount:
            logger.warning(
                "validation.cost_variance",
                extra={
                    "entity": self.kind,
                    "id": entity.id,
                    "expected_amount": expected,
                    "allocated_amount": entity.allocated_amount,
                },
            )

    async def by_item(self, item_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_item(item_id, page))

    async def by_status(self, item_status_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_status(item_status_id, page))

    async def by_financial_operation(self, financial_operation_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_financial_operation(financial_operation_id, page))


class ItemDistributionService(BaseService[ItemDistribution, ItemDistributionDTO]):
    model = ItemDistribution
    rules = entity_rules.ITEM_DISTRIBUTION
    dto_cls = ItemDistributionDTO
    relations_dto_cls = ItemDistributionWithRelations
    repository_cls = ItemDistributionRepository

    async def business_check(self, data: dict[str, Any], entity_id: Any, operation: str) -> None:
        check_positive(data["quantity"], field="quantity", label="Quantity", operation=operation)
        await check_distribution_headroom(
            self.db, data["planned_item_id"], data["quantity"], distribution_id=entity_id
        )

    def after_write(self, entity: ItemDistribution, operation: str) -> None:
        if entity.quantity > LARGE_QUANTITY_WARNING:
            logger.warning(
                "validation.large_quantity",
                extra={"entity": self.kind, "id": entity.id, "quantity": entity.quantity},
            )

    # =================================================================================================================
    # Filters
    # =================================================================================================================

    async def by_planned_item(self, planned_item_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_planned_item(planned_item_id, page))

    async def by_structure(self, structure_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_structure(structure_id, page))

    async def by_item(self, item_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_item(item_id, page))

    async def by_rubric(self, rubric_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_rubric(rubric_id, page))

    async def by_domain(self, domain_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_domain(domain_id, page))

    async def by_financial_operation(self, financial_operation_id: int, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_financial_operation(financial_operation_id, page))

    async def by_quantity_range(self, minimum: float | None, maximum: float | None, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_quantity_range(minimum, maximum, page))

    async def by_quantity_band(self, band: str, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_quantity_band(band, page))

    # =================================================================================================================
    # Aggregates
    # =================================================================================================================

    async def sum_by_planned_item(self, planned_item_id: int) -> float:
        return await self.repo.sum_by_planned_item(planned_item_id)

    async def sum_by_structure(self, structure_id: int) -> float:
        return await self.repo.sum_by_structure(structure_id)

    async def remaining_quantity(self, planned_item_id: int) -> float:
        planned = await PlannedItemRepository(self.db).get_by_id_or_raise(planned_item_id, "Planned item")
        return await self.repo.remaining_quantity(planned)

"""
Budget planning repositories.

Besides the base CRUD, these expose the filters used by the planning screens:
children by parent along the Domain -> Rubric -> Item -> PlannedItem ->
ItemDistribution chain, keyword categories for budget types, quantity bands and
the distribution aggregates used by quantity conservation.
"""

import logging
from datetime import date

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from raas.exceptions.base import InvalidFieldError
from raas.models.plan import (
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
from raas.validators.quantity import distributed_quantity
from .base_repository import BaseRepository, PageRequest, PageResult
from .catalog import BUDGET_TYPE_CATEGORIES, QUANTITY_BANDS

logger = logging.getLogger(__name__)

_DESIGNATIONS = ("designation_fr", "designation_en", "designation_ar")


class BudgetTypeRepository(BaseRepository[BudgetType]):
    search_fields = _DESIGNATIONS + ("acronym_fr", "acronym_en", "acronym_ar")
    relations = ("financial_operations",)

    def __init__(self, db: AsyncSession):
        super().__init__(BudgetType, db)

    async def by_category(self, category: str, page: PageRequest) -> PageResult[BudgetType]:
        """
        Budget types whose French or English designation contains any keyword of `category`.

        Raises:
            InvalidFieldError: unknown category name.
        """
        keywords = BUDGET_TYPE_CATEGORIES.get(category.lower())
        if keywords is None:
            raise InvalidFieldError(
                f"Unknown budget type category '{category}'. "
                f"Expected one of: {', '.join(BUDGET_TYPE_CATEGORIES)}",
                fields=["category"],
            )
        clauses = []
        for keyword in keywords:
            pattern = f"%{keyword}%"
            clauses.append(func.lower(BudgetType.designation_fr).like(pattern))
            clauses.append(func.lower(BudgetType.designation_en).like(pattern))
        return await self.paginate(page, or_(*clauses))


class ItemStatusRepository(BaseRepository[ItemStatus]):
    search_fields = _DESIGNATIONS

    def __init__(self, db: AsyncSession):
        super().__init__(ItemStatus, db)


class FinancialOperationRepository(BaseRepository[FinancialOperation]):
    search_fields = ("operation", "budget_year")
    relations = ("budget_type", "planned_items")

    def __init__(self, db: AsyncSession):
        super().__init__(FinancialOperation, db)

    async def by_budget_type(self, budget_type_id: int, page: PageRequest) -> PageResult[FinancialOperation]:
        return await self.paginate(page, FinancialOperation.budget_type_id == budget_type_id)

    async def by_budget_year(self, budget_year: str, page: PageRequest) -> PageResult[FinancialOperation]:
        return await self.paginate(page, FinancialOperation.budget_year == budget_year.strip())


class DomainRepository(BaseRepository[Domain]):
    search_fields = _DESIGNATIONS
    relations = ("rubrics",)

    def __init__(self, db: AsyncSession):
        super().__init__(Domain, db)


class RubricRepository(BaseRepository[Rubric]):
    search_fields = _DESIGNATIONS
    relations = ("domain", "items")

    def __init__(self, db: AsyncSession):
        super().__init__(Rubric, db)

    async def by_domain(self, domain_id: int, page: PageRequest) -> PageResult[Rubric]:
        return await self.paginate(page, Rubric.domain_id == domain_id)


class ItemRepository(BaseRepository[Item]):
    search_fields = _DESIGNATIONS
    relations = ("rubric", "planned_items")

    def __init__(self, db: AsyncSession):
        super().__init__(Item, db)

    async def by_rubric(self, rubric_id: int, page: PageRequest) -> PageResult[Item]:
        return await self.paginate(page, Item.rubric_id == rubric_id)


class BudgetModificationRepository(BaseRepository[BudgetModification]):
    search_fields = ("object", "description")
    relations = ("demande", "response")

    def __init__(self, db: AsyncSession):
        super().__init__(BudgetModification, db)

    async def by_demande(self, demande_id: int, page: PageRequest) -> PageResult[BudgetModification]:
        return await self.paginate(page, BudgetModification.demande_id == demande_id)

    async def by_approval_date_range(
        self, start: date | None, end: date | None, page: PageRequest
    ) -> PageResult[BudgetModification]:
        """Inclusive range; an omitted bound leaves that side open."""
        criteria = []
        if start is not None:
            criteria.append(BudgetModification.approval_date >= start)
        if end is not None:
            criteria.append(BudgetModification.approval_date <= end)
        return await self.paginate(page, *criteria)


class PlannedItemRepository(BaseRepository[PlannedItem]):
    search_fields = ("designation",)
    relations = ("item", "item_status", "financial_operation", "budget_modification", "distributions")

    def __init__(self, db: AsyncSession):
        super().__init__(PlannedItem, db)

    async def by_item(self, item_id: int, page: PageRequest) -> PageResult[PlannedItem]:
        return await self.paginate(page, PlannedItem.item_id == item_id)

    async def by_status(self, item_status_id: int, page: PageRequest) -> PageResult[PlannedItem]:
        return await self.paginate(page, PlannedItem.item_status_id == item_status_id)

    async def by_financial_operation(self, financial_operation_id: int, page: PageRequest) -> PageResult[PlannedItem]:
        return await self.paginate(page, PlannedItem.financial_operation_id == financial_operation_id)


class ItemDistributionRepository(BaseRepository[ItemDistribution]):
    relations = ("planned_item", "structure")

    def __init__(self, db: AsyncSession):
        super().__init__(ItemDistribution, db)

    # =================================================================================================================
    # Filters
    # =================================================================================================================

    async def by_planned_item(self, planned_item_id: int, page: PageRequest) -> PageResult[ItemDistribution]:
        return await self.paginate(page, ItemDistribution.planned_item_id == planned_item_id)

    async def by_structure(self, structure_id: int, page: PageRequest) -> PageResult[ItemDistribution]:
        return await self.paginate(page, ItemDistribution.structure_id == structure_id)

    async def by_item(self, item_id: int, page: PageRequest) -> PageResult[ItemDistribution]:
        planned = select(PlannedItem.id).where(PlannedItem.item_id == item_id)
        return await self.paginate(page, ItemDistribution.planned_item_id.in_(planned))

    async def by_rubric(self, rubric_id: int, page: PageRequest) -> PageResult[ItemDistribution]:
        planned = (
            select(PlannedItem.id)
            .join(Item, PlannedItem.item_id == Item.id)
            .where(Item.rubric_id == rubric_id)
        )
        return await self.paginate(page, ItemDistribution.planned_item_id.in_(planned))

    async def by_domain(self, domain_id: int, page: PageRequest) -> PageResult[ItemDistribution]:
        planned = (
            select(PlannedItem.id)
            .join(Item, PlannedItem.item_id == Item.id)
            .join(Rubric, Item.rubric_id == Rubric.id)
            .where(Rubric.domain_id == domain_id)
        )
        return await self.paginate(page, ItemDistribution.planned_item_id.in_(planned))

    async def by_financial_operation(
        self, financial_operation_id: int, page: PageRequest
    ) -> PageResult[ItemDistribution]:
        planned = select(PlannedItem.id).where(PlannedItem.financial_operation_id == financial_operation_id)
        return await self.paginate(page, ItemDistribution.planned_item_id.in_(planned))

    async def by_quantity_range(
        self, minimum: float | None, maximum: float | None, page: PageRequest
    ) -> PageResult[ItemDistribution]:
        """Inclusive quantity range; an omitted bound leaves that side open."""
        criteria = []
        if minimum is not None:
            criteria.append(ItemDistribution.quantity >= minimum)
        if maximum is not None:
            criteria.append(ItemDistribution.quantity <= maximum)
        return await self.paginate(page, *criteria)

    async def by_quantity_band(self, band: str, page: PageRequest) -> PageResult[ItemDistribution]:
        """
        Named band (`small`, `medium`, `large`, `bulk`), lower bound exclusive,
        upper bound inclusive.
        """
        bounds = QUANTITY_BANDS.get(band.lower())
        if bounds is None:
            raise InvalidFieldError(
                f"Unknown quantity band '{band}'. Expected one of: {', '.join(QUANTITY_BANDS)}",
                fields=["band"],
            )
        criteria = []
        if bounds.lower is not None:
            criteria.append(ItemDistribution.quantity > bounds.lower)
        if bounds.upper is not None:
            criteria.append(ItemDistribution.quantity <= bounds.upper)
        return await self.paginate(page, *criteria)

    # =================================================================================================================
    # Aggregates
    # =================================================================================================================

    async def sum_by_planned_item(self, planned_item_id: int) -> float:
        return await distributed_quantity(self.db, planned_item_id)

    async def sum_by_structure(self, structure_id: int) -> float:
        stmt = select(func.coalesce(func.sum(ItemDistribution.quantity), 0.0)).where(
            ItemDistribution.structure_id == structure_id
        )
        return float(await self.db.scalar(stmt) or 0.0)

    async def remaining_quantity(self, planned_item: PlannedItem) -> float:
        """Planned quantity not yet distributed (never below zero)."""
        distributed = await self.sum_by_planned_item(planned_item.id)
        return max((planned_item.planed_quantity or 0.0) - distributed, 0.0)

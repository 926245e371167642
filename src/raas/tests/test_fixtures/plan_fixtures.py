"""
Planning chain fixtures.

Each fixture persists one record through its service, so the records are
valid by construction: Domain -> Rubric -> Item -> PlannedItem, plus the
ItemStatus, BudgetType / FinancialOperation and Structure a planned item and its
distributions need.
"""

import uuid
from datetime import date

import pytest

from raas.schemas import (
    BudgetTypeDTO,
    DomainDTO,
    FinancialOperationDTO,
    ItemDTO,
    ItemStatusDTO,
    PlannedItemDTO,
    RubricDTO,
    StructureDTO,
)


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def domain(domain_service) -> DomainDTO:
    return await domain_service.create(DomainDTO(designation_fr=unique("Informatique")))


@pytest.fixture
async def rubric(rubric_service, domain) -> RubricDTO:
    return await rubric_service.create(RubricDTO(designation_fr=unique("Matériel"), domain_id=domain.id))


@pytest.fixture
async def item(item_service, rubric) -> ItemDTO:
    return await item_service.create(ItemDTO(designation_fr=unique("Ordinateur portable"), rubric_id=rubric.id))


@pytest.fixture
async def item_status(item_status_service) -> ItemStatusDTO:
    return await item_status_service.create(ItemStatusDTO(designation_fr=unique("Planifié")))


@pytest.fixture
async def budget_type(budget_type_service) -> BudgetTypeDTO:
    return await budget_type_service.create(
        BudgetTypeDTO(designation_fr=unique("Budget d'investissement"), acronym_fr=unique("BI")[:20])
    )


@pytest.fixture
async def financial_operation(financial_operation_service, budget_type) -> FinancialOperationDTO:
    return await financial_operation_service.create(
        FinancialOperationDTO(
            operation=unique("OP"),
            budget_year=str(date.today().year),
            budget_type_id=budget_type.id,
        )
    )


@pytest.fixture
async def structure(structure_service) -> StructureDTO:
    return await structure_service.create(StructureDTO(designation_fr=unique("Direction des moyens")))


@pytest.fixture
async def create_planned_item(planned_item_service, item, item_status, financial_operation):
    """
    Factory for planned items attached to the shared item / status / operation.

    Usage:
        planned = await create_planned_item(planed_quantity=100)
    """

    async def _create(**overrides) -> PlannedItemDTO:
        data = {
            "designation": unique("Laptops"),
            "unitair_cost": 1000.0,
            "planed_quantity": 100.0,
            "allocated_amount": 100_000.0,
            "item_status_id": item_status.id,
            "item_id": item.id,
            "financial_operation_id": financial_operation.id,
        }
        data.update(overrides)
        return await planned_item_service.create(PlannedItemDTO(**data))

    return _create


@pytest.fixture
async def planned_item(create_planned_item) -> PlannedItemDTO:
    """A planned item with a planned quantity of 100."""
    return await create_planned_item()

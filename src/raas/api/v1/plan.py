"""
Routes for the budget planning chain.

Fixed-path filters are declared before `register_crud_routes` on each router.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from raas.schemas import (
    BudgetModificationDTO,
    BudgetTypeDTO,
    FinancialOperationDTO,
    ItemDistributionDTO,
    ItemDTO,
    Page,
    PlannedItemDTO,
    QuantityResponse,
    RubricDTO,
)
from raas.services.plan import (
    BudgetModificationService,
    BudgetTypeService,
    DomainService,
    FinancialOperationService,
    ItemDistributionService,
    ItemService,
    ItemStatusService,
    PlannedItemService,
    RubricService,
)
from .crud import register_crud_routes
from .dependencies import PageQuery, page_query, provide_service

# ---------------------------------------------------------------------------------------------------------------------
# Budget types
# ---------------------------------------------------------------------------------------------------------------------

budget_type_router = APIRouter(prefix="/budgetType", tags=["budgetType"])
get_budget_type_service = provide_service(BudgetTypeService)


@budget_type_router.get("/category/{name}", response_model=Page[BudgetTypeDTO])
async def budget_types_by_category(name: str, paging: PageQuery = Depends(page_query),
                                   service: BudgetTypeService = Depends(get_budget_type_service)):
    """Budget types whose designation matches one of the category keywords (e.g. `investment`, `defense`)."""
    return await service.by_category(name, paging.for_service(service))


register_crud_routes(budget_type_router, BudgetTypeService)

item_status_router = register_crud_routes(APIRouter(prefix="/itemStatus", tags=["itemStatus"]), ItemStatusService)

# ---------------------------------------------------------------------------------------------------------------------
# Financial operations
# ---------------------------------------------------------------------------------------------------------------------

financial_operation_router = APIRouter(prefix="/financialOperation", tags=["financialOperation"])
get_financial_operation_service = provide_service(FinancialOperationService)


@financial_operation_router.get("/budget-type/{budget_type_id}", response_model=Page[FinancialOperationDTO])
async def financial_operations_by_budget_type(
    budget_type_id: int,
    paging: PageQuery = Depends(page_query),
    service: FinancialOperationService = Depends(get_financial_operation_service),
):
    return await service.by_budget_type(budget_type_id, paging.for_service(service))


@financial_operation_router.get("/budget-year/{budget_year}", response_model=Page[FinancialOperationDTO])
async def financial_operations_by_budget_year(
    budget_year: str,
    paging: PageQuery = Depends(page_query),
    service: FinancialOperationService = Depends(get_financial_operation_service),
):
    return await service.by_budget_year(budget_year, paging.for_service(service))


register_crud_routes(financial_operation_router, FinancialOperationService)

# ---------------------------------------------------------------------------------------------------------------------
# Domain -> Rubric -> Item
# ---------------------------------------------------------------------------------------------------------------------

domain_router = register_crud_routes(APIRouter(prefix="/domain", tags=["domain"]), DomainService)

rubric_router = APIRouter(prefix="/rubric", tags=["rubric"])
get_rubric_service = provide_service(RubricService)


@rubric_router.get("/domain/{domain_id}", response_model=Page[RubricDTO])
async def rubrics_by_domain(domain_id: int, paging: PageQuery = Depends(page_query),
                            service: RubricService = Depends(get_rubric_service)):
    return await service.by_domain(domain_id, paging.for_service(service))


register_crud_routes(rubric_router, RubricService)

item_router = APIRouter(prefix="/item", tags=["item"])
get_item_service = provide_service(ItemService)


@item_router.get("/rubric/{rubric_id}", response_model=Page[ItemDTO])
async def items_by_rubric(rubric_id: int, paging: PageQuery = Depends(page_query),
                          service: ItemService = Depends(get_item_service)):
    return await service.by_rubric(rubric_id, paging.for_service(service))


register_crud_routes(item_router, ItemService)

# ---------------------------------------------------------------------------------------------------------------------
# Budget modifications
# ---------------------------------------------------------------------------------------------------------------------

budget_modification_router = APIRouter(prefix="/budgetModification", tags=["budgetModification"])
get_budget_modification_service = provide_service(BudgetModificationService)


@budget_modification_router.get("/demande/{demande_id}", response_model=Page[BudgetModificationDTO])
async def budget_modifications_by_demande(
    demande_id: int,
    paging: PageQuery = Depends(page_query),
    service: BudgetModificationService = Depends(get_budget_modification_service),
):
    return await service.by_demande(demande_id, paging.for_service(service))


@budget_modification_router.get("/approval-date", response_model=Page[BudgetModificationDTO])
async def budget_modifications_by_approval_date(
    start: date | None = Query(None),
    end: date | None = Query(None),
    paging: PageQuery = Depends(page_query),
    service: BudgetModificationService = Depends(get_budget_modification_service),
):
    """Inclusive date range; either bound may be omitted."""
    return await service.by_approval_date_range(start, end, paging.for_service(service))


register_crud_routes(budget_modification_router, BudgetModificationService)

# ---------------------------------------------------------------------------------------------------------------------
# Planned items
# ---------------------------------------------------------------------------------------------------------------------

planned_item_router = APIRouter(prefix="/plannedItem", tags=["plannedItem"])
get_planned_item_service = provide_service(PlannedItemService)


@planned_item_router.get("/item/{item_id}", response_model=Page[PlannedItemDTO])
async def planned_items_by_item(item_id: int, paging: PageQuery = Depends(page_query),
                                service: PlannedItemService = Depends(get_planned_item_service)):
    return await service.by_item(item_id, paging.for_service(service))


@planned_item_router.get("/status/{item_status_id}", response_model=Page[PlannedItemDTO])
async def planned_items_by_status(item_status_id: int, paging: PageQuery = Depends(page_query),
                                  service: PlannedItemService = Depends(get_planned_item_service)):
    return await service.by_status(item_status_id, paging.for_service(service))


@planned_item_router.get("/financial-operation/{financial_operation_id}", response_model=Page[PlannedItemDTO])
async def planned_items_by_financial_operation(
    financial_operation_id: int,
    paging: PageQuery = Depends(page_query),
    service: PlannedItemService = Depends(get_planned_item_service),
):
    return await service.by_financial_operation(financial_operation_id, paging.for_service(service))


register_crud_routes(planned_item_router, PlannedItemService)

# ---------------------------------------------------------------------------------------------------------------------
# Item distributions
# ---------------------------------------------------------------------------------------------------------------------

item_distribution_router = APIRouter(prefix="/itemDistribution", tags=["itemDistribution"])
get_distribution_service = provide_service(ItemDistributionService)


@item_distribution_router.get("/planned-item/{planned_item_id}/sum-quantity", response_model=QuantityResponse)
async def distributed_quantity(planned_item_id: int,
                               service: ItemDistributionService = Depends(get_distribution_service)):
    return QuantityResponse(value=await service.sum_by_planned_item(planned_item_id))


@item_distribution_router.get("/planned-item/{planned_item_id}/remaining-quantity", response_model=QuantityResponse)
async def remaining_quantity(planned_item_id: int,
                             service: ItemDistributionService = Depends(get_distribution_service)):
    """Planned quantity not yet distributed; 404 when the planned item does not exist."""
    return QuantityResponse(value=await service.remaining_quantity(planned_item_id))


@item_distribution_router.get("/structure/{structure_id}/sum-quantity", response_model=QuantityResponse)
async def structure_quantity(structure_id: int,
                             service: ItemDistributionService = Depends(get_distribution_service)):
    return QuantityResponse(value=await service.sum_by_structure(structure_id))


@item_distribution_router.get("/planned-item/{planned_item_id}", response_model=Page[ItemDistributionDTO])
async def distributions_by_planned_item(planned_item_id: int, paging: PageQuery = Depends(page_query),
                                        service: ItemDistributionService = Depends(get_distribution_service)):
    return await service.by_planned_item(planned_item_id, paging.for_service(service))


@item_distribution_router.get("/structure/{structure_id}", response_model=Page[ItemDistributionDTO])
async def distributions_by_structure(structure_id: int, paging: PageQuery = Depends(page_query),
                                     service: ItemDistributionService = Depends(get_distribution_service)):
    return await service.by_structure(structure_id, paging.for_service(service))


@item_distribution_router.get("/item/{item_id}", response_model=Page[ItemDistributionDTO])
async def distributions_by_item(item_id: int, paging: PageQuery = Depends(page_query),
                                service: ItemDistributionService = Depends(get_distribution_service)):
    return await service.by_item(item_id, paging.for_service(service))


@item_distribution_router.get("/rubric/{rubric_id}", response_model=Page[ItemDistributionDTO])
async def distributions_by_rubric(rubric_id: int, paging: PageQuery = Depends(page_query),
                                  service: ItemDistributionService = Depends(get_distribution_service)):
    return await service.by_rubric(rubric_id, paging.for_service(service))


@item_distribution_router.get("/domain/{domain_id}", response_model=Page[ItemDistributionDTO])
async def distributions_by_domain(domain_id: int, paging: PageQuery = Depends(page_query),
                                  service: ItemDistributionService = Depends(get_distribution_service)):
    return await service.by_domain(domain_id, paging.for_service(service))


@item_distribution_router.get("/financial-operation/{financial_operation_id}",
                              response_model=Page[ItemDistributionDTO])
async def distributions_by_financial_operation(
    financial_operation_id: int,
    paging: PageQuery = Depends(page_query),
    service: ItemDistributionService = Depends(get_distribution_service),
):
    return await service.by_financial_operation(financial_operation_id, paging.for_service(service))


@item_distribution_router.get("/quantity-range", response_model=Page[ItemDistributionDTO])
async def distributions_by_quantity_range(
    minimum: float | None = Query(None, alias="min"),
    maximum: float | None = Query(None, alias="max"),
    paging: PageQuery = Depends(page_query),
    service: ItemDistributionService = Depends(get_distribution_service),
):
    return await service.by_quantity_range(minimum, maximum, paging.for_service(service))


@item_distribution_router.get("/quantity/{band}", response_model=Page[ItemDistributionDTO])
async def distributions_by_quantity_band(band: str, paging: PageQuery = Depends(page_query),
                                         service: ItemDistributionService = Depends(get_distribution_service)):
    """`small` (<=10), `medium` (10-50], `large` (50-100] or `bulk` (>100)."""
    return await service.by_quantity_band(band, paging.for_service(service))


register_crud_routes(item_distribution_router, ItemDistributionService)

routers = [
    budget_type_router,
    item_status_router,
    financial_operation_router,
    domain_router,
    rubric_router,
    item_router,
    budget_modification_router,
    planned_item_router,
    item_distribution_router,
]

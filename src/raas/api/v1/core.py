"""Routes for the core referentials."""

from fastapi import APIRouter, Depends

from raas.schemas import CurrencyDTO, Page
from raas.services.core import (
    ApprovalStatusService,
    CurrencyService,
    RealizationDirectorService,
    RealizationNatureService,
    RealizationStatusService,
)
from .crud import register_crud_routes
from .dependencies import PageQuery, page_query, provide_service

currency_router = APIRouter(prefix="/currency", tags=["currency"])
get_currency_service = provide_service(CurrencyService)


@currency_router.get("/major", response_model=Page[CurrencyDTO])
async def major_currencies(paging: PageQuery = Depends(page_query),
                           service: CurrencyService = Depends(get_currency_service)):
    return await service.by_group("major", paging.for_service(service))


@currency_router.get("/regional", response_model=Page[CurrencyDTO])
async def regional_currencies(paging: PageQuery = Depends(page_query),
                              service: CurrencyService = Depends(get_currency_service)):
    return await service.by_group("regional", paging.for_service(service))


@currency_router.get("/code/{code}", response_model=CurrencyDTO)
async def currency_by_code(code: str, service: CurrencyService = Depends(get_currency_service)):
    return await service.get_by_code(code)


register_crud_routes(currency_router, CurrencyService)

approval_status_router = register_crud_routes(
    APIRouter(prefix="/approvalStatus", tags=["approvalStatus"]), ApprovalStatusService
)
realization_director_router = register_crud_routes(
    APIRouter(prefix="/realizationDirector", tags=["realizationDirector"]), RealizationDirectorService
)
realization_nature_router = register_crud_routes(
    APIRouter(prefix="/realizationNature", tags=["realizationNature"]), RealizationNatureService
)
realization_status_router = register_crud_routes(
    APIRouter(prefix="/realizationStatus", tags=["realizationStatus"]), RealizationStatusService
)

routers = [
    currency_router,
    approval_status_router,
    realization_director_router,
    realization_nature_router,
    realization_status_router,
]

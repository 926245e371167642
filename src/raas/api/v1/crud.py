"""
Generic CRUD routes.

`register_crud_routes` adds the endpoints every resource exposes to an existing
router. Resource modules declare their own fixed-path routes first (e.g.
`/currency/major`) and call it last, so `/{entity_id}` never shadows them.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from raas.schemas.common import DTO, CountResponse, ExistsResponse, Page
from raas.services.base import BaseService
from .dependencies import PageQuery, page_query, provide_service


def register_crud_routes(
    router: APIRouter,
    service_cls: type[BaseService],
    *,
    write_dto: type[DTO] | None = None,
) -> APIRouter:
    read_dto = service_cls.dto_cls
    write_dto = write_dto or read_dto
    relations_dto = service_cls.relations_dto_cls
    get_service = provide_service(service_cls)

    @router.get("/search", response_model=Page[read_dto])
    async def search(
        query: str = Query("", description="case-insensitive substring"),
        paging: PageQuery = Depends(page_query),
        service: BaseService = Depends(get_service),
    ):
        return await service.search(query, paging.for_service(service))

    @router.get("/count/all", response_model=CountResponse)
    async def count(service: BaseService = Depends(get_service)):
        return CountResponse(count=await service.count())

    @router.get("", response_model=Page[read_dto])
    async def list_all(paging: PageQuery = Depends(page_query), service: BaseService = Depends(get_service)):
        return await service.get_all(paging.for_service(service))

    @router.post("", response_model=read_dto, status_code=status.HTTP_201_CREATED)
    async def create(payload: write_dto, service: BaseService = Depends(get_service)):
        return await service.create(payload)

    @router.get("/{entity_id}", response_model=read_dto)
    async def get(entity_id: int, service: BaseService = Depends(get_service)):
        return await service.get(entity_id)

    if relations_dto is not None:
        @router.get("/{entity_id}/with-relations", response_model=relations_dto)
        async def get_with_relations(entity_id: int, service: BaseService = Depends(get_service)):
            return await service.get_with_relations(entity_id)

    @router.get("/{entity_id}/exists", response_model=ExistsResponse)
    async def exists(entity_id: int, service: BaseService = Depends(get_service)):
        return ExistsResponse(exists=await service.exists(entity_id))

    @router.put("/{entity_id}", response_model=read_dto)
    async def update(entity_id: int, payload: write_dto, service: BaseService = Depends(get_service)):
        return await service.update(entity_id, payload)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
    async def delete(entity_id: int, service: BaseService = Depends(get_service)):
        await service.delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router

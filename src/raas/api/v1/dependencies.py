from dataclasses import dataclass
from typing import Callable, Literal, TypeVar

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from raas.database.session import get_async_session
from raas.repositories.base_repository import PageRequest
from raas.services.base import BaseService

ServiceT = TypeVar("ServiceT", bound=BaseService)


def provide_service(service_cls: type[ServiceT]) -> Callable[..., ServiceT]:
    """Build a dependency returning `service_cls` bound to the request session."""

    def _provide(db: AsyncSession = Depends(get_async_session)) -> ServiceT:
        return service_cls(db)

    _provide.__name__ = f"provide_{service_cls.__name__}"
    return _provide


@dataclass
class PageQuery:
    page: int
    size: int | None
    sort_by: str | None
    sort_dir: str

    def for_service(self, service: BaseService) -> PageRequest:
        return service.page_request(self.page, self.size, self.sort_by, self.sort_dir)


def page_query(
    page: int = Query(0, description="0-based page index"),
    size: int | None = Query(None, description="page size, capped server-side"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: Literal["asc", "desc"] = Query("asc", alias="sortDir"),
) -> PageQuery:
    return PageQuery(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

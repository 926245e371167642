"""
Service layer base class.

A service owns one entity kind. It converts DTOs to column values, runs the
write-validation pipeline, calls its repository and commits the unit of work.
Reads come back as DTOs so that no ORM instance (and no lazy relationship)
leaves the service.

Subclasses set the class attributes below and override the hooks they need:

    business_check(data, entity_id, operation)  numeric / format rules
    prepare_create(data, dto) / prepare_update(entity, data, dto)
                                                 last-minute changes to the
                                                 values written (hashing, defaults)
    after_write(entity, operation)              warning-only rules
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from raas.config import Settings, get_settings
from raas.exceptions.base import InvariantViolationError, NotFoundError
from raas.mapping import to_dto, to_dtos, to_entity_fields
from raas.repositories.base_repository import BaseRepository, PageRequest, PageResult
from raas.schemas.common import DTO, Page
from raas.validators.engine import CREATE, UPDATE, EntityRules, validate_write

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")
DTOType = TypeVar("DTOType", bound=DTO)


@dataclass(frozen=True)
class DeleteGuard:
    """Refuse deleting a parent while `child_model.foreign_key` rows still point at it."""

    child_model: Any  # mapped class or association Table
    foreign_key: str
    child_label: str


class BaseService(Generic[ModelType, DTOType]):
    model: type
    rules: EntityRules
    dto_cls: type[DTO]
    relations_dto_cls: type[DTO] | None = None
    repository_cls: type[BaseRepository]
    delete_guards: tuple[DeleteGuard, ...] = ()

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.repo = self.repository_cls(db)

    @property
    def kind(self) -> str:
        return self.rules.kind

    @property
    def update_rules(self) -> EntityRules:
        return self.rules

    # =================================================================================================================
    # Hooks
    # =================================================================================================================

    async def business_check(self, data: dict[str, Any], entity_id: Any, operation: str) -> None:
        return None

    async def prepare_create(self, data: dict[str, Any], dto: DTO) -> dict[str, Any]:
        return data

    async def prepare_update(self, entity, data: dict[str, Any], dto: DTO) -> dict[str, Any]:
        return data

    def after_write(self, entity, operation: str) -> None:
        return None

    # =================================================================================================================
    # Pagination helpers
    # =================================================================================================================

    def page_request(self, page: int = 0, size: int | None = None, sort_by: str | None = None,
                     sort_dir: str = "asc") -> PageRequest:
        """Clamp client paging input: negative pages become 0, sizes fall in [1, MAX_PAGE_SIZE]."""
        if size is None or size <= 0:
            size = self.settings.DEFAULT_PAGE_SIZE
        size = min(size, self.settings.MAX_PAGE_SIZE)
        return PageRequest(page=max(page, 0), size=size, sort_by=sort_by, sort_dir=sort_dir)

    def to_page(self, result: PageResult) -> Page:
        return Page[self.dto_cls](
            items=to_dtos(result.items, self.dto_cls),
            total=result.total,
            page=result.page,
            size=result.size,
            pages=result.pages,
        )

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def create(self, dto: DTO) -> DTOType:
        fields = to_entity_fields(dto, self.model)
        data = await validate_write(self.db, self.model, self.rules, fields, business_check=self.business_check)
        data = await self.prepare_create(data, dto)

        entity = await self.repo.create(**data)
        await self.db.commit()
        self.after_write(entity, CREATE)

        logger.info("service.create.success", extra={"entity": self.kind, "id": entity.id})
        return to_dto(entity, self.dto_cls)

    async def update(self, entity_id: int, dto: DTO) -> DTOType:
        """Full update: every declared field of `dto` replaces the stored value."""
        entity = await self._get_or_raise(entity_id)

        fields = to_entity_fields(dto, self.model)
        data = await validate_write(
            self.db, self.model, self.update_rules, fields,
            entity_id=entity_id, business_check=self.business_check,
        )
        data = await self.prepare_update(entity, data, dto)

        entity = await self.repo.update(entity, **data)
        await self.db.commit()
        self.after_write(entity, UPDATE)

        logger.info("service.update.success", extra={"entity": self.kind, "id": entity_id})
        return to_dto(entity, self.dto_cls)

    async def delete(self, entity_id: int) -> None:
        """
        Delete a record.

        Raises:
            NotFoundError: no record with this id.
            InvariantViolationError: a delete guard found dependent rows; nothing is deleted.
        """
        entity = await self._get_or_raise(entity_id)

        for guard in self.delete_guards:
            count = await self.repo.count_related(guard.child_model, guard.foreign_key, entity_id)
            if count:
                logger.info(
                    "repo.delete.blocked",
                    extra={"entity": self.kind, "id": entity_id, "children": guard.child_label, "count": count},
                )
                raise InvariantViolationError(
                    f"Cannot delete {self.kind.lower()} with ID {entity_id} "
                    f"because it has {count} associated {guard.child_label}",
                )

        await self.repo.delete(entity)
        await self.db.commit()
        logger.info("service.delete.success", extra={"entity": self.kind, "id": entity_id})

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def _get_or_raise(self, entity_id: int):
        return await self.repo.get_by_id_or_raise(entity_id, self.kind)

    async def get(self, entity_id: int) -> DTOType:
        return to_dto(await self._get_or_raise(entity_id), self.dto_cls)

    async def get_with_relations(self, entity_id: int) -> DTO:
        """One-level expansion; kinds without relations return the plain DTO."""
        if self.relations_dto_cls is None or not self.repo.relations:
            return await self.get(entity_id)
        entity = await self.repo.get_with_relations(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind} not found with ID: {entity_id}")
        return to_dto(entity, self.relations_dto_cls)

    async def get_all(self, page: PageRequest) -> Page:
        return self.to_page(await self.repo.paginate(page))

    async def search(self, query: str, page: PageRequest) -> Page:
        return self.to_page(await self.repo.search(query, page))

    async def count(self) -> int:
        return await self.repo.count()

    async def exists(self, entity_id: int) -> bool:
        return await self.repo.exists(entity_id)

"""
Base repository class providing common database operations.

Every entity repository inherits from `BaseRepository` and adds its own narrow
filtered queries. Repositories never commit: writes are flushed inside a
SAVEPOINT (`db_error_handler`) so that a constraint violation is mapped to a
domain error without poisoning the caller's transaction. Committing is the
service's job.

Listing queries share one shape: a `PageRequest` (0-based page, size, sort
field, direction) in, a `PageResult` (items plus totals) out.
"""

import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Table, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from raas.database.base import Base
from raas.exceptions.base import InvalidFieldError, NotFoundError, RepositoryError
from raas.exceptions.mapper import db_error_handler
from raas.mapping import column_attributes
from raas.validators.exception_validators import find_unknown_model_kwargs

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    """`budgetYear` -> `budget_year`; snake_case input is returned unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass
class PageRequest:
    page: int = 0
    size: int = 20
    sort_by: str | None = None
    sort_dir: str = "asc"

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class PageResult(Generic[ModelType]):
    items: list[ModelType] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 0

    @property
    def pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD, listing and count operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.

    Class attributes overridden by subclasses:
        search_fields: string attributes matched by the free-text `search`.
        relations: relationship attributes eagerly loaded by `get_with_relations`.
    """

    search_fields: tuple[str, ...] = ()
    relations: tuple[str, ...] = ()

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Insert an entity and flush it so the generated id is available.

        Logging:
        - DEBUG: start event with the provided keys (never the values).
        - INFO: unknown fields, success with id and duration_ms.

        Raises:
            InvalidFieldError: a keyword is not a mapped attribute.
            DuplicateValueError / ReferenceNotFoundError / MissingFieldError:
                the database refused the row (mapped from IntegrityError).
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(kwargs)},
        )

        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        start = time.perf_counter()
        entity = self.model(**kwargs)
        async with db_error_handler(self.db, self.model):
            self.db.add(entity)
            await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read Operations (Single Entity)
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
            entity = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_name} by ID {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e

        logger.debug(f"Retrieved {self.model_name} by ID: {entity_id}")
        return entity

    async def get_by_id_or_raise(self, entity_id: int, kind: str | None = None) -> ModelType:
        """
        Get an entity by its ID or raise NotFoundError.

        The message reads `"<kind> not found with ID: <id>"`; `kind` defaults to the model name.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{kind or self.model_name} not found with ID: {entity_id}")
        return entity

    async def get_with_relations(self, entity_id: int) -> ModelType | None:
        """
        Load an entity with every relationship in `self.relations` populated.

        `populate_existing` refreshes an instance already sitting in the identity
        map, so collections changed earlier in the session are reloaded.
        """
        query = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*(selectinload(getattr(self.model, name)) for name in self.relations))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_name} with relations {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e
        return result.scalar_one_or_none()

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single entity by any column attribute.

        Raises:
            InvalidFieldError: the attribute is not a column of the model.
        """
        if field not in column_attributes(self.model):
            raise InvalidFieldError(f"{self.model_name} has no field '{field}'", fields=[field])

        try:
            result = await self.db.execute(
                select(self.model).where(getattr(self.model, field) == value).limit(1)
            )
        except SQLAlchemyError as e:
            logger.error(f"Error finding {self.model_name} by {field}={value}: {e}")
            raise RepositoryError(f"Failed to find {self.model_name}") from e
        return result.scalar_one_or_none()

    # =================================================================================================================
    # Read Operations (Multiple Entities)
    # =================================================================================================================

    def _order_clause(self, page: PageRequest):
        """
        Resolve the requested sort field (camelCase or snake_case) to a column.
        Unknown fields fall back to id ordering with a warning.
        """
        column = self.model.id
        if page.sort_by:
            name = to_snake(page.sort_by)
            if name in column_attributes(self.model):
                column = getattr(self.model, name)
            else:
                logger.warning(
                    "repo.list.invalid_sort",
                    extra={"model": self.model_name, "sort_by": page.sort_by},
                )
        if (page.sort_dir or "asc").lower() == "desc":
            return column.desc()
        return column.asc()

    async def paginate(self, page: PageRequest, *criteria) -> PageResult[ModelType]:
        """
        One page of entities matching all `criteria` (SQLAlchemy boolean clauses).

        Results are ordered by the requested field, then by id, so that pages are stable.
        """
        try:
            total = await self.db.scalar(
                select(func.count()).select_from(self.model).where(*criteria)
            ) or 0

            query = (
                select(self.model)
                .where(*criteria)
                .order_by(self._order_clause(page), self.model.id)
                .offset(page.offset)
                .limit(page.size)
            )
            result = await self.db.execute(query)
            items = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing {self.model_name}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name} entities") from e

        logger.debug(f"Retrieved {len(items)} of {total} {self.model_name} entities (page {page.page})")
        return PageResult(items=items, total=total, page=page.page, size=page.size)

    async def find_all(self, *criteria) -> list[ModelType]:
        """Every entity matching `criteria`, ordered by id. Meant for small result sets."""
        try:
            result = await self.db.execute(select(self.model).where(*criteria).order_by(self.model.id))
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_name}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name} entities") from e
        return list(result.scalars().all())

    async def find_one(self, *criteria) -> ModelType | None:
        """First entity (lowest id) matching `criteria`, or None."""
        try:
            result = await self.db.execute(select(self.model).where(*criteria).order_by(self.model.id).limit(1))
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_name}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e
        return result.scalar_one_or_none()

    def search_clause(self, term: str):
        """
        Case-insensitive substring match over `search_fields`.

        `%` and `_` in the term are matched literally (`autoescape`).
        """
        needle = term.strip().lower()
        return or_(
            *(func.lower(getattr(self.model, name)).contains(needle, autoescape=True) for name in self.search_fields)
        )

    async def search(self, term: str, page: PageRequest) -> PageResult[ModelType]:
        """
        Free-text search; a blank term lists everything.

        `lower(col) LIKE lower('%term%')` rather than ILIKE so SQLite and
        Postgres behave the same.
        """
        if not term or not term.strip() or not self.search_fields:
            return await self.paginate(page)
        return await self.paginate(page, self.search_clause(term))

    # =================================================================================================================
    # Update Operations
    # =================================================================================================================

    async def update(self, entity: ModelType, **kwargs) -> ModelType:
        """
        Apply `kwargs` to a loaded entity and flush.

        Every given key is written, None included: updates are full replacements
        and the caller has already validated the payload.
        """
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model):
            for key, value in kwargs.items():
                setattr(entity, key, value)
            await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "repo.update.success",
            extra={
                "model": self.model_name,
                "operation": "update",
                "id": entity.id,
                "updated_keys": sorted(kwargs),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Delete Operations
    # =================================================================================================================

    async def delete(self, entity: ModelType) -> None:
        entity_id = entity.id
        async with db_error_handler(self.db, self.model):
            await self.db.delete(entity)
            await self.db.flush()
        logger.info("repo.delete.success", extra={"model": self.model_name, "operation": "delete", "id": entity_id})

    # =================================================================================================================
    # Validation / Existence Checks
    # =================================================================================================================

    async def exists(self, entity_id: int) -> bool:
        try:
            found = await self.db.scalar(select(self.model.id).where(self.model.id == entity_id))
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_name} {entity_id}: {e}")
            raise RepositoryError(f"Failed to check {self.model_name} existence") from e
        return found is not None

    async def exists_by(self, **values: Any) -> bool:
        """True when at least one row holds all the given attribute values."""
        conditions = [getattr(self.model, name) == value for name, value in values.items()]
        found = await self.db.scalar(select(self.model.id).where(*conditions).limit(1))
        return found is not None

    # =================================================================================================================
    # Aggregation / Count Operations
    # =================================================================================================================

    async def count(self, *criteria, **filters: Any) -> int:
        """
        Count entities matching `criteria` and equality `filters`.

        Filters naming a missing attribute, or holding None, are skipped.
        """
        query = select(func.count()).select_from(self.model).where(*criteria)
        for name, value in filters.items():
            if hasattr(self.model, name) and value is not None:
                query = query.where(getattr(self.model, name) == value)

        try:
            count = await self.db.scalar(query) or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_name}: {e}")
            raise RepositoryError(f"Failed to count {self.model_name} entities") from e

        logger.debug(f"Counted {count} {self.model_name} entities")
        return count

    async def count_related(self, child_model, foreign_key: str, parent_id: int) -> int:
        """
        Number of `child_model` rows whose `foreign_key` points at `parent_id`.

        `child_model` is a mapped class (attribute name) or an association `Table` (column name).
        """
        if isinstance(child_model, Table):
            column = child_model.c[foreign_key]
        else:
            column = getattr(child_model, foreign_key)
        return await self.db.scalar(
            select(func.count()).select_from(child_model).where(column == parent_id)
        ) or 0


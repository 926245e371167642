"""
Repositories for the core referentials (currencies, approval and realization vocabularies).
"""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from raas.exceptions.base import InvalidFieldError
from raas.models.core import (
    ApprovalStatus,
    Currency,
    RealizationDirector,
    RealizationNature,
    RealizationStatus,
)
from .base_repository import BaseRepository, PageRequest, PageResult
from .catalog import CURRENCY_GROUPS

logger = logging.getLogger(__name__)

_DESIGNATIONS = ("designation_fr", "designation_en", "designation_ar")


class CurrencyRepository(BaseRepository[Currency]):
    search_fields = _DESIGNATIONS + ("code_lt", "code_ar")

    def __init__(self, db: AsyncSession):
        super().__init__(Currency, db)

    async def get_by_code(self, code: str) -> Currency | None:
        """Lookup by ISO code, ignoring case and surrounding blanks."""
        return await self.find_one(func.upper(Currency.code_lt) == code.strip().upper())

    async def by_group(self, group: str, page: PageRequest) -> PageResult[Currency]:
        """Currencies whose code belongs to a named group (`major`, `regional`)."""
        codes = CURRENCY_GROUPS.get(group.lower())
        if codes is None:
            raise InvalidFieldError(
                f"Unknown currency group '{group}'. Expected one of: {', '.join(CURRENCY_GROUPS)}",
                fields=["group"],
            )
        return await self.paginate(page, func.upper(Currency.code_lt).in_(codes))


class ApprovalStatusRepository(BaseRepository[ApprovalStatus]):
    search_fields = _DESIGNATIONS

    def __init__(self, db: AsyncSession):
        super().__init__(ApprovalStatus, db)


class RealizationDirectorRepository(BaseRepository[RealizationDirector]):
    search_fields = _DESIGNATIONS

    def __init__(self, db: AsyncSession):
        super().__init__(RealizationDirector, db)


class RealizationNatureRepository(BaseRepository[RealizationNature]):
    search_fields = _DESIGNATIONS

    def __init__(self, db: AsyncSession):
        super().__init__(RealizationNature, db)


class RealizationStatusRepository(BaseRepository[RealizationStatus]):
    search_fields = _DESIGNATIONS

    def __init__(self, db: AsyncSession):
        super().__init__(RealizationStatus, db)

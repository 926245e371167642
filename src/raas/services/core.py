from raas.exceptions.base import NotFoundError
from raas.models import (
    ApprovalStatus,
    Currency,
    RealizationDirector,
    RealizationNature,
    RealizationStatus,
)
from raas.repositories.base_repository import PageRequest
from raas.repositories.core import (
    ApprovalStatusRepository,
    CurrencyRepository,
    RealizationDirectorRepository,
    RealizationNatureRepository,
    RealizationStatusRepository,
)
from raas.schemas import (
    ApprovalStatusDTO,
    CurrencyDTO,
    Page,
    RealizationDirectorDTO,
    RealizationNatureDTO,
    RealizationStatusDTO,
)
from raas.validators import rules as entity_rules
from .base import BaseService


class CurrencyService(BaseService[Currency, CurrencyDTO]):
    model = Currency
    rules = entity_rules.CURRENCY
    dto_cls = CurrencyDTO
    repository_cls = CurrencyRepository

    async def get_by_code(self, code: str) -> CurrencyDTO:
        currency = await self.repo.get_by_code(code)
        if currency is None:
            raise NotFoundError(f"{self.kind} not found with code: {code}", fields=["code_lt"])
        return CurrencyDTO.model_validate(currency)

    async def by_group(self, group: str, page: PageRequest) -> Page:
        return self.to_page(await self.repo.by_group(group, page))


class ApprovalStatusService(BaseService[ApprovalStatus, ApprovalStatusDTO]):
    model = ApprovalStatus
    rules = entity_rules.APPROVAL_STATUS
    dto_cls = ApprovalStatusDTO
    repository_cls = ApprovalStatusRepository


class RealizationDirectorService(BaseService[RealizationDirector, RealizationDirectorDTO]):
    model = RealizationDirector
    rules = entity_rules.REALIZATION_DIRECTOR
    dto_cls = RealizationDirectorDTO
    repository_cls = RealizationDirectorRepository


class RealizationNatureService(BaseService[RealizationNature, RealizationNatureDTO]):
    model = RealizationNature
    rules = entity_rules.REALIZATION_NATURE
    dto_cls = RealizationNatureDTO
    repository_cls = RealizationNatureRepository


class RealizationStatusService(BaseService[RealizationStatus, RealizationStatusDTO]):
    model = RealizationStatus
    rules = entity_rules.REALIZATION_STATUS
    dto_cls = RealizationStatusDTO
    repository_cls = RealizationStatusRepository

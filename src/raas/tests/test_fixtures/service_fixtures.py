"""Service fixtures, all bound to the transactional `db_session` from conftest.py."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from raas.security.hashing import BcryptPasswordHasher
from raas.services.collaborators import DocumentService, StructureService
from raas.services.core import CurrencyService
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
from raas.services.security import (
    AuthorityService,
    GroupService,
    PermissionService,
    RoleService,
    UserService,
)


@pytest.fixture
def currency_service(db_session: AsyncSession) -> CurrencyService:
    return CurrencyService(db_session)


@pytest.fixture
def structure_service(db_session: AsyncSession) -> StructureService:
    return StructureService(db_session)


@pytest.fixture
def document_service(db_session: AsyncSession) -> DocumentService:
    return DocumentService(db_session)


@pytest.fixture
def budget_type_service(db_session: AsyncSession) -> BudgetTypeService:
    return BudgetTypeService(db_session)


@pytest.fixture
def item_status_service(db_session: AsyncSession) -> ItemStatusService:
    return ItemStatusService(db_session)


@pytest.fixture
def financial_operation_service(db_session: AsyncSession) -> FinancialOperationService:
    return FinancialOperationService(db_session)


@pytest.fixture
def domain_service(db_session: AsyncSession) -> DomainService:
    return DomainService(db_session)


@pytest.fixture
def rubric_service(db_session: AsyncSession) -> RubricService:
    return RubricService(db_session)


@pytest.fixture
def item_service(db_session: AsyncSession) -> ItemService:
    return ItemService(db_session)


@pytest.fixture
def budget_modification_service(db_session: AsyncSession) -> BudgetModificationService:
    return BudgetModificationService(db_session)


@pytest.fixture
def planned_item_service(db_session: AsyncSession) -> PlannedItemService:
    return PlannedItemService(db_session)


@pytest.fixture
def item_distribution_service(db_session: AsyncSession) -> ItemDistributionService:
    return ItemDistributionService(db_session)


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    """UserService with a cheap bcrypt cost so hashing does not dominate test time."""
    return UserService(db_session, hasher=BcryptPasswordHasher(rounds=4))


@pytest.fixture
def role_service(db_session: AsyncSession) -> RoleService:
    return RoleService(db_session)


@pytest.fixture
def group_service(db_session: AsyncSession) -> GroupService:
    return GroupService(db_session)


@pytest.fixture
def permission_service(db_session: AsyncSession) -> PermissionService:
    return PermissionService(db_session)


@pytest.fixture
def authority_service(db_session: AsyncSession) -> AuthorityService:
    return AuthorityService(db_session)

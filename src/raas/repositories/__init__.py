from .base_repository import BaseRepository, PageRequest, PageResult
from .collaborators import DocumentRepository, StructureRepository
from .core import (
    ApprovalStatusRepository,
    CurrencyRepository,
    RealizationDirectorRepository,
    RealizationNatureRepository,
    RealizationStatusRepository,
)
from .plan import (
    BudgetModificationRepository,
    BudgetTypeRepository,
    DomainRepository,
    FinancialOperationRepository,
    ItemDistributionRepository,
    ItemRepository,
    ItemStatusRepository,
    PlannedItemRepository,
    RubricRepository,
)
from .security import (
    AuthorityRepository,
    GroupRepository,
    PermissionRepository,
    RoleRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository", "PageRequest", "PageResult",
    "DocumentRepository", "StructureRepository",
    "ApprovalStatusRepository", "CurrencyRepository", "RealizationDirectorRepository",
    "RealizationNatureRepository", "RealizationStatusRepository",
    "BudgetModificationRepository", "BudgetTypeRepository", "DomainRepository",
    "FinancialOperationRepository", "ItemDistributionRepository", "ItemRepository",
    "ItemStatusRepository", "PlannedItemRepository", "RubricRepository",
    "AuthorityRepository", "GroupRepository", "PermissionRepository", "RoleRepository",
    "UserRepository",
]

from .base import BaseService, DeleteGuard
from .collaborators import DocumentService, StructureService
from .core import (
    ApprovalStatusService,
    CurrencyService,
    RealizationDirectorService,
    RealizationNatureService,
    RealizationStatusService,
)
from .plan import (
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
from .security import (
    AuthorityService,
    GroupService,
    PermissionService,
    RoleService,
    UserService,
)

__all__ = [
    "BaseService", "DeleteGuard",
    "DocumentService", "StructureService",
    "ApprovalStatusService", "CurrencyService", "RealizationDirectorService",
    "RealizationNatureService", "RealizationStatusService",
    "BudgetModificationService", "BudgetTypeService", "DomainService",
    "FinancialOperationService", "ItemDistributionService", "ItemService",
    "ItemStatusService", "PlannedItemService", "RubricService",
    "AuthorityService", "GroupService", "PermissionService", "RoleService", "UserService",
]

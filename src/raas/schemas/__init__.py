from .common import DTO, CountResponse, ExistsResponse, Page, QuantityResponse
from .core import (
    ApprovalStatusDTO,
    CurrencyDTO,
    RealizationDirectorDTO,
    RealizationNatureDTO,
    RealizationStatusDTO,
)
from .collaborators import DocumentDTO, StructureDTO
from .plan import (
    BudgetModificationDTO,
    BudgetModificationWithRelations,
    BudgetTypeDTO,
    BudgetTypeWithRelations,
    DomainDTO,
    DomainWithRelations,
    FinancialOperationDTO,
    FinancialOperationWithRelations,
    ItemDistributionDTO,
    ItemDistributionWithRelations,
    ItemDTO,
    ItemStatusDTO,
    ItemWithRelations,
    PlannedItemDTO,
    PlannedItemWithRelations,
    RubricDTO,
    RubricWithRelations,
)
from .security import (
    AuthorityDTO,
    AuthorityWithRelations,
    GroupDTO,
    GroupWithRelations,
    PermissionDTO,
    PermissionWithRelations,
    RoleDTO,
    RoleWithRelations,
    UserDTO,
    UserWithRelations,
    UserWriteDTO,
)

__all__ = [
    "DTO", "CountResponse", "ExistsResponse", "Page", "QuantityResponse",
    "ApprovalStatusDTO", "CurrencyDTO", "RealizationDirectorDTO", "RealizationNatureDTO",
    "RealizationStatusDTO", "DocumentDTO", "StructureDTO",
    "BudgetModificationDTO", "BudgetModificationWithRelations", "BudgetTypeDTO",
    "BudgetTypeWithRelations", "DomainDTO", "DomainWithRelations", "FinancialOperationDTO",
    "FinancialOperationWithRelations", "ItemDistributionDTO", "ItemDistributionWithRelations",
    "ItemDTO", "ItemStatusDTO", "ItemWithRelations", "PlannedItemDTO", "PlannedItemWithRelations",
    "RubricDTO", "RubricWithRelations",
    "AuthorityDTO", "AuthorityWithRelations", "GroupDTO", "GroupWithRelations", "PermissionDTO",
    "PermissionWithRelations", "RoleDTO", "RoleWithRelations", "UserDTO", "UserWithRelations",
    "UserWriteDTO",
]

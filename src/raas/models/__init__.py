"""
Single import point for every ORM model; importing this package registers all
tables on `Base.metadata`.

    from raas.models import Domain, Rubric, Item
"""

from .core import ApprovalStatus, Currency, RealizationDirector, RealizationNature, RealizationStatus
from .collaborators import Document, Structure
from .plan import (
    BudgetModification,
    BudgetType,
    Domain,
    FinancialOperation,
    Item,
    ItemDistribution,
    ItemStatus,
    PlannedItem,
    Rubric,
)
from .security import Authority, Group, Permission, Role, User

__all__ = [
    "ApprovalStatus",
    "Currency",
    "RealizationDirector",
    "RealizationNature",
    "RealizationStatus",
    "Document",
    "Structure",
    "BudgetModification",
    "BudgetType",
    "Domain",
    "FinancialOperation",
    "Item",
    "ItemDistribution",
    "ItemStatus",
    "PlannedItem",
    "Rubric",
    "Authority",
    "Group",
    "Permission",
    "Role",
    "User",
]

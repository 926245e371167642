"""
Declared write rules for every entity kind.

Lengths and unique sets mirror the table definitions in `raas.models`; the
constraint coverage tests compare the two so they cannot drift apart.
"""

from raas.models import (
    Authority,
    BudgetModification,
    BudgetType,
    Document,
    Domain,
    FinancialOperation,
    Item,
    ItemStatus,
    PlannedItem,
    Rubric,
    Structure,
)
from .engine import EntityRules, FieldRule, ReferenceRule, UniqueRule


def _designations(length: int = 200, *, all_required: bool = False) -> tuple[FieldRule, ...]:
    return (
        FieldRule("designation_ar", "Arabic designation", required=all_required, max_length=length),
        FieldRule("designation_en", "English designation", required=all_required, max_length=length),
        FieldRule("designation_fr", "French designation", required=True, max_length=length),
    )


_UNIQUE_FR = (UniqueRule(("designation_fr",)),)

# ---------------------------------------------------------------------------
# core
# ---------------------------------------------------------------------------

CURRENCY = EntityRules(
    kind="Currency",
    fields=_designations(50, all_required=True) + (
        FieldRule("code_ar", "Arabic code", required=True, max_length=20),
        FieldRule("code_lt", "Latin code", required=True, max_length=20),
    ),
    unique=(
        UniqueRule(("designation_ar",)),
        UniqueRule(("designation_en",)),
        UniqueRule(("designation_fr",)),
        UniqueRule(("code_ar",)),
        UniqueRule(("code_lt",)),
    ),
)

APPROVAL_STATUS = EntityRules(kind="Approval status", fields=_designations(), unique=_UNIQUE_FR)
REALIZATION_DIRECTOR = EntityRules(kind="Realization director", fields=_designations(300), unique=_UNIQUE_FR)
REALIZATION_NATURE = EntityRules(kind="Realization nature", fields=_designations(), unique=_UNIQUE_FR)
REALIZATION_STATUS = EntityRules(kind="Realization status", fields=_designations(), unique=_UNIQUE_FR)

# ---------------------------------------------------------------------------
# collaborators
# ---------------------------------------------------------------------------

STRUCTURE = EntityRules(
    kind="Structure",
    fields=_designations() + (FieldRule("acronym_fr", "French acronym", max_length=20),),
    unique=_UNIQUE_FR,
)

DOCUMENT = EntityRules(
    kind="Document",
    fields=(FieldRule("reference", "Reference", required=True, max_length=100),),
    unique=(UniqueRule(("reference",)),),
)

# ---------------------------------------------------------------------------
# plan
# ---------------------------------------------------------------------------

BUDGET_TYPE = EntityRules(
    kind="Budget type",
    fields=_designations() + (
        FieldRule("acronym_ar", "Arabic acronym", max_length=20),
        FieldRule("acronym_en", "English acronym", max_length=20),
        FieldRule("acronym_fr", "French acronym", required=True, max_length=20),
    ),
    unique=(UniqueRule(("designation_fr",)), UniqueRule(("acronym_fr",))),
)

ITEM_STATUS = EntityRules(kind="Item status", fields=_designations(), unique=_UNIQUE_FR)

FINANCIAL_OPERATION = EntityRules(
    kind="Financial operation",
    fields=(
        FieldRule("operation", "Operation", required=True, max_length=200),
        FieldRule("budget_year", "Budget year", required=True),
        FieldRule("budget_type_id", "Budget type", required=True),
    ),
    unique=(UniqueRule(("operation",)),),
    references=(ReferenceRule("budget_type_id", BudgetType, "Budget type"),),
)

DOMAIN = EntityRules(kind="Domain", fields=_designations(), unique=_UNIQUE_FR)

RUBRIC = EntityRules(
    kind="Rubric",
    fields=_designations() + (FieldRule("domain_id", "Domain", required=True),),
    unique=_UNIQUE_FR,
    references=(ReferenceRule("domain_id", Domain, "Domain"),),
)

ITEM = EntityRules(
    kind="Item",
    fields=_designations() + (FieldRule("rubric_id", "Rubric", required=True),),
    references=(ReferenceRule("rubric_id", Rubric, "Rubric"),),
)

BUDGET_MODIFICATION = EntityRules(
    kind="Budget modification",
    fields=(
        FieldRule("object", "Object", max_length=200),
        FieldRule("description", "Description", max_length=500),
        FieldRule("approval_date", "Approval date"),
        FieldRule("demande_id", "Demande document", required=True),
        FieldRule("response_id", "Response document", required=True),
    ),
    unique=(UniqueRule(("approval_date", "demande_id")),),
    references=(
        ReferenceRule("demande_id", Document, "Demande document"),
        ReferenceRule("response_id", Document, "Response document"),
    ),
)

PLANNED_ITEM = EntityRules(
    kind="Planned item",
    fields=(
        FieldRule("designation", "Designation", required=True, max_length=200),
        FieldRule("unitair_cost", "Unit cost"),
        FieldRule("planed_quantity", "Planned quantity", required=True),
        FieldRule("allocated_amount", "Allocated amount"),
        FieldRule("item_status_id", "Item status", required=True),
        FieldRule("item_id", "Item", required=True),
        FieldRule("financial_operation_id", "Financial operation", required=True),
        FieldRule("budget_modification_id", "Budget modification"),
    ),
    references=(
        ReferenceRule("item_status_id", ItemStatus, "Item status"),
        ReferenceRule("item_id", Item, "Item"),
        ReferenceRule("financial_operation_id", FinancialOperation, "Financial operation"),
        ReferenceRule("budget_modification_id", BudgetModification, "Budget modification"),
    ),
)

ITEM_DISTRIBUTION = EntityRules(
    kind="Item distribution",
    fields=(
        FieldRule("quantity", "Quantity", required=True),
        FieldRule("planned_item_id", "Planned item", required=True),
        FieldRule("structure_id", "Structure", required=True),
    ),
    references=(
        ReferenceRule("planned_item_id", PlannedItem, "Planned item"),
        ReferenceRule("structure_id", Structure, "Structure"),
    ),
)

# ---------------------------------------------------------------------------
# security
# ---------------------------------------------------------------------------

_NAME_AND_DESCRIPTION = (
    FieldRule("name", "Name", required=True, max_length=50),
    FieldRule("description", "Description", max_length=200),
)

GROUP = EntityRules(kind="Group", fields=_NAME_AND_DESCRIPTION, unique=(UniqueRule(("name",)),))
ROLE = EntityRules(kind="Role", fields=_NAME_AND_DESCRIPTION, unique=(UniqueRule(("name",)),))
AUTHORITY = EntityRules(kind="Authority", fields=_NAME_AND_DESCRIPTION, unique=(UniqueRule(("name",)),))

PERMISSION = EntityRules(
    kind="Permission",
    fields=(
        FieldRule("name", "Name", required=True, max_length=100),
        FieldRule("description", "Description", max_length=200),
        FieldRule("authority_id", "Authority", required=True),
    ),
    unique=(UniqueRule(("name",)),),
    references=(ReferenceRule("authority_id", Authority, "Authority"),),
)

_USER_FIELDS = (
    FieldRule("username", "Username", required=True, max_length=20),
    FieldRule("email", "Email", required=True, max_length=100),
)
# emails are looked up case-insensitively, so they must be unique that way too
_USER_UNIQUE = (UniqueRule(("username",)), UniqueRule(("email",), ignore_case=True))

USER = EntityRules(
    kind="User",
    fields=_USER_FIELDS + (FieldRule("password", "Password", required=True),),
    unique=_USER_UNIQUE,
)

# update keeps the stored hash when no new password is sent
USER_UPDATE = EntityRules(
    kind="User",
    fields=_USER_FIELDS + (FieldRule("password", "Password"),),
    unique=_USER_UNIQUE,
)

# Rules per model, for code that walks every entity (constraint coverage tests, admin tooling)
RULES_BY_MODEL = {
    "Currency": CURRENCY,
    "ApprovalStatus": APPROVAL_STATUS,
    "RealizationDirector": REALIZATION_DIRECTOR,
    "RealizationNature": REALIZATION_NATURE,
    "RealizationStatus": REALIZATION_STATUS,
    "Structure": STRUCTURE,
    "Document": DOCUMENT,
    "BudgetType": BUDGET_TYPE,
    "ItemStatus": ITEM_STATUS,
    "FinancialOperation": FINANCIAL_OPERATION,
    "Domain": DOMAIN,
    "Rubric": RUBRIC,
    "Item": ITEM,
    "BudgetModification": BUDGET_MODIFICATION,
    "PlannedItem": PLANNED_ITEM,
    "ItemDistribution": ITEM_DISTRIBUTION,
    "Group": GROUP,
    "Role": ROLE,
    "Authority": AUTHORITY,
    "Permission": PERMISSION,
    "User": USER,
}

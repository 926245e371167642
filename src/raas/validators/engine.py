"""
Write-validation pipeline shared by every service.

Each entity kind declares its rules once (`EntityRules`): which fields are
required, their length limits, which field sets must be unique and which
fields reference other tables. `validate_write` applies them in a fixed order:

    1. required fields        -> MissingFieldError
    2. business rules         -> FieldTooLongError / InvalidFormatError / InvariantViolationError
    3. uniqueness             -> DuplicateValueError
    4. referential integrity  -> ReferenceNotFoundError

Required checks run first so that invalid input never costs a query. Create and
update share the same pipeline; update only adds the "exclude this id" clause to
the uniqueness lookups so that saving a record unchanged does not collide with
itself.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from raas.exceptions.base import (
    DuplicateValueError,
    FieldTooLongError,
    MissingFieldError,
    ReferenceNotFoundError,
)
from .exception_validators import exists_with_values
from .text import is_blank

logger = logging.getLogger(__name__)

CREATE = "create"
UPDATE = "update"


@dataclass(frozen=True)
class FieldRule:
    name: str
    label: str
    required: bool = False
    max_length: int | None = None


@dataclass(frozen=True)
class UniqueRule:
    fields: tuple[str, ...]
    ignore_case: bool = False


@dataclass(frozen=True)
class ReferenceRule:
    field: str
    target: type
    label: str


@dataclass(frozen=True)
class EntityRules:
    kind: str
    fields: tuple[FieldRule, ...]
    unique: tuple[UniqueRule, ...] = ()
    references: tuple[ReferenceRule, ...] = ()
    labels: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "labels", {f.name: f.label for f in self.fields})

    def label(self, name: str) -> str:
        return self.labels.get(name, name)


BusinessCheck = Callable[[dict[str, Any], Any, str], Awaitable[None]]


def normalize_payload(data: dict[str, Any]) -> dict[str, Any]:
    """Trim strings; blank strings become None so optional fields are stored as NULL."""
    out = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip() or None
        out[key] = value
    return out


def check_required(rules: EntityRules, data: dict[str, Any], operation: str) -> None:
    for rule in rules.fields:
        if rule.required and is_blank(data.get(rule.name)):
            logger.info(
                "validation.missing_field",
                extra={"entity": rules.kind, "field": rule.name, "operation": operation},
            )
            raise MissingFieldError(f"{rule.label} is required for {operation}", field=rule.name)


def check_lengths(rules: EntityRules, data: dict[str, Any], operation: str) -> None:
    for rule in rules.fields:
        value = data.get(rule.name)
        if rule.max_length is None or not isinstance(value, str):
            continue
        if len(value) > rule.max_length:
            logger.info(
                "validation.field_too_long",
                extra={"entity": rules.kind, "field": rule.name, "operation": operation,
                       "length": len(value), "max_length": rule.max_length},
            )
            raise FieldTooLongError(
                f"{rule.label} cannot exceed {rule.max_length} characters for {operation}",
                field=rule.name, max_length=rule.max_length,
            )


def _quote(value: Any) -> str:
    return f"'{value}'"


async def check_unique(db: AsyncSession, model, rules: EntityRules, data: dict[str, Any],
                       entity_id: Any = None) -> None:
    for rule in rules.unique:
        values = {name: data.get(name) for name in rule.fields}
        # SQL unique constraints never match NULLs
        if any(v is None for v in values.values()):
            continue
        if not await exists_with_values(db, model, values, exclude_id=entity_id, ignore_case=rule.ignore_case):
            continue

        described = " and ".join(f"{rules.label(name)} {_quote(value)}" for name, value in values.items())
        prefix = f"Another {rules.kind}" if entity_id is not None else rules.kind
        logger.info(
            "validation.duplicate",
            extra={"entity": rules.kind, "fields": list(rule.fields), "entity_id": entity_id},
        )
        value = next(iter(values.values())) if len(values) == 1 else ", ".join(str(v) for v in values.values())
        raise DuplicateValueError(
            f"{prefix} with {described} already exists",
            fields=list(rule.fields), value=value,
        )


async def check_references(db: AsyncSession, rules: EntityRules, data: dict[str, Any]) -> None:
    for rule in rules.references:
        target_id = data.get(rule.field)
        if target_id is None:
            continue
        if await db.get(rule.target, target_id) is None:
            logger.info(
                "validation.reference_not_found",
                extra={"entity": rules.kind, "field": rule.field,
                       "target": rule.target.__name__, "target_id": target_id},
            )
            raise ReferenceNotFoundError(
                f"{rule.label} not found with ID: {target_id}",
                field=rule.field, target=rule.target.__name__, target_id=target_id,
            )


async def validate_write(
    db: AsyncSession,
    model,
    rules: EntityRules,
    data: dict[str, Any],
    *,
    entity_id: Any = None,
    business_check: BusinessCheck | None = None,
) -> dict[str, Any]:
    """
    Run the full pipeline for a create (`entity_id=None`) or an update.

    Returns the normalized payload that should be written. Raises on the first
    failing rule; nothing is written by this function.
    """
    operation = UPDATE if entity_id is not None else CREATE
    data = normalize_payload(data)

    check_required(rules, data, operation)

    check_lengths(rules, data, operation)
    if business_check is not None:
        await business_check(data, entity_id, operation)

    await check_unique(db, model, rules, data, entity_id)
    await check_references(db, rules, data)

    logger.debug("validation.passed", extra={"entity": rules.kind, "operation": operation})
    return data

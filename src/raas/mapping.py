"""
Entity <-> DTO conversion.

DTOs are built straight from ORM instances (`from_attributes=True`), and the
reverse direction only ever produces a plain dict of column attributes so that
services decide what is written. Relationship attributes and the id never travel
from a DTO into an entity.
"""

from typing import Any, TypeVar

from sqlalchemy import inspect as sa_inspect

from raas.schemas.common import DTO

DTOType = TypeVar("DTOType", bound=DTO)


def to_dto(entity, dto_cls: type[DTOType]) -> DTOType | None:
    """Build `dto_cls` from an ORM instance; None stays None."""
    if entity is None:
        return None
    return dto_cls.model_validate(entity)


def to_dtos(entities, dto_cls: type[DTOType]) -> list[DTOType]:
    return [dto_cls.model_validate(e) for e in entities]


def column_attributes(model) -> set[str]:
    """Names of the mapped column attributes of `model` (relationships excluded)."""
    return {attr.key for attr in sa_inspect(model).column_attrs}


def to_entity_fields(dto: DTO, model=None, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """
    Field values of `dto` keyed by attribute name, ready for `Model(**fields)`.

    Every declared field is returned, including the ones left at None, because an
    update replaces the whole record. When `model` is given, keys that are not
    column attributes of it are dropped.
    """
    skip = {"id"} | (exclude or set())
    data = dto.model_dump(exclude=skip)
    if model is not None:
        allowed = column_attributes(model)
        data = {k: v for k, v in data.items() if k in allowed}
    return data


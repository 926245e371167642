from typing import Any

from sqlalchemy import UniqueConstraint, and_, func, inspect as sa_inspect, select


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the kwarg keys that are not mapped attributes of `model`.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate
    """
    mapper = sa_inspect(model)
    # mapper.attrs covers columns and relationships; attr.key is the name callers use
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def _attribute_key(model, column) -> str:
    return model.__mapper__.get_property_by_column(column).key


def get_required_attributes(model) -> list[str]:
    """
    Attribute names whose column is NOT NULL, has no default and is not an autoincrement key.
    """
    attrs = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            attrs.append(_attribute_key(model, col))
    return attrs


def get_unique_attribute_sets(model) -> list[tuple[str, ...]]:
    """
    Every unique column set declared on the table, as attribute names.
    Covers Column(unique=True), UniqueConstraint and unique Index objects.
    """
    unique_sets: list[tuple[str, ...]] = []
    table = model.__table__

    for col in table.columns:
        if col.unique:
            unique_sets.append((_attribute_key(model, col),))

    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append(tuple(_attribute_key(model, c) for c in constraint.columns))

    for idx in table.indexes:
        if idx.unique:
            unique_sets.append(tuple(_attribute_key(model, c) for c in idx.columns))

    return unique_sets


async def exists_with_values(db, model, values: dict[str, Any], exclude_id: Any = None,
                             ignore_case: bool = False) -> bool:
    """
    True when a row other than `exclude_id` already holds all `values`.

    On create `exclude_id` is None and any match counts; on update the record's
    own row is ignored. With `ignore_case`, string values compare on lower().
    """
    conditions = []
    for name, value in values.items():
        column = getattr(model, name)
        if ignore_case and isinstance(value, str):
            conditions.append(func.lower(column) == value.lower())
        else:
            conditions.append(column == value)
    q = select(model.id).where(and_(*conditions))
    if exclude_id is not None:
        q = q.where(model.id != exclude_id)
    result = await db.execute(q.limit(1))
    return result.scalar() is not None

"""
Quantity conservation for item distributions.

The distributed quantities of a planned item may never add up to more than the
planned quantity. The check reads the current sum from the database inside the
write's transaction, after locking the planned item row (`SELECT ... FOR
UPDATE`), so two concurrent distributions against the same planned item are
serialized instead of both passing on a stale total. SQLite ignores the lock
clause; it serializes writers at the database level anyway.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from raas.exceptions.base import InvariantViolationError
from raas.models.plan import ItemDistribution, PlannedItem

logger = logging.getLogger(__name__)

# float columns; ignore rounding noise when totals land exactly on the plan
_TOLERANCE = 1e-9


async def lock_planned_item(db: AsyncSession, planned_item_id: Any) -> PlannedItem | None:
    stmt = (
        select(PlannedItem)
        .where(PlannedItem.id == planned_item_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def distributed_quantity(db: AsyncSession, planned_item_id: Any) -> float:
    """Sum of all persisted distribution quantities for a planned item (0 when none)."""
    stmt = select(func.coalesce(func.sum(ItemDistribution.quantity), 0.0)).where(
        ItemDistribution.planned_item_id == planned_item_id
    )
    return float(await db.scalar(stmt) or 0.0)


async def check_distribution_headroom(
    db: AsyncSession,
    planned_item_id: Any,
    quantity: float,
    distribution_id: Any = None,
) -> None:
    """
    Raise InvariantViolationError when adding `quantity` would exceed the planned quantity.

    On update (`distribution_id` given) the record's own stored quantity is taken
    out of the current total first, as long as it is currently attached to the
    same planned item.
    """
    planned = await lock_planned_item(db, planned_item_id)
    if planned is None:
        # missing parent is reported by the reference check
        return
    if not planned.planed_quantity:
        return

    current_total = await distributed_quantity(db, planned_item_id)

    if distribution_id is not None:
        prior = await db.scalar(
            select(ItemDistribution.quantity).where(
                ItemDistribution.id == distribution_id,
                ItemDistribution.planned_item_id == planned_item_id,
            )
        )
        if prior is not None:
            current_total -= prior

    new_total = current_total + quantity
    if new_total > planned.planed_quantity + _TOLERANCE:
        logger.info(
            "validation.quantity_exceeded",
            extra={
                "planned_item_id": planned_item_id,
                "planned_quantity": planned.planed_quantity,
                "requested_total": new_total,
                "distribution_id": distribution_id,
            },
        )
        raise InvariantViolationError(
            f"Total distribution quantity ({new_total:g}) cannot exceed "
            f"planned quantity ({planned.planed_quantity:g})",
            fields=["quantity"],
        )


async def check_planned_quantity_covers(db: AsyncSession, planned_item_id: Any, planed_quantity: float | None) -> None:
    """
    Raise InvariantViolationError when a planned item's new quantity drops below
    what is already distributed against it.
    """
    if planed_quantity is None:
        return
    planned = await lock_planned_item(db, planned_item_id)
    if planned is None:
        return

    current_total = await distributed_quantity(db, planned_item_id)
    if current_total > planed_quantity + _TOLERANCE:
        logger.info(
            "validation.planned_quantity_below_distributed",
            extra={
                "planned_item_id": planned_item_id,
                "planned_quantity": planed_quantity,
                "distributed_total": current_total,
            },
        )
        raise InvariantViolationError(
            f"Planned quantity ({planed_quantity:g}) cannot be lower than "
            f"the distributed quantity ({current_total:g})",
            fields=["planed_quantity"],
        )

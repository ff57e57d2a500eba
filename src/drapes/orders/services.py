"""Order status service layer.

Every status change goes through transition_order_status so the order row
and its history entry are written together.
"""

import logging
from typing import Iterable, NamedTuple

from django.db import DatabaseError, transaction

from .exceptions import InvalidStatusError, OrderNotFoundError
from .models import Order, OrderStatus, OrderStatusHistory

logger = logging.getLogger(__name__)


class TransitionResult(NamedTuple):
    order: Order
    changed: bool


class BulkTransitionResult(NamedTuple):
    success_count: int
    changed_count: int
    failed_ids: list


def validate_status(status: str) -> str:
    """Return the status if it is a known order status.

    Raises:
        InvalidStatusError: If the status is not recognized
    """
    if status not in OrderStatus.values:
        raise InvalidStatusError(status, OrderStatus.values)
    return status


@transaction.atomic
def transition_order_status(
    order_id,
    new_status: str,
    notes: str = "",
    actor=None,
) -> TransitionResult:
    """Move an order to a new status.

    Args:
        order_id: Primary key of the order
        new_status: Target status (pending, processing, shipped, ...)
        notes: Optional note stored with the history row
        actor: User making the change (optional)

    Returns:
        TransitionResult; changed is False when the order already had the
        requested status, in which case nothing is written.

    Raises:
        InvalidStatusError: If new_status is invalid
        OrderNotFoundError: If no order has this id
    """
    validate_status(new_status)

    try:
        order = Order.objects.get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise OrderNotFoundError(order_id)

    if order.status == new_status:
        return TransitionResult(order=order, changed=False)

    old_status = order.status
    order.status = new_status
    order.updated_by = actor
    order.save(update_fields=["status", "updated_by", "updated_at"])

    OrderStatusHistory.objects.create(
        order=order,
        status=new_status,
        notes=notes or f"Status updated from {old_status} to {new_status}",
        actor=actor,
    )

    logger.info(
        "Order %s status changed from %s to %s by %s",
        order.pk,
        old_status,
        new_status,
        actor or "system",
    )
    return TransitionResult(order=order, changed=True)


def bulk_transition_order_status(
    order_ids: Iterable,
    new_status: str,
    notes: str = "",
    actor=None,
) -> BulkTransitionResult:
    """Apply the same status to many orders.

    Orders that cannot be transitioned (unknown ids, or a database error
    while writing one order) are skipped and reported in failed_ids. Each
    order commits on its own, so a failure rolls back only that order.

    Raises:
        InvalidStatusError: If new_status is invalid (checked before any write)
    """
    validate_status(new_status)

    success_count = 0
    changed_count = 0
    failed_ids = []

    for order_id in order_ids:
        try:
            result = transition_order_status(order_id, new_status, notes=notes, actor=actor)
        except OrderNotFoundError:
            logger.warning("Bulk status update skipped unknown order %s", order_id)
            failed_ids.append(order_id)
            continue
        except DatabaseError:
            logger.exception("Bulk status update failed for order %s", order_id)
            failed_ids.append(order_id)
            continue

        success_count += 1
        if result.changed:
            changed_count += 1

    logger.info(
        "Bulk status update to %s: %d succeeded, %d changed, %d failed",
        new_status,
        success_count,
        changed_count,
        len(failed_ids),
    )
    return BulkTransitionResult(
        success_count=success_count,
        changed_count=changed_count,
        failed_ids=failed_ids,
    )


def get_status_history(order: Order):
    """Status history for an order, oldest first."""
    return OrderStatusHistory.objects.filter(order=order).select_related("actor").order_by("created_at", "pk")

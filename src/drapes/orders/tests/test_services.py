"""Tests for the order status tracker."""

from unittest import mock

import pytest
from django.db import DatabaseError
from django.db.models import ProtectedError

from drapes.orders.exceptions import ImmutableRecordError, InvalidStatusError, OrderNotFoundError
from drapes.orders.models import Order, OrderStatus, OrderStatusHistory
from drapes.orders.services import (
    bulk_transition_order_status,
    get_status_history,
    transition_order_status,
)


@pytest.mark.django_db
class TestTransitionOrderStatus:
    def test_changes_status_and_records_history(self, order, staff_user):
        result = transition_order_status(order.pk, OrderStatus.PROCESSING, actor=staff_user)

        assert result.changed is True
        order.refresh_from_db()
        assert order.status == OrderStatus.PROCESSING
        assert order.updated_by == staff_user

        latest = get_status_history(order).last()
        assert latest.status == OrderStatus.PROCESSING
        assert latest.actor == staff_user
        assert latest.notes == "Status updated from pending to processing"

    def test_custom_note(self, order):
        transition_order_status(order.pk, "shipped", notes="Sent with courier")
        assert get_status_history(order).last().notes == "Sent with courier"

    def test_same_status_is_a_noop(self, order):
        before = OrderStatusHistory.objects.filter(order=order).count()

        result = transition_order_status(order.pk, OrderStatus.PENDING)

        assert result.changed is False
        assert result.order.status == OrderStatus.PENDING
        assert OrderStatusHistory.objects.filter(order=order).count() == before

    def test_invalid_status(self, order):
        with pytest.raises(InvalidStatusError) as exc_info:
            transition_order_status(order.pk, "teleported")

        assert isinstance(exc_info.value, ValueError)
        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING

    def test_unknown_order(self, db):
        with pytest.raises(OrderNotFoundError):
            transition_order_status(999999, OrderStatus.SHIPPED)

    def test_non_numeric_id_is_not_found(self, db):
        with pytest.raises(OrderNotFoundError):
            transition_order_status("abc", OrderStatus.SHIPPED)

    def test_history_is_oldest_first(self, order):
        transition_order_status(order.pk, OrderStatus.PROCESSING)
        transition_order_status(order.pk, OrderStatus.SHIPPED)
        transition_order_status(order.pk, OrderStatus.DELIVERED)

        statuses = [entry.status for entry in get_status_history(order)]
        assert statuses == ["pending", "processing", "shipped", "delivered"]


@pytest.mark.django_db
class TestBulkTransition:
    def test_skips_unknown_ids(self, orders):
        ids = [o.pk for o in orders[:4]] + [999999]

        result = bulk_transition_order_status(ids, OrderStatus.PROCESSING)

        assert result.success_count == 4
        assert result.failed_ids == [999999]
        assert result.changed_count == 4
        assert Order.objects.filter(status=OrderStatus.PROCESSING).count() == 4

    def test_noops_count_as_success_but_not_changed(self, orders):
        ids = [o.pk for o in orders]

        result = bulk_transition_order_status(ids, OrderStatus.SHIPPED)

        assert result.success_count == 5
        assert result.changed_count == 4

    def test_invalid_status_checked_before_writing(self, orders):
        with pytest.raises(InvalidStatusError):
            bulk_transition_order_status([o.pk for o in orders], "lost")

        assert not Order.objects.exclude(status__in=["pending", "shipped", "delivered"]).exists()

    def test_database_error_fails_only_that_order(self, orders):
        broken = orders[1]
        create = OrderStatusHistory.objects.create

        def create_or_fail(**kwargs):
            if kwargs["order"].pk == broken.pk:
                raise DatabaseError("disk I/O error")
            return create(**kwargs)

        with mock.patch.object(OrderStatusHistory.objects, "create", side_effect=create_or_fail):
            result = bulk_transition_order_status([o.pk for o in orders[:3]], OrderStatus.PROCESSING)

        assert result.failed_ids == [broken.pk]
        assert result.success_count == 2
        broken.refresh_from_db()
        assert broken.status == OrderStatus.PENDING
        assert broken.status_history.count() == 1
        assert Order.objects.filter(status=OrderStatus.PROCESSING).count() == 2


@pytest.mark.django_db
class TestImmutableRecords:
    def test_items_cannot_be_edited(self, order):
        item = order.items.get()
        item.quantity = 5

        with pytest.raises(ImmutableRecordError):
            item.save()

    def test_history_cannot_be_edited_or_deleted(self, order):
        entry = order.status_history.get()
        entry.notes = "rewritten"

        with pytest.raises(ImmutableRecordError):
            entry.save()
        with pytest.raises(ImmutableRecordError):
            entry.delete()

    def test_orders_with_items_or_history_cannot_be_deleted(self, order):
        with pytest.raises(ProtectedError):
            order.delete()

        assert Order.objects.filter(pk=order.pk).exists()
        assert order.status_history.count() == 1
        assert order.items.count() == 1

"""Fixtures for order tests."""

from decimal import Decimal

import pytest

from drapes.orders.models import Order, OrderItem, OrderStatus, OrderStatusHistory


def make_order(customer, total="98.59", status=OrderStatus.PENDING, **overrides):
    fields = {
        "customer": customer,
        "status": status,
        "shipping_full_name": customer.get_display_name(),
        "shipping_email": customer.email,
        "shipping_phone": "555-0100",
        "shipping_address": "12 Rue de la Paix",
        "shipping_city": "Springfield",
        "shipping_state": "IL",
        "shipping_zip": "62701",
        "shipping_country": "USA",
        "subtotal": Decimal("80.00"),
        "shipping_fee": Decimal("12.99"),
        "tax": Decimal("5.60"),
        "total": Decimal(total),
    }
    fields.update(overrides)
    order = Order.objects.create(**fields)
    OrderItem.objects.create(
        order=order,
        product_sku="DRESS-1",
        product_name="Silk Evening Dress",
        quantity=2,
        unit_price=Decimal("40.00"),
        size="M",
    )
    OrderStatusHistory.objects.create(order=order, status=status, notes="Order placed")
    return order


@pytest.fixture
def order(customer):
    """A pending order for the customer."""
    return make_order(customer)


@pytest.fixture
def orders(customer, other_customer):
    """Five orders across two customers."""
    return [
        make_order(customer, total="98.59"),
        make_order(customer, total="160.50", tracking_number="ABCDEF1234"),
        make_order(customer, total="55.79", status=OrderStatus.SHIPPED),
        make_order(other_customer, total="20.00", shipping_full_name="John Roe"),
        make_order(other_customer, total="300.00", status=OrderStatus.DELIVERED),
    ]

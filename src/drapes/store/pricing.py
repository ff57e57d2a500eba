"""Order total calculations.

Shipping and tax rules come from drapes.store.conf. Every amount is
rounded to cents before it is summed, so
total == subtotal + shipping_fee + tax holds exactly.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple

from . import conf


class OrderTotals(NamedTuple):
    """Result of a totals calculation."""

    subtotal: Decimal
    shipping_fee: Decimal
    tax: Decimal
    total: Decimal


def round_money(amount: Decimal, places: int = 2) -> Decimal:
    """Round to specified decimal places, halves away from zero."""
    quantize_str = "0." + "0" * places
    return Decimal(amount).quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)


def calculate_subtotal(lines: Iterable) -> Decimal:
    """Sum of unit_price x quantity over objects with those attributes."""
    return round_money(sum((line.unit_price * line.quantity for line in lines), Decimal("0")))


def calculate_shipping(subtotal: Decimal) -> Decimal:
    """Flat fee below the free-shipping threshold, free at or above it."""
    if subtotal >= conf.get_free_shipping_threshold():
        return Decimal("0.00")
    return round_money(conf.get_flat_shipping_fee())


def calculate_tax(subtotal: Decimal) -> Decimal:
    return round_money(subtotal * conf.get_tax_rate())


def calculate_totals(lines: Iterable) -> OrderTotals:
    """Subtotal, shipping, tax and grand total for cart lines.

    Args:
        lines: Items exposing unit_price (Decimal) and quantity (int)

    Returns:
        OrderTotals with every amount rounded to cents
    """
    subtotal = calculate_subtotal(lines)
    shipping_fee = calculate_shipping(subtotal)
    tax = calculate_tax(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        tax=tax,
        total=subtotal + shipping_fee + tax,
    )

"""Checkout and wishlist service layer.

place_order turns a session cart into a persisted Order. Views call this
instead of creating orders or touching stock directly.
"""

import hashlib
import logging
import time

from django.db import transaction
from django.db.models import F

from drapes.catalog.models import Product
from drapes.orders.models import Order, OrderItem, OrderStatus, OrderStatusHistory

from . import conf
from .exceptions import CheckoutValidationError, EmptyCartError, StockConflictError
from .forms import CheckoutForm
from .models import WishlistItem
from .pricing import calculate_totals

logger = logging.getLogger(__name__)


def generate_tracking_number(order_id) -> str:
    """Ten upper-case hex characters derived from the order id and the clock."""
    raw = f"{order_id}{int(time.time())}"
    return hashlib.md5(raw.encode()).hexdigest()[:10].upper()


def validate_checkout_data(data) -> dict:
    """Validate contact and shipping details.

    Returns:
        The cleaned form data

    Raises:
        CheckoutValidationError: With every failing field and its messages
    """
    form = CheckoutForm(data)
    if not form.is_valid():
        raise CheckoutValidationError(
            {field: list(messages) for field, messages in form.errors.items()}
        )
    return form.cleaned_data


def reserve_stock(sku: str, quantity: int) -> None:
    """Decrement product stock only if enough is left.

    Raises:
        StockConflictError: If fewer than quantity units remain
    """
    updated = Product.objects.filter(sku=sku, stock__gte=quantity).update(
        stock=F("stock") - quantity
    )
    if updated == 0:
        available = Product.objects.filter(sku=sku).values_list("stock", flat=True).first()
        raise StockConflictError(sku, quantity, available or 0)


def place_order(cart, customer, data) -> Order:
    """Create an order from the cart.

    Args:
        cart: The customer's Cart
        customer: User placing the order
        data: Mapping with the contact/shipping fields of CheckoutForm

    Returns:
        The created Order, status pending, with a tracking number

    Raises:
        EmptyCartError: If the cart has no items (nothing is written)
        CheckoutValidationError: If contact/shipping fields are invalid
        StockConflictError: If stock ran out for an item; the whole order
            is rolled back and the cart is left as it was
    """
    if cart.is_empty:
        raise EmptyCartError()

    cleaned = validate_checkout_data(data)
    items = cart.items()
    totals = calculate_totals(items)

    with transaction.atomic():
        order = Order.objects.create(
            customer=customer,
            status=OrderStatus.PENDING,
            payment_method=conf.get_setting("PAYMENT_METHOD"),
            shipping_full_name=cleaned["full_name"],
            shipping_email=cleaned["email"],
            shipping_phone=cleaned["phone"],
            shipping_address=cleaned["address"],
            shipping_city=cleaned["city"],
            shipping_state=cleaned["state"],
            shipping_zip=cleaned["zip_code"],
            shipping_country=cleaned["country"],
            customer_notes=cleaned.get("notes", ""),
            subtotal=totals.subtotal,
            shipping_fee=totals.shipping_fee,
            tax=totals.tax,
            total=totals.total,
        )

        OrderStatusHistory.objects.create(
            order=order,
            status=OrderStatus.PENDING,
            notes="Order placed",
            actor=customer,
        )

        for item in items:
            OrderItem.objects.create(
                order=order,
                product_sku=item.sku,
                product_name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                size=item.size,
                color=item.color,
            )
            try:
                reserve_stock(item.sku, item.quantity)
            except StockConflictError as e:
                logger.warning(
                    "Checkout for %s aborted: %s", customer, e,
                )
                raise

        order.tracking_number = generate_tracking_number(order.pk)
        order.save(update_fields=["tracking_number", "updated_at"])

    cart.clear()

    logger.info(
        "Order %s placed by %s: %d items, total %s",
        order.pk,
        customer,
        len(items),
        order.total,
    )
    return order


# =============================================================================
# Wishlist
# =============================================================================


def add_to_wishlist(customer, product) -> bool:
    """Save a product for the customer. False if it was already saved."""
    _, created = WishlistItem.objects.get_or_create(customer=customer, product=product)
    if created:
        logger.info("%s added %s to their wishlist", customer, product.sku)
    return created


def remove_from_wishlist(customer, product) -> bool:
    """Drop a saved product. False if it was not on the wishlist."""
    deleted, _ = WishlistItem.objects.filter(customer=customer, product=product).delete()
    return deleted > 0


def get_wishlist(customer):
    """The customer's saved products, newest first."""
    return WishlistItem.objects.filter(customer=customer).select_related("product")

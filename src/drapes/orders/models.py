"""Order models.

Orders are created by the checkout service together with their items.
Items and status history rows are snapshots: once written they are never
changed. Status changes go through drapes.orders.services.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.urls import reverse

from .exceptions import ImmutableRecordError


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"
    REFUNDED = "refunded", "Refunded"


FINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}


class Order(models.Model):
    """Customer order with denormalized shipping details and totals."""

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    payment_method = models.CharField(max_length=50, default="Cash on Delivery")

    # Shipping / contact (denormalized for historical accuracy)
    shipping_full_name = models.CharField(max_length=150)
    shipping_email = models.EmailField()
    shipping_phone = models.CharField(max_length=30)
    shipping_address = models.CharField(max_length=255)
    shipping_city = models.CharField(max_length=100)
    shipping_state = models.CharField(max_length=100)
    shipping_zip = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=100)
    customer_notes = models.TextField(blank=True)

    # Totals
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    shipping_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=10, decimal_places=2)

    tracking_number = models.CharField(max_length=20, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Order #{self.pk}"

    def get_absolute_url(self):
        return reverse("orders:order-detail", kwargs={"pk": self.pk})

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_STATUSES

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items.all())


class OrderItem(models.Model):
    """Snapshot of a cart line at purchase time."""

    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="items")
    product_sku = models.CharField(max_length=50, db_index=True)
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    size = models.CharField(max_length=20, blank=True)
    color = models.CharField(max_length=50, blank=True)

    class Meta:
        db_table = "order_items"
        ordering = ["pk"]

    def __str__(self):
        return f"{self.quantity}x {self.product_name}"

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Order items cannot be changed after creation")
        super().save(*args, **kwargs)


class OrderStatusHistory(models.Model):
    """One row per status transition. Append-only."""

    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="status_history")
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    notes = models.TextField(blank=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "order_status_history"
        ordering = ["created_at", "pk"]
        verbose_name_plural = "order status history"

    def __str__(self):
        return f"Order #{self.order_id}: {self.status}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Status history is append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError("Status history is append-only")

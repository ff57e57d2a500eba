"""Store models."""

from django.conf import settings
from django.db import models


class WishlistItem(models.Model):
    """A product a customer saved for later."""

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="wishlist_items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="wishlisted_by",
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "wishlist"
        ordering = ["-added_at", "-pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer", "product"],
                name="unique_wishlist_product",
            ),
        ]

    def __str__(self):
        return f"{self.customer} / {self.product.sku}"

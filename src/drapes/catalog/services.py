"""Product lookup services.

Price and stock questions asked by the cart and checkout go through here
instead of touching the models directly.
"""

import logging
from decimal import Decimal
from typing import NamedTuple

from django.db.models import DecimalField, F, Q
from django.db.models.functions import Coalesce

from .models import Category, Product

logger = logging.getLogger(__name__)


SORT_ORDERS = {
    "newest": ("-created_at",),
    "price_low": ("effective_price", "name"),
    "price_high": ("-effective_price", "name"),
    "name_asc": ("name",),
    "name_desc": ("-name",),
}


class VariantQuote(NamedTuple):
    """Unit price and available stock for a product/size/color selection."""

    unit_price: Decimal
    available_stock: int
    size_surcharge: Decimal
    color_surcharge: Decimal


def get_product(sku: str) -> Product | None:
    """Return the active product with this SKU, or None."""
    if not sku:
        return None
    product = Product.objects.active().filter(sku=sku).select_related("category").first()
    if product is None:
        logger.debug("No active product for SKU %s", sku)
    return product


def quote_variant(product: Product, size: str | None = None, color: str | None = None) -> VariantQuote:
    """Price and stock for a product with the chosen options.

    Unknown size or color names add no surcharge. When the chosen option
    tracks its own stock, the lower of option and product stock applies.
    """
    available = product.stock
    size_surcharge = Decimal("0.00")
    color_surcharge = Decimal("0.00")

    if size:
        option = product.size_options.filter(size__name=size).first()
        if option is not None:
            size_surcharge = option.additional_price
            if option.stock is not None:
                available = min(available, option.stock)

    if color:
        option = product.color_options.filter(color__name=color).first()
        if option is not None:
            color_surcharge = option.additional_price
            if option.stock is not None:
                available = min(available, option.stock)

    return VariantQuote(
        unit_price=product.base_price + size_surcharge + color_surcharge,
        available_stock=max(available, 0),
        size_surcharge=size_surcharge,
        color_surcharge=color_surcharge,
    )


def available_stock(sku: str, size: str | None = None, color: str | None = None) -> int:
    """Current available stock for a selection, 0 for unknown SKUs."""
    product = get_product(sku)
    if product is None:
        return 0
    return quote_variant(product, size=size, color=color).available_stock


def category_with_children(category: Category) -> list[int]:
    """Primary keys of a category and its direct subcategories."""
    return [category.pk, *category.children.values_list("pk", flat=True)]


def search_products(
    category: Category | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    query: str | None = None,
    sort: str = "newest",
    in_stock_only: bool = False,
):
    """Filtered product queryset for the shop page.

    Prices compare against the effective price (sale price when set).
    """
    queryset = (
        Product.objects.active()
        .select_related("category")
        .annotate(
            effective_price=Coalesce(
                F("sale_price"), F("price"), output_field=DecimalField(max_digits=10, decimal_places=2)
            )
        )
    )

    if category is not None:
        queryset = queryset.filter(category_id__in=category_with_children(category))

    if min_price is not None:
        queryset = queryset.filter(effective_price__gte=min_price)

    if max_price is not None:
        queryset = queryset.filter(effective_price__lte=max_price)

    if query:
        queryset = queryset.filter(
            Q(name__icontains=query) | Q(sku__icontains=query) | Q(description__icontains=query)
        )

    if in_stock_only:
        queryset = queryset.in_stock()

    return queryset.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))


def get_low_stock_products(threshold: int, limit: int = 5):
    """Products with fewer than threshold units, lowest stock first."""
    return Product.objects.filter(stock__lt=threshold).order_by("stock", "name")[:limit]

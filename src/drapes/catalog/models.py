"""Catalog models: categories, option lookups, products and their variants."""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.urls import reverse


class Category(models.Model):
    """Product category, optionally nested one level under a parent."""

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=120, unique=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
    )
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        if self.parent_id:
            return f"{self.parent.name} / {self.name}"
        return self.name


class Size(models.Model):
    name = models.CharField(max_length=20, unique=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "sizes"
        ordering = ["sort_order", "name"]

    def __str__(self):
        return self.name


class Color(models.Model):
    name = models.CharField(max_length=50, unique=True)
    hex_code = models.CharField(max_length=7, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "colors"
        ordering = ["sort_order", "name"]

    def __str__(self):
        return self.name


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def in_stock(self):
        return self.filter(stock__gt=0)


class Product(models.Model):
    """A sellable product identified by its SKU."""

    sku = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    sale_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    sizes = models.ManyToManyField(Size, through="ProductSize", blank=True)
    colors = models.ManyToManyField(Color, through="ProductColor", blank=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def get_absolute_url(self):
        return reverse("catalog:product-detail", kwargs={"slug": self.slug})

    @property
    def base_price(self) -> Decimal:
        """Sale price when one is set, otherwise the regular price."""
        if self.sale_price is not None:
            return self.sale_price
        return self.price

    @property
    def is_on_sale(self) -> bool:
        return self.sale_price is not None and self.sale_price < self.price

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ProductVariant(models.Model):
    """Shared fields for size and color options of a product."""

    additional_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    # Blank means the option draws on the product's stock
    stock = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        abstract = True


class ProductSize(ProductVariant):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="size_options")
    size = models.ForeignKey(Size, on_delete=models.PROTECT, related_name="product_options")

    class Meta:
        db_table = "product_sizes"
        ordering = ["size__sort_order", "size__name"]
        constraints = [
            models.UniqueConstraint(fields=["product", "size"], name="product_sizes_unique"),
        ]

    def __str__(self):
        return f"{self.product.sku} / {self.size.name}"


class ProductColor(ProductVariant):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="color_options")
    color = models.ForeignKey(Color, on_delete=models.PROTECT, related_name="product_options")

    class Meta:
        db_table = "product_colors"
        ordering = ["color__sort_order", "color__name"]
        constraints = [
            models.UniqueConstraint(fields=["product", "color"], name="product_colors_unique"),
        ]

    def __str__(self):
        return f"{self.product.sku} / {self.color.name}"

"""Management command to seed the catalog with sample categories and products."""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

from drapes.catalog.models import Category, Color, Product, ProductColor, ProductSize, Size


SIZES = ["XS", "S", "M", "L", "XL", "XXL"]

COLORS = [
    {"name": "Black", "hex_code": "#000000"},
    {"name": "Ivory", "hex_code": "#FFFFF0"},
    {"name": "Navy", "hex_code": "#000080"},
    {"name": "Burgundy", "hex_code": "#800020"},
    {"name": "Emerald", "hex_code": "#50C878"},
]

CATEGORIES = [
    {"name": "Clothing", "slug": "clothing", "parent": None},
    {"name": "Dresses", "slug": "dresses", "parent": "clothing"},
    {"name": "Outerwear", "slug": "outerwear", "parent": "clothing"},
    {"name": "Accessories", "slug": "accessories", "parent": None},
]

PRODUCTS = [
    {
        "sku": "DRESS-1",
        "name": "Silk Evening Dress",
        "category": "dresses",
        "price": "40.00",
        "stock": 25,
        "sizes": {"S": "0.00", "M": "0.00", "L": "2.50", "XL": "5.00"},
        "colors": {"Black": "0.00", "Burgundy": "3.00"},
    },
    {
        "sku": "DRESS-2",
        "name": "Linen Summer Dress",
        "category": "dresses",
        "price": "65.00",
        "sale_price": "49.00",
        "stock": 12,
        "sizes": {"XS": "0.00", "S": "0.00", "M": "0.00"},
        "colors": {"Ivory": "0.00", "Navy": "0.00"},
    },
    {
        "sku": "COAT-1",
        "name": "Wool Overcoat",
        "category": "outerwear",
        "price": "189.00",
        "stock": 6,
        "sizes": {"M": "0.00", "L": "0.00", "XL": "10.00", "XXL": "15.00"},
        "colors": {"Black": "0.00", "Navy": "0.00", "Emerald": "20.00"},
    },
    {
        "sku": "SCARF-1",
        "name": "Cashmere Scarf",
        "category": "accessories",
        "price": "55.00",
        "stock": 40,
        "sizes": {},
        "colors": {"Ivory": "0.00", "Burgundy": "0.00", "Emerald": "0.00"},
    },
]


class Command(BaseCommand):
    help = "Seed sizes, colors, categories and sample products"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Recreate sample products that already exist",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("\nCreating sizes and colors...")
        for order, name in enumerate(SIZES):
            Size.objects.update_or_create(name=name, defaults={"sort_order": order})
        for order, color_data in enumerate(COLORS):
            Color.objects.update_or_create(
                name=color_data["name"],
                defaults={"hex_code": color_data["hex_code"], "sort_order": order},
            )

        # Create categories
        self.stdout.write("\nCreating categories...")
        category_map = {}
        for cat_data in CATEGORIES:
            category, created = Category.objects.get_or_create(
                slug=cat_data["slug"],
                defaults={
                    "name": cat_data["name"],
                    "parent": category_map.get(cat_data["parent"]),
                },
            )
            category_map[cat_data["slug"]] = category
            if created:
                self.stdout.write(self.style.SUCCESS(f"  Created: {cat_data['name']}"))
            else:
                self.stdout.write(f"  Skipping existing category: {cat_data['name']}")

        # Create products
        self.stdout.write("\nCreating products...")
        for product_data in PRODUCTS:
            existing = Product.objects.filter(sku=product_data["sku"]).first()
            if existing:
                if options["force"]:
                    existing.delete()
                    self.stdout.write(f"  Deleted existing product: {product_data['sku']}")
                else:
                    self.stdout.write(f"  Skipping existing product: {product_data['sku']}")
                    continue

            product = Product.objects.create(
                sku=product_data["sku"],
                name=product_data["name"],
                slug=slugify(f"{product_data['name']}-{product_data['sku']}"),
                category=category_map[product_data["category"]],
                price=Decimal(product_data["price"]),
                sale_price=Decimal(product_data["sale_price"]) if product_data.get("sale_price") else None,
                stock=product_data["stock"],
            )
            for size_name, surcharge in product_data["sizes"].items():
                ProductSize.objects.create(
                    product=product,
                    size=Size.objects.get(name=size_name),
                    additional_price=Decimal(surcharge),
                )
            for color_name, surcharge in product_data["colors"].items():
                ProductColor.objects.create(
                    product=product,
                    color=Color.objects.get(name=color_name),
                    additional_price=Decimal(surcharge),
                )
            self.stdout.write(self.style.SUCCESS(f"  Created: {product.name}"))

        self.stdout.write(self.style.SUCCESS("\nCatalog seeded."))

"""Shared pytest fixtures for the storefront apps."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.contrib.sessions.backends.db import SessionStore


User = get_user_model()


@pytest.fixture
def customer(db):
    """Create a customer account."""
    return User.objects.create_user(
        email="jane@example.com",
        password="testpass123",
        first_name="Jane",
        last_name="Doe",
        phone="555-0100",
    )


@pytest.fixture
def other_customer(db):
    """Create a second customer account."""
    return User.objects.create_user(
        email="john@example.com",
        password="testpass123",
        first_name="John",
        last_name="Roe",
    )


@pytest.fixture
def staff_user(db):
    """Create a staff user."""
    return User.objects.create_user(
        email="staff@elegantdrapes.test",
        password="testpass123",
        first_name="Staff",
        last_name="User",
        is_staff=True,
    )


@pytest.fixture
def category(db):
    """Create a top-level category with one subcategory."""
    from drapes.catalog.models import Category

    clothing = Category.objects.create(name="Clothing", slug="clothing")
    Category.objects.create(name="Dresses", slug="dresses", parent=clothing)
    return clothing


@pytest.fixture
def dresses(category):
    return category.children.get(slug="dresses")


@pytest.fixture
def product(dresses):
    """DRESS-1 at 40.00 with sizes S/M/L (L +2.50) and colors Black/Burgundy (+3.00)."""
    from drapes.catalog.models import Color, Product, ProductColor, ProductSize, Size

    dress = Product.objects.create(
        sku="DRESS-1",
        name="Silk Evening Dress",
        slug="silk-evening-dress",
        category=dresses,
        price=Decimal("40.00"),
        stock=25,
    )
    for order, (name, surcharge) in enumerate([("S", "0.00"), ("M", "0.00"), ("L", "2.50")]):
        size = Size.objects.create(name=name, sort_order=order)
        ProductSize.objects.create(product=dress, size=size, additional_price=Decimal(surcharge))
    for order, (name, surcharge) in enumerate([("Black", "0.00"), ("Burgundy", "3.00")]):
        color = Color.objects.create(name=name, sort_order=order)
        ProductColor.objects.create(product=dress, color=color, additional_price=Decimal(surcharge))
    return dress


@pytest.fixture
def scarf(category):
    """A product without options, low stock."""
    from drapes.catalog.models import Product

    return Product.objects.create(
        sku="SCARF-1",
        name="Cashmere Scarf",
        slug="cashmere-scarf",
        category=category,
        price=Decimal("25.00"),
        sale_price=Decimal("19.99"),
        stock=3,
    )


@pytest.fixture
def session(db):
    """A saved database session."""
    store = SessionStore()
    store.create()
    return store


@pytest.fixture
def cart(session):
    """Empty cart backed by a session."""
    from drapes.store.cart import Cart, SessionCartStore

    return Cart(SessionCartStore(session))


@pytest.fixture
def checkout_data():
    """Valid contact and shipping details."""
    return {
        "full_name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "address": "12 Rue de la Paix",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "USA",
        "notes": "Leave at the door",
    }

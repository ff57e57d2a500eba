"""Tests for the session cart."""

import random
from decimal import Decimal

import pytest

from drapes.store.cart import Cart, CartItem, SessionCartStore, make_item_key

DRESS = make_item_key("DRESS-1")
DRESS_M = make_item_key("DRESS-1", "M")
SCARF = make_item_key("SCARF-1")


class TestMakeItemKey:
    def test_sku_only(self):
        assert make_item_key("DRESS-1") == '["DRESS-1","",""]'

    def test_with_size_and_color(self):
        assert make_item_key("DRESS-1", "M", "Black") == '["DRESS-1","M","Black"]'

    def test_color_without_size(self):
        assert make_item_key("DRESS-1", None, "Black") != make_item_key("DRESS-1", "Black")

    def test_underscored_sku_does_not_collide_with_size(self):
        assert make_item_key("DRESS-1", "M") != make_item_key("DRESS-1_M")


class TestCartItem:
    """CartItem enforces its invariants on construction."""

    def test_price_is_decimal(self):
        item = CartItem(sku="A", name="A", unit_price="12.50", quantity=2)
        assert item.unit_price == Decimal("12.50")
        assert item.subtotal == Decimal("25.00")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValueError):
            CartItem(sku="A", name="A", unit_price="1.00", quantity=0)

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            CartItem(sku="A", name="A", unit_price="-1.00", quantity=1)

    def test_unparseable_price_rejected(self):
        with pytest.raises(ValueError):
            CartItem(sku="A", name="A", unit_price="abc", quantity=1)


@pytest.mark.django_db
class TestCartAdd:
    def test_add_creates_line(self, cart, product):
        assert cart.add("DRESS-1", 2, size="M", color="Black") is True

        item = cart.get(make_item_key("DRESS-1", "M", "Black"))
        assert item.quantity == 2
        assert item.unit_price == Decimal("40.00")
        assert item.name == "Silk Evening Dress"
        assert item.max_quantity == 25

    def test_add_same_selection_accumulates(self, cart, product):
        cart.add("DRESS-1", 2, size="M")
        cart.add("DRESS-1", 3, size="M")

        assert cart.count() == 1
        assert cart.get(DRESS_M).quantity == 5

    def test_different_options_are_separate_lines(self, cart, product):
        cart.add("DRESS-1", 1, size="M")
        cart.add("DRESS-1", 1, size="L")

        assert cart.count() == 2
        assert cart.get(make_item_key("DRESS-1", "L")).unit_price == Decimal("42.50")

    def test_sku_with_underscore_keeps_its_own_line(self, cart, product, dresses):
        from drapes.catalog.models import Product

        Product.objects.create(
            sku="DRESS-1_M",
            name="Lookalike Dress",
            slug="lookalike-dress",
            category=dresses,
            price=Decimal("99.00"),
            stock=5,
        )

        cart.add("DRESS-1", 1, size="M")
        cart.add("DRESS-1_M", 1)

        assert cart.count() == 2
        assert cart.get(DRESS_M).unit_price == Decimal("40.00")
        assert cart.get(make_item_key("DRESS-1_M")).unit_price == Decimal("99.00")
        assert cart.total() == Decimal("139.00")

    def test_add_clamps_to_stock(self, cart, scarf):
        assert cart.add("SCARF-1", 5) is True
        assert cart.get(SCARF).quantity == 3

    def test_accumulation_clamps_to_stock(self, cart, scarf):
        cart.add("SCARF-1", 2)
        cart.add("SCARF-1", 2)
        assert cart.get(SCARF).quantity == 3

    def test_quantity_below_one_counts_as_one(self, cart, product):
        cart.add("DRESS-1", 0)
        assert cart.get(DRESS).quantity == 1

    def test_unknown_product_is_rejected(self, cart, db):
        assert cart.add("NOPE-1") is False
        assert cart.is_empty

    def test_out_of_stock_is_rejected(self, cart, scarf):
        scarf.stock = 0
        scarf.save()

        assert cart.add("SCARF-1") is False
        assert cart.is_empty


@pytest.mark.django_db
class TestCartUpdateRemove:
    def test_update_sets_quantity(self, cart, product):
        cart.add("DRESS-1", 1)
        assert cart.update(DRESS, 4) is True
        assert cart.get(DRESS).quantity == 4

    def test_update_clamps_to_stock(self, cart, scarf):
        cart.add("SCARF-1", 1)
        cart.update(SCARF, 5)
        assert cart.get(SCARF).quantity == 3

    def test_update_to_zero_removes(self, cart, product, session):
        cart.add("DRESS-1", 2, size="M")
        other = Cart(SessionCartStore(session))
        other.remove(DRESS_M)

        cart.update(DRESS_M, 0)

        assert cart.get(DRESS_M) is None
        assert cart.to_dict() == other.to_dict()

    def test_update_unknown_key(self, cart, product):
        assert cart.update(make_item_key("DRESS-1", "XL"), 2) is False

    def test_update_removes_product_that_disappeared(self, cart, scarf):
        cart.add("SCARF-1", 1)
        scarf.is_active = False
        scarf.save()

        cart.update(SCARF, 2)

        assert cart.is_empty

    def test_remove(self, cart, product):
        cart.add("DRESS-1", 1)
        assert cart.remove(DRESS) is True
        assert cart.is_empty

    def test_remove_absent_key_is_noop(self, cart, product):
        cart.add("DRESS-1", 1)
        assert cart.remove(SCARF) is False
        assert cart.count() == 1

    def test_clear(self, cart, product, scarf):
        cart.add("DRESS-1", 1)
        cart.add("SCARF-1", 1)

        cart.clear()

        assert cart.is_empty
        assert cart.total() == Decimal("0.00")


@pytest.mark.django_db
class TestCartPersistence:
    """Mutations are written straight to the session."""

    def test_visible_to_a_new_cart_on_same_session(self, session, product):
        Cart(SessionCartStore(session)).add("DRESS-1", 2, size="M")

        reloaded = Cart(SessionCartStore(session))

        assert reloaded.get(DRESS_M).quantity == 2
        assert reloaded.get(DRESS_M).unit_price == Decimal("40.00")

    def test_price_stored_as_string(self, session, product):
        Cart(SessionCartStore(session)).add("DRESS-1", 1)
        assert session["cart"][DRESS]["price"] == "40.00"

    def test_not_shared_between_sessions(self, session, product):
        from django.contrib.sessions.backends.db import SessionStore

        Cart(SessionCartStore(session)).add("DRESS-1", 1)
        other = SessionStore()
        other.create()

        assert Cart(SessionCartStore(other)).is_empty

    def test_emptying_removes_session_entry(self, session, product):
        cart = Cart(SessionCartStore(session))
        cart.add("DRESS-1", 1)
        cart.remove(DRESS)
        assert "cart" not in session

    def test_unreadable_lines_are_dropped(self, session, product):
        session["cart"] = {
            "DRESS-1": {"sku": "DRESS-1", "name": "Dress", "price": "40.00", "quantity": 1},
            "BROKEN": {"sku": "BROKEN", "price": "x", "quantity": 1},
        }

        cart = Cart(SessionCartStore(session))

        assert cart.count() == 1
        assert DRESS in cart


@pytest.mark.django_db
class TestCartTotals:
    def test_total_and_counts(self, cart, product, scarf):
        cart.add("DRESS-1", 2, size="L", color="Burgundy")  # 45.50 each
        cart.add("SCARF-1", 1)  # 19.99

        assert cart.total() == Decimal("110.99")
        assert cart.count() == 2
        assert cart.quantity() == 3
        assert len(cart) == 2

    def test_total_matches_lines_after_random_operations(self, cart, product, scarf):
        rng = random.Random(20240611)
        selections = [
            ("DRESS-1", None, None),
            ("DRESS-1", "L", None),
            ("DRESS-1", "M", "Burgundy"),
            ("SCARF-1", None, None),
        ]

        for _ in range(60):
            sku, size, color = rng.choice(selections)
            key = make_item_key(sku, size, color)
            action = rng.choice(["add", "update", "remove"])
            if action == "add":
                cart.add(sku, rng.randint(1, 4), size=size, color=color)
            elif action == "update":
                cart.update(key, rng.randint(0, 6))
            else:
                cart.remove(key)

            expected = sum((item.unit_price * item.quantity for item in cart), Decimal("0"))
            assert cart.total() == expected
            assert all(1 <= item.quantity <= item.max_quantity for item in cart)

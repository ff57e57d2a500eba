"""Tests for the customer profile pages."""

import pytest
from django.urls import reverse

from drapes.store.models import WishlistItem


@pytest.fixture
def profile_data():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "phone": "555-0199",
        "shipping_address": "1 Main St",
        "shipping_city": "Springfield",
        "shipping_state": "IL",
        "shipping_zip": "62701",
        "shipping_country": "USA",
        "email_subscription": "on",
    }


@pytest.mark.django_db
class TestProfileView:
    def test_requires_login(self, client, db):
        response = client.get(reverse("profile:view"))

        assert response.status_code == 302
        assert "/accounts/login/" in response.url

    def test_shows_wishlist_and_orders(self, client, customer, product):
        WishlistItem.objects.create(customer=customer, product=product)
        client.force_login(customer)

        response = client.get(reverse("profile:view"))

        assert response.status_code == 200
        assert [item.product for item in response.context["wishlist"]] == [product]
        assert list(response.context["recent_orders"]) == []
        assert b"Silk Evening Dress" in response.content


@pytest.mark.django_db
class TestProfileEditView:
    def test_form_shows_current_values(self, client, customer):
        client.force_login(customer)

        response = client.get(reverse("profile:edit"))

        assert response.status_code == 200
        assert response.context["form"].instance == customer

    def test_saves_address(self, client, customer, profile_data):
        client.force_login(customer)

        response = client.post(reverse("profile:edit"), profile_data)

        assert response.status_code == 302
        assert response.url == reverse("profile:view")
        customer.refresh_from_db()
        assert customer.phone == "555-0199"
        assert customer.shipping_address == "1 Main St"
        assert customer.shipping_country == "USA"
        assert customer.email_subscription is True

    def test_first_name_required(self, client, customer, profile_data):
        profile_data["first_name"] = ""
        client.force_login(customer)

        response = client.post(reverse("profile:edit"), profile_data)

        assert response.status_code == 200
        assert response.context["form"].errors["first_name"] == ["First name is required"]
        customer.refresh_from_db()
        assert customer.shipping_address == ""

    def test_saved_address_fills_checkout(self, client, customer, product, profile_data):
        client.force_login(customer)
        client.post(reverse("profile:edit"), profile_data)
        client.post(reverse("store:cart-add"), {"product_sku": "DRESS-1"})

        initial = client.get(reverse("store:checkout")).context["form"].initial

        assert initial["address"] == "1 Main St"
        assert initial["state"] == "IL"
        assert initial["phone"] == "555-0199"


@pytest.mark.django_db
class TestPasswordChangeView:
    def test_changes_password_and_keeps_session(self, client, customer):
        client.force_login(customer)

        response = client.post(
            reverse("profile:password-change"),
            {
                "old_password": "testpass123",
                "new_password1": "velvet-curtain-42",
                "new_password2": "velvet-curtain-42",
            },
        )

        assert response.status_code == 302
        customer.refresh_from_db()
        assert customer.check_password("velvet-curtain-42")
        assert client.get(reverse("profile:view")).status_code == 200

    def test_wrong_current_password(self, client, customer):
        client.force_login(customer)

        response = client.post(
            reverse("profile:password-change"),
            {
                "old_password": "nope",
                "new_password1": "velvet-curtain-42",
                "new_password2": "velvet-curtain-42",
            },
        )

        assert response.status_code == 200
        assert "old_password" in response.context["form"].errors

    def test_short_password_rejected(self, client, customer):
        client.force_login(customer)

        response = client.post(
            reverse("profile:password-change"),
            {"old_password": "testpass123", "new_password1": "short", "new_password2": "short"},
        )

        assert response.status_code == 200
        assert "new_password2" in response.context["form"].errors

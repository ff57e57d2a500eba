"""Checkout form."""

from django import forms


class CheckoutForm(forms.Form):
    """Contact and shipping details collected at checkout."""

    full_name = forms.CharField(
        max_length=150,
        error_messages={"required": "Full name is required"},
    )
    email = forms.EmailField(
        error_messages={
            "required": "Valid email is required",
            "invalid": "Valid email is required",
        },
    )
    phone = forms.CharField(
        max_length=30,
        error_messages={"required": "Phone number is required"},
    )
    address = forms.CharField(
        max_length=255,
        error_messages={"required": "Address is required"},
    )
    city = forms.CharField(
        max_length=100,
        error_messages={"required": "City is required"},
    )
    state = forms.CharField(
        max_length=100,
        error_messages={"required": "State is required"},
    )
    zip_code = forms.CharField(
        max_length=20,
        error_messages={"required": "ZIP code is required"},
    )
    country = forms.CharField(
        max_length=100,
        error_messages={"required": "Country is required"},
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"rows": 3}),
    )

    @classmethod
    def initial_for(cls, user) -> dict:
        """Prefill from the signed-in user's profile and saved address."""
        if user is None or not user.is_authenticated:
            return {}
        return {
            "full_name": user.get_full_name(),
            "email": user.email,
            "phone": getattr(user, "phone", ""),
            "address": getattr(user, "shipping_address", ""),
            "city": getattr(user, "shipping_city", ""),
            "state": getattr(user, "shipping_state", ""),
            "zip_code": getattr(user, "shipping_zip", ""),
            "country": getattr(user, "shipping_country", ""),
        }

"""Profile forms."""

from django import forms
from django.contrib.auth import get_user_model


class ProfileForm(forms.ModelForm):
    """Contact details and the saved shipping address used at checkout."""

    class Meta:
        model = get_user_model()
        fields = [
            "first_name",
            "last_name",
            "phone",
            "shipping_address",
            "shipping_city",
            "shipping_state",
            "shipping_zip",
            "shipping_country",
            "email_subscription",
        ]
        labels = {
            "shipping_zip": "ZIP code",
            "email_subscription": "Send me news and offers by email",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["first_name"].required = True
        self.fields["first_name"].error_messages["required"] = "First name is required"

"""Forms for order status management."""

from django import forms

from .models import OrderStatus


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(choices=OrderStatus.choices)
    notes = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}), required=False, max_length=1000)


class BulkStatusForm(forms.Form):
    bulk_action = forms.ChoiceField(choices=OrderStatus.choices)
    notes = forms.CharField(required=False, max_length=1000)


class OrderFilterForm(forms.Form):
    SORT_CHOICES = [
        ("newest", "Newest first"),
        ("oldest", "Oldest first"),
        ("total_desc", "Total: high to low"),
        ("total_asc", "Total: low to high"),
    ]

    status = forms.ChoiceField(choices=[("", "All statuses"), *OrderStatus.choices], required=False)
    search = forms.CharField(required=False, max_length=100)
    date_from = forms.DateField(required=False)
    date_to = forms.DateField(required=False)
    sort = forms.ChoiceField(choices=SORT_CHOICES, required=False)


def parse_order_ids(values) -> list[int]:
    """Integer ids from the selected checkboxes, ignoring junk values."""
    return [int(value) for value in values if str(value).strip().isdigit()]

"""Django admin for orders.

Items and history are read-only; status changes made here go through the
status service so a history row is always written.
"""

from django.contrib import admin, messages

from .models import Order, OrderItem, OrderStatus, OrderStatusHistory
from .services import bulk_transition_order_status


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ["product_sku", "product_name", "quantity", "unit_price", "size", "color"]

    def has_add_permission(self, request, obj=None):
        return False


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ["status", "notes", "actor", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


def _make_status_action(status):
    def action(modeladmin, request, queryset):
        result = bulk_transition_order_status(
            list(queryset.values_list("pk", flat=True)),
            status.value,
            notes=f"Status updated by admin to {status.value}",
            actor=request.user,
        )
        modeladmin.message_user(
            request,
            f"Updated {result.changed_count} of {result.success_count} orders to '{status.label}'",
            messages.SUCCESS,
        )

    action.__name__ = f"mark_{status.value}"
    action.short_description = f"Mark selected orders as {status.label.lower()}"
    return action


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "customer", "status", "total", "tracking_number", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["id", "tracking_number", "shipping_full_name", "customer__email"]
    date_hierarchy = "created_at"
    inlines = [OrderItemInline, OrderStatusHistoryInline]
    actions = [_make_status_action(status) for status in OrderStatus]
    readonly_fields = [
        "customer",
        "status",
        "subtotal",
        "shipping_fee",
        "tax",
        "total",
        "tracking_number",
        "created_at",
        "updated_at",
        "updated_by",
    ]

    def has_add_permission(self, request):
        # Orders only come from checkout
        return False

    def has_delete_permission(self, request, obj=None):
        # Orders, their items and their history are kept for good
        return False

"""Customer and staff order views."""

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect
from django.views.generic import DetailView, ListView, TemplateView

from drapes.catalog.models import Product
from drapes.catalog.services import get_low_stock_products
from drapes.core.mixins import CustomerRequiredMixin, StaffRequiredMixin
from drapes.store import conf

from .exceptions import InvalidStatusError, OrderNotFoundError
from .forms import BulkStatusForm, OrderFilterForm, OrderStatusForm, parse_order_ids
from .models import Order, OrderStatus
from .services import bulk_transition_order_status, get_status_history, transition_order_status

logger = logging.getLogger(__name__)


ORDER_SORTS = {
    "newest": "-created_at",
    "oldest": "created_at",
    "total_asc": "total",
    "total_desc": "-total",
}


# =============================================================================
# Customer views
# =============================================================================


class OrderListView(CustomerRequiredMixin, ListView):
    """The signed-in customer's orders, newest first."""

    template_name = "orders/order_list.html"
    context_object_name = "orders"
    paginate_by = 10

    def get_queryset(self):
        return (
            Order.objects.filter(customer=self.request.user)
            .prefetch_related("items")
            .order_by("-created_at")
        )


class OrderDetailView(CustomerRequiredMixin, DetailView):
    """Order detail with items and status timeline."""

    template_name = "orders/order_detail.html"
    context_object_name = "order"

    def get_queryset(self):
        # Customers only ever see their own orders
        return Order.objects.filter(customer=self.request.user).prefetch_related("items")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["status_history"] = get_status_history(self.object)
        return context


# =============================================================================
# Staff views
# =============================================================================


class StaffDashboardView(StaffRequiredMixin, TemplateView):
    """Back-office landing page: store counts, recent orders, low stock."""

    template_name = "staff/dashboard.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        threshold = conf.get_low_stock_threshold()
        context.update({
            "page_title": "Dashboard",
            "product_count": Product.objects.count(),
            "customer_count": get_user_model().objects.filter(is_staff=False).count(),
            "order_count": Order.objects.count(),
            "recent_orders": Order.objects.select_related("customer")[:5],
            "low_stock_products": get_low_stock_products(threshold),
            "low_stock_threshold": threshold,
        })
        return context


class StaffOrderListView(StaffRequiredMixin, ListView):
    """All orders with filters, sorting and bulk status actions."""

    template_name = "staff/order_list.html"
    context_object_name = "orders"
    paginate_by = 20

    def get_filter_form(self):
        if not hasattr(self, "_filter_form"):
            self._filter_form = OrderFilterForm(self.request.GET or None)
        return self._filter_form

    def get_queryset(self):
        queryset = (
            Order.objects.select_related("customer")
            .annotate(line_count=Count("items"))
        )

        form = self.get_filter_form()
        filters = form.cleaned_data if form.is_bound and form.is_valid() else {}

        if filters.get("status"):
            queryset = queryset.filter(status=filters["status"])

        search = filters.get("search")
        if search:
            condition = (
                Q(shipping_full_name__icontains=search)
                | Q(customer__email__icontains=search)
                | Q(customer__first_name__icontains=search)
                | Q(customer__last_name__icontains=search)
                | Q(tracking_number__icontains=search)
            )
            if search.isdigit():
                condition |= Q(pk=int(search))
            queryset = queryset.filter(condition)

        if filters.get("date_from"):
            queryset = queryset.filter(created_at__date__gte=filters["date_from"])

        if filters.get("date_to"):
            queryset = queryset.filter(created_at__date__lte=filters["date_to"])

        sort = filters.get("sort") or "newest"
        return queryset.order_by(ORDER_SORTS.get(sort, "-created_at"), "-pk")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["page_title"] = "Orders"
        context["filter_form"] = self.get_filter_form()
        context["bulk_form"] = BulkStatusForm()
        context["status_choices"] = OrderStatus.choices
        return context

    def post(self, request, *args, **kwargs):
        """Bulk status change for the selected orders."""
        form = BulkStatusForm(request.POST)
        order_ids = parse_order_ids(request.POST.getlist("order_ids"))

        if not order_ids:
            messages.warning(request, "No orders were selected for the action.")
            return redirect("staff:order-list")

        if not form.is_valid():
            messages.error(request, "Choose a valid status for the selected orders.")
            return redirect("staff:order-list")

        new_status = form.cleaned_data["bulk_action"]
        try:
            result = bulk_transition_order_status(
                order_ids,
                new_status,
                notes=form.cleaned_data["notes"],
                actor=request.user,
            )
        except DatabaseError:
            logger.exception("Error in bulk updating orders")
            messages.error(request, "Error updating orders. Please try again.")
            return redirect("staff:order-list")

        label = OrderStatus(new_status).label
        if result.changed_count:
            messages.success(
                request,
                f"Successfully updated status of {result.changed_count} orders to '{label}'",
            )
        else:
            messages.info(request, "No orders were updated. They may already have the selected status.")
        if result.failed_ids:
            messages.warning(request, f"{len(result.failed_ids)} selected orders could not be found.")

        return redirect("staff:order-list")


class StaffOrderDetailView(StaffRequiredMixin, DetailView):
    """Order detail for staff with a status update form."""

    template_name = "staff/order_detail.html"
    context_object_name = "order"

    def get_queryset(self):
        return Order.objects.select_related("customer", "updated_by").prefetch_related("items")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["page_title"] = f"Order #{self.object.pk}"
        context["status_history"] = get_status_history(self.object)
        context.setdefault("status_form", OrderStatusForm(initial={"status": self.object.status}))
        context["customer_order_count"] = Order.objects.filter(customer=self.object.customer).count()
        return context

    def post(self, request, *args, **kwargs):
        self.object = get_object_or_404(self.get_queryset(), pk=kwargs["pk"])
        form = OrderStatusForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Invalid status selected")
            return self.render_to_response(self.get_context_data(status_form=form))

        try:
            result = transition_order_status(
                self.object.pk,
                form.cleaned_data["status"],
                notes=form.cleaned_data["notes"],
                actor=request.user,
            )
        except (InvalidStatusError, OrderNotFoundError) as e:
            messages.error(request, f"Error updating order status: {e}")
            return redirect("staff:order-detail", pk=self.object.pk)
        except DatabaseError:
            logger.exception("Error updating status of order %s", self.object.pk)
            messages.error(request, "Error updating order status. Please try again.")
            return redirect("staff:order-detail", pk=self.object.pk)

        if result.changed:
            messages.success(
                request,
                f"Order status successfully updated to {result.order.get_status_display()}",
            )
        else:
            messages.info(
                request,
                f"Order status remains {result.order.get_status_display()} (no change needed)",
            )
        return redirect("staff:order-detail", pk=self.object.pk)

"""Staff back-office URL patterns."""

from django.urls import path

from .. import views

app_name = "staff"

urlpatterns = [
    path("", views.StaffDashboardView.as_view(), name="dashboard"),
    path("orders/", views.StaffOrderListView.as_view(), name="order-list"),
    path("orders/<int:pk>/", views.StaffOrderDetailView.as_view(), name="order-detail"),
]

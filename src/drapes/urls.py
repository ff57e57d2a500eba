"""URL configuration for the Elegant Drapes storefront."""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path

from drapes.core.views import health_check, index

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin
    path("admin/", admin.site.urls),

    # Authentication
    path("accounts/", include("django.contrib.auth.urls")),

    # Catalog
    path("products/", include("drapes.catalog.urls", namespace="catalog")),

    # Cart and checkout
    path("shop/", include("drapes.store.urls", namespace="store")),

    # Customer order history
    path("orders/", include("drapes.orders.urls.customer", namespace="orders")),

    # Customer profile and wishlist
    path("profile/", include("drapes.profile.urls", namespace="profile")),

    # Staff back office
    path("staff/", include("drapes.orders.urls.staff", namespace="staff")),

    path("", index, name="index"),
]

if settings.DEBUG and "debug_toolbar" in settings.INSTALLED_APPS:
    import debug_toolbar

    urlpatterns = [path("__debug__/", include(debug_toolbar.urls))] + urlpatterns

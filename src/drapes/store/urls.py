"""Cart, wishlist and checkout URL patterns."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    path("cart/", views.CartView.as_view(), name="cart"),
    path("cart/summary/", views.CartSummaryView.as_view(), name="cart-summary"),
    path("cart/add/", views.CartAddView.as_view(), name="cart-add"),
    path("cart/update/", views.CartUpdateView.as_view(), name="cart-update"),
    path("cart/remove/", views.CartRemoveView.as_view(), name="cart-remove"),
    path("cart/clear/", views.CartClearView.as_view(), name="cart-clear"),
    path("wishlist/add/", views.WishlistAddView.as_view(), name="wishlist-add"),
    path("wishlist/remove/", views.WishlistRemoveView.as_view(), name="wishlist-remove"),
    path("checkout/", views.CheckoutView.as_view(), name="checkout"),
    path("checkout/success/<int:order_id>/", views.CheckoutSuccessView.as_view(), name="checkout-success"),
]

"""Cart, wishlist and checkout views.

Cart endpoints answer JSON so the product and cart pages can update the
header badge without a reload:

    POST /shop/cart/add/      {"product_sku": "DRESS-1", "quantity": 2, "size": "M"}
    POST /shop/cart/update/   {"item_key": "[\"DRESS-1\",\"M\",\"\"]", "quantity": 3}
    POST /shop/cart/remove/   {"item_key": "[\"DRESS-1\",\"M\",\"\"]"}
    POST /shop/cart/clear/
    GET  /shop/cart/summary/

    POST /shop/wishlist/add/    {"product_sku": "DRESS-1"}
    POST /shop/wishlist/remove/ {"product_sku": "DRESS-1"}

Item keys are the "key" values returned in the cart summary. Form-encoded
bodies are accepted as well as JSON; text fields of any other type are
rejected with a 400.
"""

import json
import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views import View
from django.views.generic import DetailView, TemplateView

from drapes.catalog.models import Product
from drapes.catalog.services import get_product
from drapes.core.mixins import CustomerRequiredMixin
from drapes.orders.models import Order

from . import conf
from .cart import Cart
from .exceptions import CheckoutValidationError, EmptyCartError, InvalidFieldError, StockConflictError
from .forms import CheckoutForm
from .pricing import calculate_totals
from .services import add_to_wishlist, place_order, remove_from_wishlist

logger = logging.getLogger(__name__)


def get_request_data(request):
    """JSON body or form fields of a POST. None if the JSON is malformed."""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None
    return request.POST


def get_text(data, name) -> str:
    """Stripped text field of the request data; missing or null gives "".

    Raises:
        InvalidFieldError: If the field holds a number, list or object
    """
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidFieldError(name)
    return value.strip()


def error_response(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


def cart_response(cart, **extra):
    return JsonResponse({"success": True, **extra, **cart.to_dict()})


class JsonPostView(View):
    """Base for the JSON endpoints: parses the body, 400 on bad input."""

    def post(self, request, *args, **kwargs):
        data = get_request_data(request)
        if data is None:
            return error_response("Invalid JSON", 400)
        try:
            return self.handle(request, data)
        except InvalidFieldError as e:
            return error_response(str(e), 400)

    def handle(self, request, data):
        raise NotImplementedError


class CartJsonView(JsonPostView):
    """Base for the JSON cart endpoints."""

    def handle(self, request, data):
        return self.handle_cart(request, Cart.for_request(request), data)

    def handle_cart(self, request, cart, data):
        raise NotImplementedError


class CartAddView(CartJsonView):
    def handle_cart(self, request, cart, data):
        sku = get_text(data, "product_sku")
        if not sku:
            return error_response("Product SKU is required", 400)

        if get_product(sku) is None:
            return error_response("Product not found", 404)

        added = cart.add(
            sku,
            quantity=data.get("quantity", 1),
            size=get_text(data, "size") or None,
            color=get_text(data, "color") or None,
        )
        if not added:
            return error_response("Product is out of stock", 400)

        return cart_response(cart, message="Product added to cart")


class CartUpdateView(CartJsonView):
    def handle_cart(self, request, cart, data):
        if not cart.update(get_text(data, "item_key"), data.get("quantity", 0)):
            return error_response("Item not found in cart", 404)
        return cart_response(cart, message="Cart updated")


class CartRemoveView(CartJsonView):
    def handle_cart(self, request, cart, data):
        if not cart.remove(get_text(data, "item_key")):
            return error_response("Item not found in cart", 404)
        return cart_response(cart, message="Item removed from cart")


class CartClearView(CartJsonView):
    def handle_cart(self, request, cart, data):
        cart.clear()
        return cart_response(cart, message="Cart cleared")


class CartSummaryView(View):
    def get(self, request):
        return cart_response(Cart.for_request(request))


class WishlistJsonView(JsonPostView):
    """Base for the wishlist endpoints. Anonymous visitors get a 401."""

    def handle(self, request, data):
        if not request.user.is_authenticated:
            return error_response("login_required", 401)

        sku = get_text(data, "product_sku")
        if not sku:
            return error_response("Product SKU is required", 400)

        product = self.get_product(sku)
        if product is None:
            return error_response("Product not found", 404)
        return self.handle_product(request, product)

    def get_product(self, sku):
        return get_product(sku)

    def handle_product(self, request, product):
        raise NotImplementedError


class WishlistAddView(WishlistJsonView):
    def handle_product(self, request, product):
        if not add_to_wishlist(request.user, product):
            return JsonResponse({"success": True, "message": "already_in_wishlist"})
        return JsonResponse({"success": True, "message": "Product added to wishlist"})


class WishlistRemoveView(WishlistJsonView):
    def get_product(self, sku):
        # Saved products stay removable after they are taken off sale
        return Product.objects.filter(sku=sku).first()

    def handle_product(self, request, product):
        remove_from_wishlist(request.user, product)
        return JsonResponse({"success": True, "message": "Product removed from wishlist"})


class CartView(TemplateView):
    """Cart page with a totals preview."""

    template_name = "store/cart.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        cart = Cart.for_request(self.request)
        context["cart"] = cart
        context["totals"] = calculate_totals(cart.items()) if not cart.is_empty else None
        context["free_shipping_threshold"] = conf.get_free_shipping_threshold()
        return context


class CheckoutView(CustomerRequiredMixin, View):
    """Checkout form; places the order on POST."""

    template_name = "store/checkout.html"

    def render_form(self, request, cart, form):
        return render(
            request,
            self.template_name,
            {
                "form": form,
                "cart": cart,
                "totals": calculate_totals(cart.items()),
            },
        )

    def get(self, request):
        cart = Cart.for_request(request)
        if cart.is_empty:
            messages.info(request, "Your cart is empty.")
            return redirect("store:cart")
        form = CheckoutForm(initial=CheckoutForm.initial_for(request.user))
        return self.render_form(request, cart, form)

    def post(self, request):
        cart = Cart.for_request(request)
        try:
            order = place_order(cart, request.user, request.POST)
        except EmptyCartError:
            messages.info(request, "Your cart is empty.")
            return redirect("store:cart")
        except CheckoutValidationError:
            return self.render_form(request, cart, CheckoutForm(request.POST))
        except StockConflictError as e:
            messages.error(
                request,
                f"Not enough stock for {e.sku}. "
                "Please reduce the quantity in your cart.",
            )
            return self.render_form(request, cart, CheckoutForm(request.POST))
        except DatabaseError:
            logger.exception("Checkout failed for %s", request.user)
            messages.error(request, "We could not place your order. Please try again.")
            return self.render_form(request, cart, CheckoutForm(request.POST))

        messages.success(request, "Your order has been placed.")
        return redirect("store:checkout-success", order_id=order.pk)


class CheckoutSuccessView(CustomerRequiredMixin, DetailView):
    """Order confirmation page."""

    template_name = "store/checkout_success.html"
    context_object_name = "order"

    def get_object(self, queryset=None):
        return get_object_or_404(
            Order.objects.prefetch_related("items"),
            pk=self.kwargs["order_id"],
            customer=self.request.user,
        )

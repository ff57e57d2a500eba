"""Context processors for the store."""

from .cart import Cart


def cart_context(request):
    """Expose cart size and total to every template."""
    if not hasattr(request, "session"):
        return {}
    cart = Cart.for_request(request)
    return {
        "cart_count": cart.count(),
        "cart_total": cart.total(),
    }

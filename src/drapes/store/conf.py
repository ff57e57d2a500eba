"""Store configuration."""

from decimal import Decimal

from django.conf import settings


def get_config():
    """Get store configuration from settings."""
    defaults = {
        # Shipping
        "FREE_SHIPPING_THRESHOLD": "150.00",
        "FLAT_SHIPPING_FEE": "12.99",

        # Tax
        "TAX_RATE": "0.07",

        # Payment
        "PAYMENT_METHOD": "Cash on Delivery",

        # Session key holding the cart
        "CART_SESSION_KEY": "cart",

        # Staff dashboard flags products with less stock than this
        "LOW_STOCK_THRESHOLD": 10,
    }

    user_config = getattr(settings, "STORE", {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific store setting."""
    config = get_config()
    return config.get(name, default)


def get_free_shipping_threshold() -> Decimal:
    return Decimal(str(get_setting("FREE_SHIPPING_THRESHOLD")))


def get_flat_shipping_fee() -> Decimal:
    return Decimal(str(get_setting("FLAT_SHIPPING_FEE")))


def get_tax_rate() -> Decimal:
    return Decimal(str(get_setting("TAX_RATE")))


def get_cart_session_key() -> str:
    return get_setting("CART_SESSION_KEY", "cart")


def get_low_stock_threshold() -> int:
    return int(get_setting("LOW_STOCK_THRESHOLD", 10))

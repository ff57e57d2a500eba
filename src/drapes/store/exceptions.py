"""Exceptions raised by the cart and checkout services."""


class CheckoutError(Exception):
    """Base class for checkout failures. Nothing was persisted."""

    def __init__(self, message, errors=None):
        self.message = message
        self.errors = errors or {}
        super().__init__(message)


class EmptyCartError(CheckoutError):
    def __init__(self):
        super().__init__("Your cart is empty")


class CheckoutValidationError(CheckoutError, ValueError):
    """One or more contact/shipping fields are missing or malformed.

    errors maps field name to the list of messages for that field.
    """

    def __init__(self, errors):
        super().__init__("Please correct the errors below", errors=errors)


class StockConflictError(CheckoutError):
    """Not enough stock left for an item at order time."""

    def __init__(self, sku, requested, available=None):
        self.sku = sku
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough stock for {sku}: requested {requested}, available {available}"
        )


class InvalidFieldError(ValueError):
    """A request field was sent with the wrong type."""

    def __init__(self, field):
        self.field = field
        super().__init__(f"{field} must be a string")

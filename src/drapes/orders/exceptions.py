"""Exceptions raised by the order status services."""


class OrderError(Exception):
    """Base class for order errors."""


class OrderNotFoundError(OrderError):
    """No order exists with the given id."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class InvalidStatusError(OrderError, ValueError):
    """Status is not one of the known order statuses."""

    def __init__(self, status, valid_statuses):
        self.status = status
        self.valid_statuses = list(valid_statuses)
        super().__init__(f"Invalid status: {status}. Must be one of {self.valid_statuses}")


class ImmutableRecordError(OrderError):
    """Attempt to change an order item or history row after creation."""

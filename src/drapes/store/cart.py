"""Session shopping cart.

A Cart is built per request around a cart store and passed explicitly to
the views and the checkout service. The store only knows how to get, set
and delete the serialized cart; SessionCartStore keeps it in the visitor's
Django session, so carts are never shared between sessions.

Usage:
    cart = Cart.for_request(request)
    cart.add("DRESS-1", quantity=2, size="M", color="Black")
    cart.update(make_item_key("DRESS-1", "M", "Black"), 3)
    cart.total()
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from drapes.catalog.services import get_product, quote_variant

from . import conf

logger = logging.getLogger(__name__)


def make_item_key(sku: str, size: str | None = None, color: str | None = None) -> str:
    """Composite cart key for a product selection.

    The key is the JSON array [sku, size, color] with unchosen options as
    empty strings, so no SKU can spell the key of another selection.
    """
    return json.dumps([sku, size or "", color or ""], separators=(",", ":"))


def parse_quantity(value, default: int = 1) -> int:
    """Integer quantity from user input; unparseable input gives the default."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class CartItem:
    """One cart line. Quantity is at least 1 and the price is never negative."""

    sku: str
    name: str
    unit_price: Decimal
    quantity: int
    size: str = ""
    color: str = ""
    max_quantity: int = 0

    def __post_init__(self):
        try:
            self.unit_price = Decimal(str(self.unit_price))
        except InvalidOperation:
            raise ValueError(f"Invalid price for {self.sku}: {self.unit_price!r}")
        self.quantity = int(self.quantity)
        self.size = self.size or ""
        self.color = self.color or ""

        if self.quantity < 1:
            raise ValueError("Cart item quantity must be at least 1")
        if self.unit_price < 0:
            raise ValueError("Cart item price cannot be negative")

    @property
    def key(self) -> str:
        return make_item_key(self.sku, self.size, self.color)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        # Sessions are JSON serialized, so money travels as a string
        return {
            "sku": self.sku,
            "name": self.name,
            "price": str(self.unit_price),
            "quantity": self.quantity,
            "size": self.size,
            "color": self.color,
            "max_quantity": self.max_quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        return cls(
            sku=data["sku"],
            name=data.get("name", data["sku"]),
            unit_price=data["price"],
            quantity=data["quantity"],
            size=data.get("size", ""),
            color=data.get("color", ""),
            max_quantity=data.get("max_quantity", 0),
        )


class SessionCartStore:
    """Cart storage in a Django session (keyed by the session id)."""

    def __init__(self, session, key: str | None = None):
        self.session = session
        self.key = key or conf.get_cart_session_key()

    @property
    def session_key(self):
        return self.session.session_key

    def get(self) -> dict:
        data = self.session.get(self.key)
        if not isinstance(data, dict):
            return {}
        return data

    def set(self, data: dict) -> None:
        self.session[self.key] = data
        self.session.modified = True

    def delete(self) -> None:
        if self.key in self.session:
            del self.session[self.key]


class Cart:
    """The visitor's cart, written back to its store after every change."""

    def __init__(self, store):
        self.store = store
        self._items: dict[str, CartItem] = {}

        for key, data in self.store.get().items():
            try:
                item = CartItem.from_dict(data)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Dropping unreadable cart line %s: %s", key, e)
                continue
            # Lines are re-keyed from their own fields
            self._items[item.key] = item

    @classmethod
    def for_request(cls, request) -> "Cart":
        """Cart backed by the request's session."""
        return cls(SessionCartStore(request.session))

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def __iter__(self):
        return iter(list(self._items.values()))

    def __len__(self):
        return len(self._items)

    def __contains__(self, item_key):
        return item_key in self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_key: str) -> CartItem | None:
        return self._items.get(item_key)

    def items(self) -> list[CartItem]:
        return list(self._items.values())

    def count(self) -> int:
        """Number of distinct lines."""
        return len(self._items)

    def quantity(self) -> int:
        """Number of units across all lines."""
        return sum(item.quantity for item in self._items.values())

    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._items.values()), Decimal("0.00"))

    def to_dict(self) -> dict:
        return {
            "cart_count": self.count(),
            "cart_quantity": self.quantity(),
            "cart_total": str(self.total()),
            "items": [
                {**item.to_dict(), "key": item.key, "subtotal": str(item.subtotal)}
                for item in self._items.values()
            ],
        }

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, sku: str, quantity=1, size: str | None = None, color: str | None = None) -> bool:
        """Add a product selection or increase the quantity of an existing line.

        Quantity is clamped to the available stock; quantities below 1
        count as 1.

        Returns:
            False when the product does not exist or is out of stock.
        """
        quantity = parse_quantity(quantity)
        if quantity <= 0:
            quantity = 1

        product = get_product(sku)
        if product is None:
            return False

        quote = quote_variant(product, size=size, color=color)
        if quote.available_stock <= 0:
            return False

        key = make_item_key(product.sku, size, color)
        existing = self._items.get(key)
        if existing:
            existing.quantity = min(existing.quantity + quantity, quote.available_stock)
            existing.unit_price = quote.unit_price
            existing.max_quantity = quote.available_stock
        else:
            self._items[key] = CartItem(
                sku=product.sku,
                name=product.name,
                unit_price=quote.unit_price,
                quantity=min(quantity, quote.available_stock),
                size=size or "",
                color=color or "",
                max_quantity=quote.available_stock,
            )

        self._save()
        logger.debug("Cart %s: added %s x%d", self.store_key, key, quantity)
        return True

    def update(self, item_key: str, quantity) -> bool:
        """Set a line's quantity; 0 or less removes it.

        Quantities above the available stock are clamped to it.

        Returns:
            False when the key is not in the cart.
        """
        item = self._items.get(item_key)
        if item is None:
            return False

        quantity = parse_quantity(quantity, default=0)
        if quantity <= 0:
            return self.remove(item_key)

        available = self._available_for(item)
        if available <= 0:
            logger.info("Cart %s: %s is no longer available, removing", self.store_key, item_key)
            return self.remove(item_key)

        item.quantity = min(quantity, available)
        item.max_quantity = available
        self._save()
        return True

    def remove(self, item_key: str) -> bool:
        """Delete a line. Returns False (and changes nothing) if it is absent."""
        if item_key not in self._items:
            return False
        del self._items[item_key]
        self._save()
        return True

    def clear(self) -> None:
        self._items = {}
        self.store.delete()

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    @property
    def store_key(self):
        return getattr(self.store, "session_key", None)

    def _available_for(self, item: CartItem) -> int:
        product = get_product(item.sku)
        if product is None:
            return 0
        return quote_variant(product, size=item.size, color=item.color).available_stock

    def _save(self) -> None:
        if self._items:
            self.store.set({key: item.to_dict() for key, item in self._items.items()})
        else:
            self.store.delete()

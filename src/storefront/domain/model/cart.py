"""Cart aggregate — one per user, created lazily on first add.

A cart line captures the product price at the moment it was added.  The
snapshot is never recomputed; a later price change only shows up once
the item is removed and added again.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from storefront.domain.exceptions import CartItemNotFoundError, InvalidQuantityError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


def _new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CartItem:
    id: str
    product_id: str
    quantity: int
    price: Money  # snapshot at add time

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass
class Cart:
    """Aggregate root for a user's shopping cart.

    Stock checks compare against the stock observed at the time of the
    call.  Stock may change afterwards; the order flow re-checks it.
    """

    user_id: str
    items: list[CartItem] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int) -> CartItem:
        """Add *quantity* units, merging into an existing line for the product."""
        qty = Quantity(quantity).value
        existing = self.find_by_product(product.id)
        new_quantity = qty + (existing.quantity if existing else 0)
        product.ensure_stock_for(new_quantity)

        if existing is not None:
            existing.quantity = new_quantity
            return existing

        item = CartItem(
            id=_new_item_id(),
            product_id=product.id,
            quantity=qty,
            price=product.price,
        )
        self.items.append(item)
        return item

    def set_quantity(self, item_id: str, quantity: int, product: Product) -> CartItem:
        if quantity <= 0:
            raise InvalidQuantityError("Quantity must be greater than 0")
        item = self.get_item(item_id)
        product.ensure_stock_for(quantity)
        item.quantity = quantity
        return item

    def remove(self, item_id: str) -> None:
        """Drop a line; removing an absent line is a no-op."""
        self.items = [item for item in self.items if item.id != item_id]

    def clear(self) -> None:
        self.items = []

    # --- Queries --------------------------------------------------------------

    def get_item(self, item_id: str) -> CartItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise CartItemNotFoundError(item_id)

    def find_by_product(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> Money:
        currency = self.items[0].price.currency if self.items else DEFAULT_CURRENCY
        result = Money.of("0", currency)
        for item in self.items:
            result = result + item.line_total
        return result

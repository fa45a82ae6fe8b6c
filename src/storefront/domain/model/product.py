"""Product aggregate.

Products live independently of carts and orders.  Catalog editing is
handled elsewhere; this core only cares about price (snapshotted into
carts and orders) and stock, which it guards.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.  It goes down only through
    ``decrement_stock`` and up through ``restock`` / ``adjust_stock``.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category: str = ""
    seller_id: str | None = None

    def __post_init__(self) -> None:
        if self.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if self.stock < 0:
            raise ValidationError("Product stock cannot be negative")

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock

    def ensure_stock_for(self, quantity: int) -> None:
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(self.name, quantity, self.stock)

    def decrement_stock(self, quantity: int) -> None:
        qty = Quantity(quantity).value
        self.ensure_stock_for(qty)
        self.stock -= qty

    def restock(self, quantity: int) -> None:
        self.stock += Quantity(quantity).value

    def adjust_stock(self, new_level: int) -> None:
        if new_level < 0:
            raise ValidationError("Stock level cannot be negative")
        self.stock = new_level

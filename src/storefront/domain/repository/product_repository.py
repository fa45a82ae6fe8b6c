"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* from stock if at least that much is left.

        Returns False, leaving stock untouched, when stock is short or the
        product does not exist.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically add *quantity* to stock. Returns False if the product is gone."""

    @abstractmethod
    def set_stock(self, product_id: str, level: int) -> Product | None:
        """Atomically overwrite the stock level. Returns None if the product is gone."""

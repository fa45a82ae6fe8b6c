"""Domain service: Inventory Ledger.

Reads and moves product stock.  Every decrement is a single conditional
update on the repository (``decrement_stock_if_available``), so stock can
never go negative even when two orders race for the last units.

Decrementing for a whole order uses a two-phase approach: validate every
line first, then apply the conditional decrements.  If a decrement still
loses a race in phase 2 under ABORT, or the store fails part way, the
lines already applied are restocked before the error propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from storefront.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


class StockPolicy(Enum):
    """What to do with an order line whose product is missing or short.

    ABORT refuses the whole order.  SKIP logs the line and places the
    order without touching that product's stock.
    """

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class StockLine:
    product_id: str
    quantity: int
    name: str = ""


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Single-product operations --------------------------------------------

    def decrement(self, product_id: str, quantity: int) -> None:
        """Take *quantity* units out of stock, or fail leaving stock unchanged."""
        qty = Quantity(quantity).value
        if self._product_repo.decrement_stock_if_available(product_id, qty):
            return
        product = self._require(product_id)
        raise InsufficientStockError(product.name, qty, product.stock)

    def restock(self, product_id: str, quantity: int) -> None:
        qty = Quantity(quantity).value
        if not self._product_repo.increment_stock(product_id, qty):
            raise ProductNotFoundError(product_id)

    def adjust_stock(self, product_id: str, new_level: int) -> Product:
        product = self._product_repo.set_stock(product_id, new_level)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    # --- Order-level operations -----------------------------------------------

    def decrement_items(
        self, lines: list[StockLine], policy: StockPolicy = StockPolicy.ABORT
    ) -> list[StockLine]:
        """Decrement stock for every line; return the lines actually applied.

        Phase 1 — validate: every product exists and has enough stock for
                  the cumulative quantity ordered.  Under ABORT the first
                  bad line raises before anything is mutated.
        Phase 2 — apply: one conditional decrement per line.
        """
        accepted: list[StockLine] = []
        claimed: dict[str, int] = {}

        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                self._reject(line, policy, ProductNotFoundError(line.product_id))
                continue
            needed = claimed.get(line.product_id, 0) + line.quantity
            if not product.has_stock_for(needed):
                self._reject(
                    line,
                    policy,
                    InsufficientStockError(product.name, needed, product.stock),
                )
                continue
            claimed[line.product_id] = needed
            accepted.append(line)

        applied: list[StockLine] = []
        try:
            for line in accepted:
                if self._product_repo.decrement_stock_if_available(
                    line.product_id, line.quantity
                ):
                    applied.append(line)
                    continue

                # Stock moved between validation and the conditional update.
                current = self._product_repo.get_by_id(line.product_id)
                available = current.stock if current is not None else 0
                self._reject(
                    line,
                    policy,
                    InsufficientStockError(
                        line.name or line.product_id, line.quantity, available
                    ),
                )
        except DomainException:
            self.restock_items(applied)
            raise

        return applied

    def restock_items(self, lines: list[StockLine]) -> None:
        """Put stock back for *lines*; products deleted meanwhile are skipped."""
        for line in lines:
            if not self._product_repo.increment_stock(line.product_id, line.quantity):
                log.warning(
                    "inventory.restock_skipped",
                    product_id=line.product_id,
                    quantity=line.quantity,
                    reason="product not found",
                )

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def _reject(line: StockLine, policy: StockPolicy, error: Exception) -> None:
        if policy is StockPolicy.ABORT:
            raise error
        log.warning(
            "inventory.line_skipped",
            product_id=line.product_id,
            quantity=line.quantity,
            reason=str(error),
        )

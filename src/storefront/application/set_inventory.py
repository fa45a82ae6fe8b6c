"""Application service: Set Inventory use case (absolute stock level)."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductStockDTO
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

log = structlog.get_logger(__name__)


class SetInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, stock: int) -> ProductStockDTO:
        """Overwrite the stock level of a product (e.g. after a stock count)."""
        product = InventoryLedger(self._product_repo).adjust_stock(product_id, stock)
        log.info("inventory.adjusted", product_id=product_id, stock=product.stock)
        return ProductStockDTO.from_product(product)

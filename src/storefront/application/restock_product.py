"""Application service: Restock Product use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductStockDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger

log = structlog.get_logger(__name__)


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> ProductStockDTO:
        InventoryLedger(self._product_repo).restock(product_id, quantity)
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        log.info("inventory.restocked", product_id=product_id, quantity=quantity)
        return ProductStockDTO.from_product(product)

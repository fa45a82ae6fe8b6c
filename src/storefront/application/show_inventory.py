"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductStockDTO
from storefront.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductStockDTO]:
        return [
            ProductStockDTO.from_product(product)
            for product in self._product_repo.list_all()
        ]

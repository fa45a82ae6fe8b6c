"""JSON-file-backed implementation of ProductRepository.

Stock updates read, modify and write the file under one lock, which
makes ``decrement_stock_if_available`` the conditional update the
inventory ledger relies on (within this process).
"""

from __future__ import annotations

import json
import threading
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load_raw()
            for i, raw in enumerate(products):
                if raw["id"] == product.id:
                    products[i] = self._to_raw(product)
                    break
            else:
                products.append(self._to_raw(product))
            self._persist_raw(products)

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        with self._lock:
            products = self._load_raw()
            raw = self._find(products, product_id)
            if raw is None or raw.get("stock", 0) < quantity:
                return False
            raw["stock"] = raw.get("stock", 0) - quantity
            self._persist_raw(products)
            return True

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        with self._lock:
            products = self._load_raw()
            raw = self._find(products, product_id)
            if raw is None:
                return False
            raw["stock"] = raw.get("stock", 0) + quantity
            self._persist_raw(products)
            return True

    def set_stock(self, product_id: str, level: int) -> Product | None:
        with self._lock:
            products = self._load_raw()
            raw = self._find(products, product_id)
            if raw is None:
                return None
            product = self._to_domain(raw)
            product.adjust_stock(level)
            raw["stock"] = product.stock
            self._persist_raw(products)
            return product

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "category": product.category,
            "seller_id": product.seller_id,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        try:
            price = Money(Decimal(str(raw["price"])), raw.get("currency", DEFAULT_CURRENCY))
        except (InvalidOperation, KeyError) as exc:
            raise PersistenceError(f"Corrupt product record: {raw.get('id')!r}") from exc
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=price,
            stock=raw.get("stock", 0),
            category=raw.get("category", ""),
            seller_id=raw.get("seller_id"),
        )

    @staticmethod
    def _find(products: list[dict], product_id: str) -> dict | None:
        for raw in products:
            if raw["id"] == product_id:
                return raw
        return None

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, products: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(products, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

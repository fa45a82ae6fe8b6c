"""JSON-file-backed implementation of CartRepository (one document per user)."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def get_by_user(self, user_id: str) -> Cart | None:
        raw = self._load_raw().get(user_id)
        if raw is None:
            return None
        return self._to_domain(user_id, raw)

    def save(self, cart: Cart) -> None:
        carts = self._load_raw()
        carts[cart.user_id] = self._to_raw(cart)
        self._persist_raw(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(user_id: str, raw: dict) -> Cart:
        return Cart(
            user_id=user_id,
            items=[
                CartItem(
                    id=i["id"],
                    product_id=i["product_id"],
                    quantity=i["quantity"],
                    price=Money(Decimal(i["price"]), i.get("currency", DEFAULT_CURRENCY)),
                )
                for i in raw.get("items", [])
            ],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, carts: dict[str, dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(carts, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")

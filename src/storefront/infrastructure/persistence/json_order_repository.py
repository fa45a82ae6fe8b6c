"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentInfo,
    PriceBreakdown,
    ShippingInfo,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_payment_id(self, payment_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["payment"]["id"] == payment_id:
                return self._to_domain(raw)
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw() if raw["user_id"] == user_id]

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                break
        else:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    def delete(self, order_id: int) -> None:
        orders = self._load_raw()
        self._persist_raw([o for o in orders if o["id"] != order_id])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        currency = order.prices.total_price.currency
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "shipping": {
                "address": order.shipping.address,
                "city": order.shipping.city,
                "state": order.shipping.state,
                "country": order.shipping.country,
                "pincode": order.shipping.pincode,
                "phone_number": order.shipping.phone_number,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "price": str(item.price.amount),
                    "quantity": item.quantity.value,
                    "image": item.image,
                    "stock_taken": item.stock_taken,
                }
                for item in order.items
            ],
            "payment": {
                "id": order.payment.id,
                "status": order.payment.status,
                "gateway": order.payment.gateway,
            },
            "prices": {
                "item": str(order.prices.item_price.amount),
                "tax": str(order.prices.tax_price.amount),
                "shipping": str(order.prices.shipping_price.amount),
                "total": str(order.prices.total_price.amount),
            },
            "currency": currency,
            "created_at": _timestamp(order.created_at),
            "paid_at": _timestamp(order.paid_at),
            "delivered_at": _timestamp(order.delivered_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw["currency"]

        def money(value: str) -> Money:
            return Money(Decimal(value), currency)

        prices = raw["prices"]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            shipping=ShippingInfo(**raw["shipping"]),
            items=[
                OrderLineItem(
                    product_id=i["product_id"],
                    name=i["name"],
                    price=money(i["price"]),
                    quantity=Quantity(i["quantity"]),
                    image=i.get("image"),
                    stock_taken=i.get("stock_taken", True),
                )
                for i in raw["items"]
            ],
            payment=PaymentInfo(**raw["payment"]),
            prices=PriceBreakdown(
                item_price=money(prices["item"]),
                tax_price=money(prices["tax"]),
                shipping_price=money(prices["shipping"]),
                total_price=money(prices["total"]),
            ),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            paid_at=_parse_timestamp(raw.get("paid_at")),
            delivered_at=_parse_timestamp(raw.get("delivered_at")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, orders: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(orders, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

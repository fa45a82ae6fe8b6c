"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data from the application layer to the boundary without
exposing domain internals.  ``to_dict`` renders the JSON payload the
boundary wraps in ``{"success": true, ...}``; money is rendered as a
two-decimal string so no float ever carries an amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.payment import PaymentIntent
from storefront.domain.model.product import Product


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# --- Cart --------------------------------------------------------------------


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    quantity: int
    price: Decimal  # snapshot taken when the item was added
    line_total: Decimal

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product": self.product_id,
            "quantity": self.quantity,
            "price": _money(self.price),
            "lineTotal": _money(self.line_total),
        }


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartItemDTO]
    total_quantity: int
    total_price: Decimal
    currency: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        total = cart.total
        return CartDTO(
            user_id=cart.user_id,
            items=[
                CartItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price.amount,
                    line_total=item.line_total.amount,
                )
                for item in cart.items
            ],
            total_quantity=cart.total_quantity,
            total_price=total.amount,
            currency=total.currency,
        )

    def to_dict(self) -> dict:
        return {
            "user": self.user_id,
            "items": [item.to_dict() for item in self.items],
            "totalQuantity": self.total_quantity,
            "totalPrice": _money(self.total_price),
            "currency": self.currency,
        }


# --- Order -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    name: str
    price: Decimal
    quantity: int
    image: str | None

    def to_dict(self) -> dict:
        return {
            "product": self.product_id,
            "name": self.name,
            "price": _money(self.price),
            "quantity": self.quantity,
            "image": self.image,
        }


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as returned to the client."""

    id: int
    user_id: str
    status: str
    shipping_info: dict
    items: list[OrderLineItemDTO]
    payment_id: str
    payment_status: str
    payment_method: str
    item_price: Decimal
    tax_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    currency: str
    created_at: str | None
    paid_at: str | None
    delivered_at: str | None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        shipping = order.shipping
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            shipping_info={
                "address": shipping.address,
                "city": shipping.city,
                "state": shipping.state,
                "country": shipping.country,
                "pincode": shipping.pincode,
                "phoneNumber": shipping.phone_number,
            },
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    name=item.name,
                    price=item.price.amount,
                    quantity=item.quantity.value,
                    image=item.image,
                )
                for item in order.items
            ],
            payment_id=order.payment.id,
            payment_status=order.payment.status,
            payment_method=order.payment.gateway,
            item_price=order.prices.item_price.amount,
            tax_price=order.prices.tax_price.amount,
            shipping_price=order.prices.shipping_price.amount,
            total_price=order.prices.total_price.amount,
            currency=order.prices.total_price.currency,
            created_at=_timestamp(order.created_at),
            paid_at=_timestamp(order.paid_at),
            delivered_at=_timestamp(order.delivered_at),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user": self.user_id,
            "orderStatus": self.status,
            "shippingInfo": dict(self.shipping_info),
            "orderItems": [item.to_dict() for item in self.items],
            "paymentInfo": {
                "id": self.payment_id,
                "status": self.payment_status,
                "paymentMethod": self.payment_method,
            },
            "itemPrice": _money(self.item_price),
            "taxPrice": _money(self.tax_price),
            "shippingPrice": _money(self.shipping_price),
            "totalPrice": _money(self.total_price),
            "currency": self.currency,
            "createdAt": self.created_at,
            "paidAt": self.paid_at,
            "deliveredAt": self.delivered_at,
        }


@dataclass(frozen=True)
class OrderListDTO:
    orders: list[OrderDTO]
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "orders": [order.to_dict() for order in self.orders],
            "totalAmount": _money(self.total_amount),
        }


# --- Inventory / payment -----------------------------------------------------


@dataclass(frozen=True)
class ProductStockDTO:
    product_id: str
    name: str
    stock: int
    price: Decimal

    @staticmethod
    def from_product(product: Product) -> ProductStockDTO:
        return ProductStockDTO(
            product_id=product.id,
            name=product.name,
            stock=product.stock,
            price=product.price.amount,
        )

    def to_dict(self) -> dict:
        return {
            "product": self.product_id,
            "name": self.name,
            "stock": self.stock,
            "price": _money(self.price),
        }


@dataclass(frozen=True)
class PaymentIntentDTO:
    gateway: str
    id: str
    amount: int  # minor units
    currency: str
    client_secret: str | None
    demo: bool

    @staticmethod
    def from_intent(intent: PaymentIntent) -> PaymentIntentDTO:
        return PaymentIntentDTO(
            gateway=intent.gateway.value,
            id=intent.id,
            amount=intent.amount,
            currency=intent.currency,
            client_secret=intent.client_secret,
            demo=intent.demo,
        )

    def to_dict(self) -> dict:
        payload = {
            "gateway": self.gateway,
            "id": self.id,
            "amount": self.amount,
            "currency": self.currency,
            "clientSecret": self.client_secret,
        }
        if self.demo:
            payload["demo"] = True
        return payload

"""Order aggregate — the core of the domain.

An Order is materialized only after its payment has been verified.  From
then on it is immutable apart from its status and delivery timestamp,
which move through ``transition_to``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    AlreadyDeliveredError,
    InvalidShippingFieldError,
    InvalidStatusTransitionError,
    OrderNotDeletableError,
    ValidationError,
)
from storefront.domain.model.payment import VerifiedPayment
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# Processing -> Shipped -> Delivered, or Processing -> Cancelled.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def _parse_numeric(field_name: str, raw: str | int) -> int:
    if isinstance(raw, bool):
        raise InvalidShippingFieldError(field_name, raw)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidShippingFieldError(field_name, raw)
    return int(text)


@dataclass(frozen=True)
class ShippingInfo:
    address: str
    city: str
    state: str
    country: str
    pincode: int
    phone_number: int

    @staticmethod
    def parse(
        address: str,
        city: str,
        state: str,
        country: str,
        pincode: str | int,
        phone_number: str | int,
    ) -> ShippingInfo:
        """Build shipping info, rejecting non-numeric pincode or phone number."""
        for name, value in (
            ("address", address),
            ("city", city),
            ("state", state),
            ("country", country),
        ):
            if not value or not value.strip():
                raise ValidationError(f"Shipping {name} is required")
        return ShippingInfo(
            address=address.strip(),
            city=city.strip(),
            state=state.strip(),
            country=country.strip(),
            pincode=_parse_numeric("pincode", pincode),
            phone_number=_parse_numeric("phone number", phone_number),
        )


@dataclass(frozen=True)
class OrderLineItem:
    """Denormalized snapshot of a product as ordered; not a live join."""

    product_id: str
    name: str
    price: Money
    quantity: Quantity
    image: str | None = None
    # False when the line was skipped under StockPolicy.SKIP; nothing to restock.
    stock_taken: bool = True

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass(frozen=True)
class PaymentInfo:
    id: str
    status: str
    gateway: str

    @staticmethod
    def from_verified(payment: VerifiedPayment) -> PaymentInfo:
        method = payment.gateway.value + ("_demo" if payment.demo else "")
        return PaymentInfo(
            id=payment.transaction_id,
            status=payment.settlement_status,
            gateway=method,
        )


@dataclass(frozen=True)
class PriceBreakdown:
    """Client-supplied price breakdown.

    The total is trusted as the amount to charge; the payment verifier
    checks it against what the gateway actually captured.
    """

    item_price: Money
    tax_price: Money
    shipping_price: Money
    total_price: Money

    def __post_init__(self) -> None:
        currencies = {
            self.item_price.currency,
            self.tax_price.currency,
            self.shipping_price.currency,
            self.total_price.currency,
        }
        if len(currencies) != 1:
            raise ValidationError("Price breakdown mixes currencies")
        if self.total_price.is_zero:
            raise ValidationError("Total price must be greater than zero")


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    shipping: ShippingInfo
    items: list[OrderLineItem]
    payment: PaymentInfo
    prices: PriceBreakdown
    status: OrderStatus = OrderStatus.PROCESSING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    paid_at: datetime | None = None
    delivered_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        shipping: ShippingInfo,
        items: list[OrderLineItem],
        payment: VerifiedPayment,
        prices: PriceBreakdown,
        now: datetime | None = None,
    ) -> Order:
        """Create a new order from a verified payment, enforcing invariants."""
        if not user_id or not user_id.strip():
            raise ValidationError("Order owner is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        timestamp = now or datetime.now(timezone.utc)
        return Order(
            id=None,
            user_id=user_id,
            shipping=shipping,
            items=list(items),
            payment=PaymentInfo.from_verified(payment),
            prices=prices,
            status=OrderStatus.PROCESSING,
            created_at=timestamp,
            paid_at=timestamp,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus, now: datetime | None = None) -> None:
        """Move the order along its lifecycle.

        Delivered and Cancelled are terminal.  Stock restoration on
        cancellation is coordinated by the application handler.
        """
        if self.status == OrderStatus.DELIVERED:
            raise AlreadyDeliveredError(self.id)
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.status.value, new_status.value)

        self.status = new_status
        if new_status == OrderStatus.DELIVERED:
            self.delivered_at = now or datetime.now(timezone.utc)

    def ensure_deletable(self) -> None:
        """Only delivered orders may be deleted; in-flight ones are cancelled instead."""
        if self.status != OrderStatus.DELIVERED:
            raise OrderNotDeletableError(self.id, self.status.value)

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return self.prices.total_price

"""Payment value types.

Nothing here is persisted as-is.  A ``PaymentConfirmation`` lives only for
the duration of a verification; its outcome survives as the ``PaymentInfo``
embedded into the Order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GatewayKind(Enum):
    RAZORPAY = "razorpay"
    STRIPE = "stripe"


class PaymentStatus(Enum):
    CREATED = "created"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Gateway-reported statuses a payment may be in for an order to be placed.
ACCEPTED_STATUSES: dict[GatewayKind, frozenset[PaymentStatus]] = {
    GatewayKind.RAZORPAY: frozenset({PaymentStatus.CAPTURED, PaymentStatus.AUTHORIZED}),
    GatewayKind.STRIPE: frozenset({PaymentStatus.SUCCEEDED}),
}

# Gateways whose client-side confirmation is signed with the key secret.
SIGNATURE_BASED = frozenset({GatewayKind.RAZORPAY})


@dataclass(frozen=True)
class PaymentConfirmation:
    """What the client claims happened at the gateway.

    Only the ids and the signature are trusted.  ``claimed_status`` and
    ``claimed_amount`` are compared against the gateway's record for
    logging, never used to decide.
    """

    payment_id: str
    gateway_order_id: str | None = None
    signature: str | None = None
    claimed_status: str | None = None
    claimed_amount: int | None = None  # minor units


@dataclass(frozen=True)
class GatewayPayment:
    """Authoritative payment record as fetched from the gateway."""

    id: str
    status: str
    amount: int  # minor units
    currency: str | None = None


@dataclass(frozen=True)
class VerifiedPayment:
    gateway: GatewayKind
    transaction_id: str
    status: PaymentStatus
    amount: int  # minor units
    currency: str
    demo: bool = False

    @property
    def settlement_status(self) -> str:
        """``succeeded`` once money is captured, ``pending`` while only authorized."""
        if self.status is PaymentStatus.AUTHORIZED:
            return "pending"
        return "succeeded"


@dataclass(frozen=True)
class PaymentIntent:
    gateway: GatewayKind
    id: str
    amount: int  # minor units
    currency: str
    client_secret: str | None = None
    demo: bool = False


@dataclass(frozen=True)
class WebhookEvent:
    gateway: GatewayKind
    type: str
    payment_id: str | None

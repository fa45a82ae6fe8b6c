"""Abstract payment gateway ports.

Concrete adapters wrap a vendor SDK client that is built once by the
composition root and injected; the domain never talks to an SDK directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment import (
    GatewayKind,
    GatewayPayment,
    PaymentIntent,
    WebhookEvent,
)


class PaymentGateway(ABC):

    kind: GatewayKind

    @abstractmethod
    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        """Ask the gateway to open a payment for *amount* minor units."""

    @abstractmethod
    def fetch_payment(self, payment_id: str) -> GatewayPayment:
        """Return the gateway's own record of a payment."""


class WebhookSource(ABC):
    """A gateway whose webhooks are verified with the vendor's own scheme.

    Gateways that sign webhooks with a plain body HMAC are verified by
    ``PaymentVerifier`` directly and do not implement this.
    """

    @abstractmethod
    def construct_webhook_event(
        self, raw_body: bytes, signature: str, secret: str
    ) -> WebhookEvent:
        """Verify *signature* over *raw_body* and parse the event."""

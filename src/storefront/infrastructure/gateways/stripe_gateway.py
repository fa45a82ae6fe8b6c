"""Stripe adapter for the PaymentGateway port.

PaymentIntents are the intents here.  Stripe has no client-side
signature; trust comes from retrieving the intent server-side.  Webhooks
use Stripe's own timestamped signature scheme, verified by the SDK.
"""

from __future__ import annotations

import stripe
import structlog

from storefront.domain.exceptions import (
    GatewayError,
    SignatureInvalidError,
    ValidationError,
)
from storefront.domain.gateway.payment_gateway import PaymentGateway, WebhookSource
from storefront.domain.model.payment import (
    GatewayKind,
    GatewayPayment,
    PaymentIntent,
    WebhookEvent,
)

log = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway, WebhookSource):

    kind = GatewayKind.STRIPE

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency.lower(),
                metadata={"receipt": receipt},
                automatic_payment_methods={"enabled": True},
                api_key=self._api_key,
            )
        except stripe.StripeError as exc:
            log.error("stripe.intent_create_failed", receipt=receipt, error=str(exc))
            raise GatewayError(f"Stripe PaymentIntent creation failed: {exc}") from exc

        return PaymentIntent(
            gateway=self.kind,
            id=intent.id,
            amount=intent.amount,
            currency=intent.currency.upper(),
            client_secret=intent.client_secret,
        )

    def fetch_payment(self, payment_id: str) -> GatewayPayment:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_id, api_key=self._api_key)
        except stripe.StripeError as exc:
            log.error("stripe.intent_fetch_failed", payment_id=payment_id, error=str(exc))
            raise GatewayError(f"Stripe PaymentIntent lookup failed: {exc}") from exc

        return GatewayPayment(
            id=intent.id,
            status=intent.status,
            amount=intent.amount,
            currency=intent.currency.upper() if intent.currency else None,
        )

    def construct_webhook_event(
        self, raw_body: bytes, signature: str, secret: str
    ) -> WebhookEvent:
        try:
            event = stripe.Webhook.construct_event(raw_body, signature, secret)
        except stripe.SignatureVerificationError as exc:
            raise SignatureInvalidError("Invalid webhook signature") from exc
        except ValueError as exc:
            raise ValidationError("Webhook body is not valid JSON") from exc

        obj = event.data.object
        return WebhookEvent(gateway=self.kind, type=event.type, payment_id=getattr(obj, "id", None))

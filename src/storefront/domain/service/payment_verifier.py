"""Domain service: Payment Verifier.

Decides whether a client's payment confirmation can be trusted before an
order is materialized.  Three checks, in order:

1. Signature — for signature-based gateways, an HMAC-SHA256 of
   ``"<gateway order id>|<payment id>"`` under the shared key secret,
   compared in constant time.
2. Status — fetched from the gateway itself; the client's claim is ignored.
3. Amount — the gateway-reported minor-unit amount (and currency) must
   equal the expected total.

The verifier holds no mutable state and persists nothing, so verifying
the same confirmation twice always gives the same answer.

Demo mode skips every external call and fabricates a confirmed result.
It is switched on only through configuration, which refuses to enable it
in production.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from collections.abc import Mapping

import structlog

from storefront.domain.exceptions import (
    AmountMismatchError,
    ConfigurationError,
    PaymentNotConfirmedError,
    SignatureInvalidError,
    ValidationError,
)
from storefront.domain.gateway.payment_gateway import PaymentGateway, WebhookSource
from storefront.domain.model.payment import (
    ACCEPTED_STATUSES,
    SIGNATURE_BASED,
    GatewayKind,
    GatewayPayment,
    PaymentConfirmation,
    PaymentIntent,
    PaymentStatus,
    VerifiedPayment,
    WebhookEvent,
)
from storefront.domain.model.value_objects import Money

log = structlog.get_logger(__name__)

_DEMO_INTENT_PREFIX = {
    GatewayKind.RAZORPAY: "order_demo",
    GatewayKind.STRIPE: "pi_demo",
}


def sign(secret: str, message: str | bytes) -> str:
    """Hex HMAC-SHA256 of *message* under *secret*."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def signatures_match(expected: str, given: str) -> bool:
    """Constant-time comparison that tolerates any client-supplied text."""
    return hmac.compare_digest(
        expected.encode("utf-8"), given.encode("utf-8", "surrogatepass")
    )


class PaymentVerifier:

    def __init__(
        self,
        gateways: Mapping[GatewayKind, PaymentGateway] | None = None,
        signing_secrets: Mapping[GatewayKind, str] | None = None,
        webhook_secrets: Mapping[GatewayKind, str] | None = None,
        demo_mode: bool = False,
    ) -> None:
        self._gateways = dict(gateways or {})
        self._signing_secrets = dict(signing_secrets or {})
        self._webhook_secrets = dict(webhook_secrets or {})
        self._demo_mode = demo_mode

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode

    # --- Gateway-facing half --------------------------------------------------

    def create_intent(self, kind: GatewayKind, amount: Money, receipt: str) -> PaymentIntent:
        """Open a payment at the gateway for *amount*."""
        minor = amount.to_minor_units()
        if minor <= 0:
            raise ValidationError("Amount is required and must be positive")

        if self._demo_mode:
            intent_id = f"{_DEMO_INTENT_PREFIX[kind]}_{receipt}"
            secret = f"{intent_id}_secret" if kind is GatewayKind.STRIPE else None
            return PaymentIntent(
                gateway=kind,
                id=intent_id,
                amount=minor,
                currency=amount.currency,
                client_secret=secret,
                demo=True,
            )

        return self._gateway(kind).create_intent(minor, amount.currency, receipt)

    # --- Confirmation ---------------------------------------------------------

    def verify_confirmation(
        self,
        kind: GatewayKind,
        confirmation: PaymentConfirmation,
        expected_amount: Money,
    ) -> VerifiedPayment:
        """Return a VerifiedPayment or raise a PaymentVerificationError."""
        if not confirmation.payment_id:
            raise ValidationError("Payment id is required")
        expected_minor = expected_amount.to_minor_units()

        if self._demo_mode:
            return self._demo_result(kind, confirmation, expected_amount)

        if kind in SIGNATURE_BASED:
            self._check_signature(kind, confirmation)

        reported = self._gateway(kind).fetch_payment(confirmation.payment_id)
        self._log_disputed_claims(kind, confirmation, reported)
        status = self._accepted_status(kind, reported)
        self._check_amount(reported, expected_minor, expected_amount.currency)

        return VerifiedPayment(
            gateway=kind,
            transaction_id=reported.id,
            status=status,
            amount=reported.amount,
            currency=expected_amount.currency,
        )

    # --- Webhooks -------------------------------------------------------------

    def verify_webhook(
        self, kind: GatewayKind, raw_body: bytes, signature: str | None
    ) -> WebhookEvent:
        secret = self._webhook_secrets.get(kind)
        if not secret:
            raise SignatureInvalidError(f"No webhook secret configured for {kind.value}")
        if not signature:
            raise SignatureInvalidError("Webhook signature header is missing")

        if kind not in SIGNATURE_BASED:
            gateway = self._gateway(kind)
            if not isinstance(gateway, WebhookSource):
                raise ConfigurationError(f"{kind.value} gateway cannot verify webhooks")
            return gateway.construct_webhook_event(raw_body, signature, secret)

        if not signatures_match(sign(secret, raw_body), signature):
            raise SignatureInvalidError("Invalid webhook signature")
        return self._parse_signed_webhook(kind, raw_body)

    # --- Internal helpers -----------------------------------------------------

    def _gateway(self, kind: GatewayKind) -> PaymentGateway:
        gateway = self._gateways.get(kind)
        if gateway is None:
            raise ConfigurationError(f"{kind.value} configuration missing")
        return gateway

    def _check_signature(self, kind: GatewayKind, confirmation: PaymentConfirmation) -> None:
        secret = self._signing_secrets.get(kind)
        if not secret:
            raise ConfigurationError(f"{kind.value} key secret missing")
        if not confirmation.gateway_order_id or not confirmation.signature:
            raise SignatureInvalidError("Payment signature is missing")

        expected = sign(secret, f"{confirmation.gateway_order_id}|{confirmation.payment_id}")
        if not signatures_match(expected, confirmation.signature):
            raise SignatureInvalidError("Payment verification failed")

    @staticmethod
    def _log_disputed_claims(
        kind: GatewayKind, confirmation: PaymentConfirmation, reported: GatewayPayment
    ) -> None:
        disputed = {}
        if confirmation.claimed_status not in (None, reported.status):
            disputed["claimed_status"] = confirmation.claimed_status
        if confirmation.claimed_amount not in (None, reported.amount):
            disputed["claimed_amount"] = confirmation.claimed_amount
        if disputed:
            log.warning(
                "payment.claim_disputed",
                gateway=kind.value,
                payment_id=reported.id,
                status=reported.status,
                amount=reported.amount,
                **disputed,
            )

    @staticmethod
    def _accepted_status(kind: GatewayKind, reported: GatewayPayment) -> PaymentStatus:
        try:
            status = PaymentStatus(reported.status)
        except ValueError:
            raise PaymentNotConfirmedError(reported.id, reported.status) from None
        if status not in ACCEPTED_STATUSES[kind]:
            raise PaymentNotConfirmedError(reported.id, reported.status)
        return status

    @staticmethod
    def _check_amount(reported: GatewayPayment, expected: int, currency: str) -> None:
        if reported.amount != expected:
            raise AmountMismatchError(expected, reported.amount, currency)
        if reported.currency and reported.currency.upper() != currency.upper():
            raise AmountMismatchError(expected, reported.amount, reported.currency.upper())

    @staticmethod
    def _demo_result(
        kind: GatewayKind, confirmation: PaymentConfirmation, expected: Money
    ) -> VerifiedPayment:
        status = (
            PaymentStatus.CAPTURED if kind is GatewayKind.RAZORPAY else PaymentStatus.SUCCEEDED
        )
        log.warning("payment.demo_verified", gateway=kind.value, payment_id=confirmation.payment_id)
        return VerifiedPayment(
            gateway=kind,
            transaction_id=confirmation.payment_id,
            status=status,
            amount=expected.to_minor_units(),
            currency=expected.currency,
            demo=True,
        )

    @staticmethod
    def _parse_signed_webhook(kind: GatewayKind, raw_body: bytes) -> WebhookEvent:
        try:
            body = json.loads(raw_body)
        except ValueError as exc:
            raise ValidationError("Webhook body is not valid JSON") from exc
        if not isinstance(body, dict) or "event" not in body:
            raise ValidationError("Webhook body has no event")

        node = body
        for key in ("payload", "payment", "entity"):
            node = node.get(key)
            if node is None:
                return WebhookEvent(gateway=kind, type=body["event"], payment_id=None)
            if not isinstance(node, dict):
                raise ValidationError(f"Webhook field '{key}' must be an object")
        payment_id = node.get("id")
        if payment_id is not None and not isinstance(payment_id, str):
            raise ValidationError("Webhook payment id must be a string")
        return WebhookEvent(gateway=kind, type=body["event"], payment_id=payment_id)

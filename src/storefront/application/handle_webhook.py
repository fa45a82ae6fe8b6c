"""Application service: Handle Payment Webhook use case.

Webhooks are informational here: the order itself is created through the
verify-and-create flow.  A webhook is authenticated and then logged.
"""

from __future__ import annotations

import structlog

from storefront.domain.model.payment import GatewayKind, WebhookEvent
from storefront.domain.service.payment_verifier import PaymentVerifier

log = structlog.get_logger(__name__)

CAPTURED_EVENTS = frozenset({"payment.captured", "payment_intent.succeeded"})
FAILED_EVENTS = frozenset({"payment.failed", "payment_intent.payment_failed"})


class HandleWebhookHandler:

    def __init__(self, verifier: PaymentVerifier) -> None:
        self._verifier = verifier

    def handle(
        self, gateway: GatewayKind, raw_body: bytes, signature: str | None
    ) -> WebhookEvent:
        event = self._verifier.verify_webhook(gateway, raw_body, signature)

        if event.type in CAPTURED_EVENTS:
            log.info("webhook.payment_captured", gateway=gateway.value, payment_id=event.payment_id)
        elif event.type in FAILED_EVENTS:
            log.warning("webhook.payment_failed", gateway=gateway.value, payment_id=event.payment_id)
        else:
            log.info("webhook.unhandled", gateway=gateway.value, event_type=event.type)
        return event

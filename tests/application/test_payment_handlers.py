"""Integration tests for payment intents and webhooks."""

import json

import pytest

from storefront.application.create_payment_intent import CreatePaymentIntentHandler
from storefront.application.handle_webhook import HandleWebhookHandler
from storefront.domain.exceptions import GatewayError, SignatureInvalidError
from storefront.domain.model.payment import GatewayKind
from storefront.domain.model.value_objects import Money
from storefront.domain.service.payment_verifier import PaymentVerifier, sign
from tests.fakes import FakePaymentGateway

WEBHOOK_SECRET = "whsec_test"


class TestCreatePaymentIntent:

    def test_stripe_intent_has_client_secret(self):
        gateway = FakePaymentGateway(GatewayKind.STRIPE)
        verifier = PaymentVerifier(gateways={GatewayKind.STRIPE: gateway})
        payload = CreatePaymentIntentHandler(verifier).handle(
            GatewayKind.STRIPE, Money.of("100")
        ).to_dict()

        assert payload["amount"] == 10000
        assert payload["clientSecret"] == "secret_1"
        assert "demo" not in payload

    def test_demo_receipts_are_unique(self):
        handler = CreatePaymentIntentHandler(PaymentVerifier(demo_mode=True))
        first = handler.handle(GatewayKind.RAZORPAY, Money.of("1"))
        second = handler.handle(GatewayKind.RAZORPAY, Money.of("1"))
        assert first.id != second.id
        assert first.id.startswith("order_demo_")
        assert first.demo

    def test_gateway_failure_propagates(self):
        gateway = FakePaymentGateway(GatewayKind.RAZORPAY, fail=True)
        verifier = PaymentVerifier(gateways={GatewayKind.RAZORPAY: gateway})
        with pytest.raises(GatewayError):
            CreatePaymentIntentHandler(verifier).handle(GatewayKind.RAZORPAY, Money.of("1"))


class TestHandleWebhook:

    def _handler(self) -> HandleWebhookHandler:
        return HandleWebhookHandler(
            PaymentVerifier(webhook_secrets={GatewayKind.RAZORPAY: WEBHOOK_SECRET})
        )

    @pytest.mark.parametrize("event_type", ["payment.captured", "payment.failed", "refund.created"])
    def test_authentic_events_returned(self, event_type):
        body = json.dumps(
            {"event": event_type, "payload": {"payment": {"entity": {"id": "pay_9"}}}}
        ).encode()
        event = self._handler().handle(GatewayKind.RAZORPAY, body, sign(WEBHOOK_SECRET, body))
        assert event.type == event_type
        assert event.payment_id == "pay_9"

    def test_forged_event_rejected(self):
        body = b'{"event": "payment.captured"}'
        with pytest.raises(SignatureInvalidError):
            self._handler().handle(GatewayKind.RAZORPAY, body, sign("guess", body))

"""Application service: Create Payment Intent use case.

The gateway-facing half of checkout: asks the gateway to open a payment
(a Razorpay order or a Stripe PaymentIntent) for the cart total, in
minor units.  The client completes the payment with the gateway and
comes back with a confirmation for ``PlaceOrderHandler``.
"""

from __future__ import annotations

import uuid

import structlog

from storefront.application.dto import PaymentIntentDTO
from storefront.domain.model.payment import GatewayKind
from storefront.domain.model.value_objects import Money
from storefront.domain.service.payment_verifier import PaymentVerifier

log = structlog.get_logger(__name__)


class CreatePaymentIntentHandler:

    def __init__(self, verifier: PaymentVerifier) -> None:
        self._verifier = verifier

    def handle(self, gateway: GatewayKind, amount: Money) -> PaymentIntentDTO:
        receipt = f"receipt_{uuid.uuid4().hex[:16]}"
        intent = self._verifier.create_intent(gateway, amount, receipt)
        log.info(
            "payment.intent_created",
            gateway=gateway.value,
            intent_id=intent.id,
            amount=intent.amount,
            currency=intent.currency,
            demo=intent.demo,
        )
        return PaymentIntentDTO.from_intent(intent)

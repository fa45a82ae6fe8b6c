"""Razorpay adapter for the PaymentGateway port.

Razorpay "orders" are the intents here; the client-side checkout signs
``"<order id>|<payment id>"`` with the key secret, and the verifier
checks that signature before this adapter is asked to fetch the payment.
"""

from __future__ import annotations

import razorpay
import requests
import structlog
from razorpay.errors import BadRequestError, ServerError
from razorpay.errors import GatewayError as RazorpaySdkError

from storefront.domain.exceptions import GatewayError
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.payment import GatewayKind, GatewayPayment, PaymentIntent

log = structlog.get_logger(__name__)

_SDK_ERRORS = (BadRequestError, ServerError, RazorpaySdkError, requests.RequestException)


class RazorpayGateway(PaymentGateway):

    kind = GatewayKind.RAZORPAY

    def __init__(self, client: razorpay.Client) -> None:
        self._client = client

    @staticmethod
    def from_credentials(key_id: str, key_secret: str) -> RazorpayGateway:
        return RazorpayGateway(razorpay.Client(auth=(key_id, key_secret)))

    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        try:
            order = self._client.order.create(
                data={"amount": amount, "currency": currency, "receipt": receipt}
            )
        except _SDK_ERRORS as exc:
            log.error("razorpay.order_create_failed", receipt=receipt, error=str(exc))
            raise GatewayError(f"Razorpay order creation failed: {exc}") from exc

        return PaymentIntent(
            gateway=self.kind,
            id=order["id"],
            amount=int(order["amount"]),
            currency=str(order.get("currency", currency)).upper(),
        )

    def fetch_payment(self, payment_id: str) -> GatewayPayment:
        try:
            payment = self._client.payment.fetch(payment_id)
        except _SDK_ERRORS as exc:
            log.error("razorpay.payment_fetch_failed", payment_id=payment_id, error=str(exc))
            raise GatewayError(f"Razorpay payment lookup failed: {exc}") from exc

        currency = payment.get("currency")
        return GatewayPayment(
            id=payment["id"],
            status=payment["status"],
            amount=int(payment["amount"]),
            currency=currency.upper() if currency else None,
        )

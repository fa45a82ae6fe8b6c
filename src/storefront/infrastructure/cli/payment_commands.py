"""CLI commands for the payment boundary (intents, keys, webhooks)."""

from __future__ import annotations

import click

from storefront.application.create_payment_intent import CreatePaymentIntentHandler
from storefront.application.handle_webhook import HandleWebhookHandler
from storefront.application.requests import PaymentIntentRequest, parse_request
from storefront.domain.exceptions import DomainException
from storefront.domain.model.payment import GatewayKind
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import payment_verifier
from storefront.infrastructure.cli.rendering import GATEWAY_CHOICE, CommandError, emit
from storefront.infrastructure.config import Settings


@click.command("keys")
@click.pass_obj
def payment_keys(settings: Settings) -> None:
    """Print the client-safe gateway keys."""
    emit(**settings.public_keys())


@click.command("intent")
@click.option("--gateway", required=True, type=GATEWAY_CHOICE)
@click.option("--amount", required=True, help="Amount in major units (e.g. 100.00).")
@click.option("--currency", default=None, help="Defaults to the configured currency.")
@click.pass_obj
def payment_intent(settings: Settings, gateway: str, amount: str, currency: str | None) -> None:
    """Open a payment at the gateway for the given amount."""
    handler = CreatePaymentIntentHandler(verifier=payment_verifier(settings))

    try:
        request = parse_request(
            PaymentIntentRequest, {"amount": amount, "currency": currency}
        )
        money = Money.of(request.amount, request.currency or settings.currency)
        dto = handler.handle(GatewayKind(gateway.lower()), money)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(intent=dto.to_dict())


@click.command("webhook")
@click.option("--gateway", required=True, type=GATEWAY_CHOICE)
@click.option("--signature", default=None, help="Signature header sent with the webhook.")
@click.option("--body", "body", required=True, type=click.File("rb"), help="Raw body ('-' for stdin).")
@click.pass_obj
def payment_webhook(settings: Settings, gateway: str, signature: str | None, body) -> None:
    """Authenticate and record a gateway webhook."""
    handler = HandleWebhookHandler(verifier=payment_verifier(settings))

    try:
        event = handler.handle(GatewayKind(gateway.lower()), body.read(), signature)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(event=event.type, paymentId=event.payment_id)

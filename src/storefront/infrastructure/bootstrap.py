"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Gateway SDK clients
are built once per settings object and reused.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.payment import GatewayKind
from storefront.domain.service.payment_verifier import PaymentVerifier
from storefront.infrastructure.config import Settings
from storefront.infrastructure.gateways.razorpay_gateway import RazorpayGateway
from storefront.infrastructure.gateways.stripe_gateway import StripeGateway
from storefront.infrastructure.log_config import configure_logging
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def load_settings() -> Settings:
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_json)
    return settings


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.data_dir / "carts.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


@lru_cache(maxsize=None)
def payment_gateways(settings: Settings) -> dict[GatewayKind, PaymentGateway]:
    gateways: dict[GatewayKind, PaymentGateway] = {}
    if settings.razorpay_configured:
        gateways[GatewayKind.RAZORPAY] = RazorpayGateway.from_credentials(
            settings.razorpay_key_id, settings.razorpay_key_secret  # type: ignore[arg-type]
        )
    if settings.stripe_configured:
        gateways[GatewayKind.STRIPE] = StripeGateway(settings.stripe_secret_key)  # type: ignore[arg-type]
    return gateways


def payment_verifier(settings: Settings) -> PaymentVerifier:
    signing_secrets = {}
    if settings.razorpay_key_secret:
        signing_secrets[GatewayKind.RAZORPAY] = settings.razorpay_key_secret

    webhook_secrets = {}
    if settings.razorpay_webhook_secret:
        webhook_secrets[GatewayKind.RAZORPAY] = settings.razorpay_webhook_secret
    if settings.stripe_webhook_secret:
        webhook_secrets[GatewayKind.STRIPE] = settings.stripe_webhook_secret

    return PaymentVerifier(
        gateways=payment_gateways(settings),
        signing_secrets=signing_secrets,
        webhook_secrets=webhook_secrets,
        demo_mode=settings.payment_demo_mode,
    )

"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.requests import (
    CheckoutRequest,
    parse_confirmation,
    parse_request,
)
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.payment import GatewayKind
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    payment_verifier,
    product_repository,
)
from storefront.infrastructure.cli.rendering import (
    GATEWAY_CHOICE,
    CommandError,
    emit,
    read_json,
)
from storefront.infrastructure.config import Settings


@click.command("place")
@click.option("--user", "user_id", required=True, help="Order owner.")
@click.option("--gateway", required=True, type=GATEWAY_CHOICE)
@click.option(
    "--checkout",
    required=True,
    type=click.File("r"),
    help="JSON file with shippingInfo, orderItems and prices ('-' for stdin).",
)
@click.option(
    "--confirmation",
    required=True,
    type=click.File("r"),
    help="JSON file with the gateway confirmation ids and signature.",
)
@click.pass_obj
def order_place(settings: Settings, user_id: str, gateway: str, checkout, confirmation) -> None:
    """Verify a payment and create the order it paid for."""
    kind = GatewayKind(gateway.lower())
    checkout_payload = read_json(checkout, "Checkout")
    confirmation_payload = read_json(confirmation, "Confirmation")

    handler = PlaceOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        cart_repo=cart_repository(settings),
        verifier=payment_verifier(settings),
        stock_policy=settings.stock_policy,
        currency=settings.currency,
    )

    try:
        request = parse_request(CheckoutRequest, checkout_payload)
        payment = parse_confirmation(kind, confirmation_payload)
        dto = handler.handle(user_id, kind, request, payment)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message="Order placed successfully", order=dto.to_dict())


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Only show the order if this user owns it.")
@click.pass_obj
def order_show(settings: Settings, order_id: int, user_id: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings))

    try:
        dto = handler.handle(order_id, user_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(order=dto.to_dict())


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
@click.pass_obj
def order_list(settings: Settings, user_id: str | None) -> None:
    """List orders with their combined total."""
    handler = ListOrdersHandler(order_repo=order_repository(settings))

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(**dto.to_dict())


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--to", "new_status", required=True, help="Shipped, Delivered or Cancelled.")
@click.pass_obj
def order_status(settings: Settings, order_id: int, new_status: str) -> None:
    """Move an order along its lifecycle (cancelling restocks its items)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
    )

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(order=dto.to_dict())


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(settings: Settings, order_id: int) -> None:
    """Delete a delivered order."""
    handler = DeleteOrderHandler(order_repo=order_repository(settings))

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message=f"Order #{order_id} deleted")

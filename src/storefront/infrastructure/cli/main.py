import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import load_settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.inventory_commands import (
    inventory_restock,
    inventory_set,
    inventory_show,
)
from storefront.infrastructure.cli.order_commands import (
    order_delete,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.payment_commands import (
    payment_intent,
    payment_keys,
    payment_webhook,
)
from storefront.infrastructure.cli.rendering import CommandError


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront — carts, verified payments and orders"""
    try:
        ctx.obj = load_settings()
    except DomainException as exc:
        raise CommandError.from_exception(exc)


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def payment() -> None:
    """Payment intents, keys and webhooks."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
payment.add_command(payment_intent)
payment.add_command(payment_keys)
payment.add_command(payment_webhook)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
inventory.add_command(inventory_restock)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)

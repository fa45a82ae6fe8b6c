"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.rendering import CommandError, emit
from storefront.infrastructure.config import Settings


@click.command("show")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.pass_obj
def cart_show(settings: Settings, user_id: str) -> None:
    """Show a user's cart (empty if they never added anything)."""
    handler = ShowCartHandler(cart_repo=cart_repository(settings))

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(cart=dto.to_dict())


@click.command("add")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int)
@click.pass_obj
def cart_add(settings: Settings, user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart, merging with an existing line."""
    handler = AddCartItemHandler(
        cart_repo=cart_repository(settings),
        product_repo=product_repository(settings),
    )

    try:
        dto = handler.handle(user_id, product_id, quantity)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message="Item added to cart", cart=dto.to_dict())


@click.command("update")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
@click.option("--quantity", required=True, type=int)
@click.pass_obj
def cart_update(settings: Settings, user_id: str, item_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(settings),
        product_repo=product_repository(settings),
    )

    try:
        dto = handler.handle(user_id, item_id, quantity)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message="Cart updated", cart=dto.to_dict())


@click.command("remove")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
@click.pass_obj
def cart_remove(settings: Settings, user_id: str, item_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(settings))

    try:
        dto = handler.handle(user_id, item_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message="Item removed from cart", cart=dto.to_dict())


@click.command("clear")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.pass_obj
def cart_clear(settings: Settings, user_id: str) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(settings))

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(message="Cart cleared", cart=dto.to_dict())

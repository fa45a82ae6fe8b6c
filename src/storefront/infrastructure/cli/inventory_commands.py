"""CLI commands for inventory management."""

from __future__ import annotations

import click

from storefront.application.restock_product import RestockProductHandler
from storefront.application.set_inventory import SetInventoryHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.rendering import CommandError, emit
from storefront.infrastructure.config import Settings


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--stock", required=True, type=int, help="New stock level.")
@click.pass_obj
def inventory_set(settings: Settings, product_id: str, stock: int) -> None:
    """Set the stock level of a product."""
    handler = SetInventoryHandler(product_repo=product_repository(settings))

    try:
        dto = handler.handle(product_id, stock)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(product=dto.to_dict())


@click.command("restock")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def inventory_restock(settings: Settings, product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(product_repo=product_repository(settings))

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(product=dto.to_dict())


@click.command("show")
@click.pass_obj
def inventory_show(settings: Settings) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository(settings))

    try:
        lines = handler.handle()
    except DomainException as exc:
        raise CommandError.from_exception(exc)

    emit(products=[line.to_dict() for line in lines])

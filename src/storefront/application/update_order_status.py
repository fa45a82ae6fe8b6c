"""Application service: Update Order Status use case.

Drives the Order through Processing -> Shipped -> Delivered, or
Processing -> Cancelled.  Stock was taken when the order was created, so
shipping and delivery leave inventory alone; cancelling puts back the
units of every line whose stock was taken.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import InventoryLedger, StockLine

log = structlog.get_logger(__name__)


def parse_status(raw: str) -> OrderStatus:
    """Accept ``Shipped``, ``shipped`` or ``SHIPPED``."""
    for status in OrderStatus:
        if raw.strip().lower() == status.value.lower():
            return status
    choices = ", ".join(s.value for s in OrderStatus)
    raise ValidationError(f"Unknown order status '{raw}'. Expected one of: {choices}")


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, new_status: OrderStatus | str) -> OrderDTO:
        status = new_status if isinstance(new_status, OrderStatus) else parse_status(new_status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        previous = order.status
        order.transition_to(status)
        self._order_repo.save(order)

        if status == OrderStatus.CANCELLED:
            InventoryLedger(self._product_repo).restock_items(
                [
                    StockLine(i.product_id, i.quantity.value, i.name)
                    for i in order.items
                    if i.stock_taken
                ]
            )

        log.info(
            "order.status_changed",
            order_id=order_id,
            previous=previous.value,
            status=status.value,
        )
        return OrderDTO.from_order(order)

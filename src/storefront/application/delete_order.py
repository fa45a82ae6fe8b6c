"""Application service: Delete Order use case.

Only delivered orders may be deleted.  An order that is still being
processed must be cancelled instead, so a paid order is never silently
discarded.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.repository.order_repository import OrderRepository

log = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        order.ensure_deletable()
        self._order_repo.delete(order_id)
        log.info("order.deleted", order_id=order_id)

"""Application service: Create Order use case (order materialization).

Turns a verified payment plus the checkout payload into a persisted
Order and takes the ordered units out of stock.  This is the most
failure-sensitive step of checkout: by the time it runs, the customer's
money has been captured.

The store only guarantees single-document atomicity, so the sequence is
a series of independent writes:

1. Refuse a payment that already paid for another order.
2. Decrement stock line by line (``InventoryLedger.decrement_items``),
   under the configured ``StockPolicy``.  A store failure part way
   restocks whatever was already taken.  Lines skipped under SKIP are
   flagged ``stock_taken=False`` on the order.
3. Persist the Order.  If that write fails, the decrements from step 2
   are restocked.

Whenever a step fails after the payment was verified, an
``order.reconciliation_required`` event is logged with the payment id so
the captured payment can be refunded or the order recreated by hand.
"""

from __future__ import annotations

from dataclasses import replace

import structlog

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import (
    DomainException,
    DuplicatePaymentError,
    PersistenceError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    PriceBreakdown,
    ShippingInfo,
)
from storefront.domain.model.payment import VerifiedPayment
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import (
    InventoryLedger,
    StockLine,
    StockPolicy,
)

log = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        stock_policy: StockPolicy = StockPolicy.ABORT,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._stock_policy = stock_policy

    def handle(
        self,
        user_id: str,
        payment: VerifiedPayment,
        shipping: ShippingInfo,
        items: list[OrderLineItem],
        prices: PriceBreakdown,
    ) -> OrderDTO:
        """Persist a Processing order for a verified payment."""
        order = Order.create(
            user_id=user_id,
            shipping=shipping,
            items=items,
            payment=payment,
            prices=prices,
        )

        existing = self._order_repo.find_by_payment_id(payment.transaction_id)
        if existing is not None:
            raise DuplicatePaymentError(payment.transaction_id, existing.id)

        ledger = InventoryLedger(self._product_repo)
        lines = [
            StockLine(item.product_id, item.quantity.value, item.name)
            for item in order.items
        ]
        try:
            applied = ledger.decrement_items(lines, self._stock_policy)
        except DomainException as exc:
            self._log_reconciliation(user_id, payment, reason=str(exc))
            raise
        order.items = self._flag_stock_taken(order.items, lines, applied)

        try:
            self._order_repo.save(order)
        except PersistenceError as exc:
            ledger.restock_items(applied)
            self._log_reconciliation(user_id, payment, reason=str(exc))
            raise

        log.info(
            "order.created",
            order_id=order.id,
            user_id=user_id,
            payment_id=payment.transaction_id,
            total=str(order.total),
            lines=len(order.items),
            stock_lines_applied=len(applied),
        )
        return OrderDTO.from_order(order)

    @staticmethod
    def _flag_stock_taken(
        items: list[OrderLineItem], lines: list[StockLine], applied: list[StockLine]
    ) -> list[OrderLineItem]:
        """Mark the items whose stock was skipped.

        *applied* is an ordered subset of *lines*, which pair up with *items*.
        """
        pending = list(applied)
        flagged = []
        for item, line in zip(items, lines):
            if pending and pending[0] == line:
                pending.pop(0)
                flagged.append(item)
            else:
                flagged.append(replace(item, stock_taken=False))
        return flagged

    @staticmethod
    def _log_reconciliation(user_id: str, payment: VerifiedPayment, reason: str) -> None:
        log.error(
            "order.reconciliation_required",
            user_id=user_id,
            gateway=payment.gateway.value,
            payment_id=payment.transaction_id,
            amount=payment.amount,
            currency=payment.currency,
            reason=reason,
        )

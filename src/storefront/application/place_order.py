"""Application service: Place Order use case (verify-and-create).

Order of operations matters here:

1. Build typed shipping, line items and prices from the normalized
   checkout request.  A bad pincode or phone number fails before the
   gateway is ever asked about the payment.
2. Verify the payment (signature, gateway status, amount).  Any failure
   aborts before anything is written.
3. Materialize the order (``CreateOrderHandler``).
4. Empty the user's cart.
"""

from __future__ import annotations

import structlog

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO
from storefront.application.requests import CheckoutRequest
from storefront.domain.exceptions import PersistenceError
from storefront.domain.model.payment import GatewayKind, PaymentConfirmation
from storefront.domain.model.value_objects import DEFAULT_CURRENCY
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_ledger import StockPolicy
from storefront.domain.service.payment_verifier import PaymentVerifier

log = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        verifier: PaymentVerifier,
        stock_policy: StockPolicy = StockPolicy.ABORT,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._cart_repo = cart_repo
        self._verifier = verifier
        self._currency = currency
        self._create_order = CreateOrderHandler(order_repo, product_repo, stock_policy)

    def handle(
        self,
        user_id: str,
        gateway: GatewayKind,
        checkout: CheckoutRequest,
        confirmation: PaymentConfirmation,
    ) -> OrderDTO:
        shipping = checkout.to_shipping_info()
        items = checkout.to_line_items(self._currency)
        prices = checkout.to_price_breakdown(self._currency)

        payment = self._verifier.verify_confirmation(
            gateway, confirmation, prices.total_price
        )
        log.info(
            "payment.verified",
            gateway=gateway.value,
            payment_id=payment.transaction_id,
            status=payment.status.value,
            amount=payment.amount,
            demo=payment.demo,
        )

        order = self._create_order.handle(user_id, payment, shipping, items, prices)
        self._empty_cart(user_id, order.id)
        return order

    def _empty_cart(self, user_id: str, order_id: int) -> None:
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None or cart.is_empty:
            return
        cart.clear()
        try:
            self._cart_repo.save(cart)
        except PersistenceError:
            # Order is already persisted at this point.
            log.warning("cart.clear_failed", user_id=user_id, order_id=order_id, exc_info=True)

"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories and
the gateway adapters but keep everything in a dict. No file I/O, no
network, no side effects.
"""

from __future__ import annotations

from storefront.domain.exceptions import GatewayError, PersistenceError
from storefront.domain.gateway.payment_gateway import PaymentGateway
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.payment import GatewayKind, GatewayPayment, PaymentIntent
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def find_by_payment_id(self, payment_id: str) -> Order | None:
        for order in self._store.values():
            if order.payment.id == payment_id:
                return order
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self._store.values() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order

    def delete(self, order_id: int) -> None:
        self._store.pop(order_id, None)


class FailingOrderRepository(FakeOrderRepository):
    """Rejects every write, as a store that is down would."""

    def save(self, order: Order) -> None:
        raise PersistenceError("order store unavailable")


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        product = self._store.get(product_id)
        if product is None or product.stock < quantity:
            return False
        product.stock -= quantity
        return True

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        product = self._store.get(product_id)
        if product is None:
            return False
        product.stock += quantity
        return True

    def set_stock(self, product_id: str, level: int) -> Product | None:
        product = self._store.get(product_id)
        if product is None:
            return None
        product.adjust_stock(level)
        return product


class RacingProductRepository(FakeProductRepository):
    """Lets validation pass, then loses the conditional update for one product.

    Simulates another order taking the last units in between.
    """

    def __init__(self, products: list[Product], contested_id: str) -> None:
        super().__init__(products)
        self._contested_id = contested_id

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        if product_id == self._contested_id:
            self._store[product_id].stock = 0
            return False
        return super().decrement_stock_if_available(product_id, quantity)


class FlakyProductRepository(FakeProductRepository):
    """Fails every conditional decrement after the first *healthy_decrements*."""

    def __init__(self, products: list[Product], healthy_decrements: int) -> None:
        super().__init__(products)
        self._healthy = healthy_decrements

    def decrement_stock_if_available(self, product_id: str, quantity: int) -> bool:
        if self._healthy <= 0:
            raise PersistenceError("product store unavailable")
        self._healthy -= 1
        return super().decrement_stock_if_available(product_id, quantity)


class FakeCartRepository(CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        self._store: dict[str, Cart] = {}
        for cart in carts or []:
            self._store[cart.user_id] = cart

    def get_by_user(self, user_id: str) -> Cart | None:
        return self._store.get(user_id)

    def save(self, cart: Cart) -> None:
        self._store[cart.user_id] = cart


class FakePaymentGateway(PaymentGateway):
    """Gateway double serving pre-registered payments.

    ``fetch_calls`` counts lookups so tests can assert the gateway was
    (or was not) consulted.
    """

    def __init__(
        self,
        kind: GatewayKind = GatewayKind.RAZORPAY,
        payments: list[GatewayPayment] | None = None,
        fail: bool = False,
    ) -> None:
        self.kind = kind
        self._payments = {p.id: p for p in payments or []}
        self._fail = fail
        self.fetch_calls = 0
        self.intents: list[PaymentIntent] = []

    def add_payment(self, payment: GatewayPayment) -> None:
        self._payments[payment.id] = payment

    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        if self._fail:
            raise GatewayError("gateway unreachable")
        prefix = "order" if self.kind is GatewayKind.RAZORPAY else "pi"
        intent = PaymentIntent(
            gateway=self.kind,
            id=f"{prefix}_{len(self.intents) + 1}",
            amount=amount,
            currency=currency,
            client_secret="secret_1" if self.kind is GatewayKind.STRIPE else None,
        )
        self.intents.append(intent)
        return intent

    def fetch_payment(self, payment_id: str) -> GatewayPayment:
        self.fetch_calls += 1
        if self._fail:
            raise GatewayError("gateway unreachable")
        payment = self._payments.get(payment_id)
        if payment is None:
            raise GatewayError(f"unknown payment {payment_id}")
        return payment

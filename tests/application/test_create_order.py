"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest
from structlog.testing import capture_logs

from storefront.application.create_order import CreateOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import (
    DuplicatePaymentError,
    InsufficientStockError,
    PersistenceError,
    ProductNotFoundError,
)
from storefront.domain.model.order import (
    OrderLineItem,
    OrderStatus,
    PriceBreakdown,
    ShippingInfo,
)
from storefront.domain.model.payment import GatewayKind, PaymentStatus, VerifiedPayment
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.inventory_ledger import StockPolicy
from tests.fakes import (
    FailingOrderRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FlakyProductRepository,
)


def _setup(
    order_repo: FakeOrderRepository | None = None,
    policy: StockPolicy = StockPolicy.ABORT,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    order_repo = order_repo or FakeOrderRepository()
    product_repo = FakeProductRepository([
        Product(id="p1", name="Widget", price=Money.of("50.00"), stock=5),
        Product(id="p2", name="Gadget", price=Money.of("20.00"), stock=1),
    ])
    return CreateOrderHandler(order_repo, product_repo, policy), order_repo, product_repo


def _payment(payment_id: str = "pay_1") -> VerifiedPayment:
    return VerifiedPayment(
        gateway=GatewayKind.RAZORPAY,
        transaction_id=payment_id,
        status=PaymentStatus.CAPTURED,
        amount=10000,
        currency="INR",
    )


def _shipping() -> ShippingInfo:
    return ShippingInfo.parse("1 Main St", "Pune", "MH", "India", "411001", "9876543210")


def _item(product_id: str = "p1", qty: int = 2, price: str = "50.00") -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        name=f"Product {product_id}",
        price=Money.of(price),
        quantity=Quantity(qty),
    )


def _prices(total: str = "100.00") -> PriceBreakdown:
    return PriceBreakdown(Money.of(total), Money.of("0"), Money.of("0"), Money.of(total))


class TestCreateOrderHappyPath:

    def test_creates_processing_order_and_takes_stock(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle("u1", _payment(), _shipping(), [_item()], _prices())

        assert dto.status == OrderStatus.PROCESSING.value
        assert dto.payment_status == "succeeded"
        assert dto.payment_method == "razorpay"
        assert product_repo.get_by_id("p1").stock == 3
        assert order_repo.get_by_id(dto.id) is not None

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        dto1 = handler.handle("u1", _payment("pay_1"), _shipping(), [_item(qty=1)], _prices())
        dto2 = handler.handle("u1", _payment("pay_2"), _shipping(), [_item(qty=1)], _prices())
        assert dto2.id == dto1.id + 1


class TestStockPolicies:

    def test_abort_refuses_short_order(self):
        handler, order_repo, product_repo = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(
                "u1", _payment(), _shipping(), [_item("p1", 2), _item("p2", 2)], _prices()
            )
        assert order_repo.list_all() == []
        assert product_repo.get_by_id("p1").stock == 5

    def test_abort_refuses_missing_product(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            handler.handle("u1", _payment(), _shipping(), [_item("gone")], _prices())
        assert order_repo.list_all() == []

    def test_skip_places_order_and_leaves_short_stock(self):
        handler, order_repo, product_repo = _setup(policy=StockPolicy.SKIP)
        dto = handler.handle(
            "u1", _payment(), _shipping(), [_item("p1", 2), _item("gone", 1)], _prices()
        )
        assert len(dto.items) == 2
        assert product_repo.get_by_id("p1").stock == 3

    def test_skip_flags_lines_whose_stock_was_not_taken(self):
        handler, order_repo, _ = _setup(policy=StockPolicy.SKIP)
        dto = handler.handle(
            "u1", _payment(), _shipping(), [_item("p1", 2), _item("p2", 3)], _prices()
        )
        items = order_repo.get_by_id(dto.id).items
        assert [i.stock_taken for i in items] == [True, False]

    def test_cancelling_skipped_order_restocks_only_taken_lines(self):
        handler, order_repo, product_repo = _setup(policy=StockPolicy.SKIP)
        dto = handler.handle(
            "u1", _payment(), _shipping(), [_item("p1", 2), _item("p2", 3)], _prices()
        )
        assert product_repo.get_by_id("p2").stock == 1

        UpdateOrderStatusHandler(order_repo, product_repo).handle(dto.id, "Cancelled")

        assert product_repo.get_by_id("p1").stock == 5
        assert product_repo.get_by_id("p2").stock == 1


class TestFailures:

    def test_duplicate_payment_rejected(self):
        handler, order_repo, product_repo = _setup()
        first = handler.handle("u1", _payment(), _shipping(), [_item(qty=1)], _prices())

        with pytest.raises(DuplicatePaymentError) as exc_info:
            handler.handle("u1", _payment(), _shipping(), [_item(qty=1)], _prices())

        assert exc_info.value.order_id == first.id
        assert len(order_repo.list_all()) == 1
        assert product_repo.get_by_id("p1").stock == 4

    def test_failed_save_restocks(self):
        handler, _, product_repo = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(PersistenceError):
            handler.handle("u1", _payment(), _shipping(), [_item()], _prices())
        assert product_repo.get_by_id("p1").stock == 5

    def test_store_failure_while_taking_stock_restocks_and_logs(self):
        order_repo = FakeOrderRepository()
        product_repo = FlakyProductRepository(
            [
                Product(id="p1", name="Widget", price=Money.of("50.00"), stock=5),
                Product(id="p2", name="Gadget", price=Money.of("20.00"), stock=1),
            ],
            healthy_decrements=1,
        )
        handler = CreateOrderHandler(order_repo, product_repo)

        with capture_logs() as logs, pytest.raises(PersistenceError):
            handler.handle(
                "u1", _payment(), _shipping(), [_item("p1", 2), _item("p2", 1)], _prices()
            )

        assert product_repo.get_by_id("p1").stock == 5
        assert order_repo.list_all() == []
        reconciliation = [e for e in logs if e["event"] == "order.reconciliation_required"]
        assert reconciliation[0]["payment_id"] == "pay_1"

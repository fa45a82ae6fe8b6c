"""Unit tests for the Order aggregate and its business rules."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import (
    AlreadyDeliveredError,
    InvalidShippingFieldError,
    InvalidStatusTransitionError,
    OrderNotDeletableError,
    ValidationError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentInfo,
    PriceBreakdown,
    ShippingInfo,
)
from storefront.domain.model.payment import GatewayKind, PaymentStatus, VerifiedPayment
from storefront.domain.model.value_objects import Money, Quantity

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _shipping() -> ShippingInfo:
    return ShippingInfo.parse("1 Main St", "Pune", "MH", "India", "411001", "9876543210")


def _item(qty: int = 2, price: str = "50.00") -> OrderLineItem:
    return OrderLineItem(
        product_id="p1", name="Widget", price=Money.of(price), quantity=Quantity(qty)
    )


def _prices(total: str = "100.00") -> PriceBreakdown:
    return PriceBreakdown(
        item_price=Money.of(total),
        tax_price=Money.of("0"),
        shipping_price=Money.of("0"),
        total_price=Money.of(total),
    )


def _payment(status: PaymentStatus = PaymentStatus.CAPTURED, demo: bool = False) -> VerifiedPayment:
    return VerifiedPayment(
        gateway=GatewayKind.RAZORPAY,
        transaction_id="pay_1",
        status=status,
        amount=10000,
        currency="INR",
        demo=demo,
    )


def _order(**overrides) -> Order:
    return Order.create(
        user_id=overrides.get("user_id", "u1"),
        shipping=_shipping(),
        items=overrides.get("items", [_item()]),
        payment=overrides.get("payment", _payment()),
        prices=_prices(),
        now=NOW,
    )


class TestShippingInfo:

    def test_numeric_strings_parsed(self):
        info = _shipping()
        assert info.pincode == 411001
        assert info.phone_number == 9876543210

    def test_non_numeric_pincode_rejected(self):
        with pytest.raises(InvalidShippingFieldError, match="Invalid pincode format"):
            ShippingInfo.parse("1 Main St", "Pune", "MH", "India", "41A001", "9876543210")

    def test_non_numeric_phone_rejected(self):
        with pytest.raises(InvalidShippingFieldError, match="Invalid phone number format"):
            ShippingInfo.parse("1 Main St", "Pune", "MH", "India", "411001", "+91 98765")

    @pytest.mark.parametrize("pincode", ["²", "٤١١٠٠١"])
    def test_non_ascii_digits_rejected(self, pincode):
        with pytest.raises(InvalidShippingFieldError, match="Invalid pincode format"):
            ShippingInfo.parse("1 Main St", "Pune", "MH", "India", pincode, "9876543210")

    def test_blank_address_rejected(self):
        with pytest.raises(ValidationError, match="address is required"):
            ShippingInfo.parse("  ", "Pune", "MH", "India", "411001", "9876543210")


class TestPriceBreakdown:

    def test_zero_total_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _prices(total="0")

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="mixes currencies"):
            PriceBreakdown(
                item_price=Money.of("10", "USD"),
                tax_price=Money.of("0"),
                shipping_price=Money.of("0"),
                total_price=Money.of("10"),
            )


class TestOrderCreation:

    def test_starts_processing_and_paid(self):
        order = _order()
        assert order.status == OrderStatus.PROCESSING
        assert order.paid_at == NOW
        assert order.delivered_at is None
        assert order.total == Money.of("100.00")

    def test_id_is_none_for_new_orders(self):
        assert _order().id is None  # assigned by repository

    def test_payment_info_from_captured(self):
        assert _order().payment == PaymentInfo(id="pay_1", status="succeeded", gateway="razorpay")

    def test_authorized_payment_is_pending(self):
        order = _order(payment=_payment(PaymentStatus.AUTHORIZED))
        assert order.payment.status == "pending"

    def test_demo_payment_is_marked(self):
        assert _order(payment=_payment(demo=True)).payment.gateway == "razorpay_demo"

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _order(items=[])

    def test_missing_owner_rejected(self):
        with pytest.raises(ValidationError, match="owner"):
            _order(user_id=" ")


class TestLifecycle:

    def test_processing_to_shipped_to_delivered(self):
        order = _order()
        order.transition_to(OrderStatus.SHIPPED)
        order.transition_to(OrderStatus.DELIVERED, now=NOW)
        assert order.status == OrderStatus.DELIVERED
        assert order.delivered_at == NOW

    def test_processing_to_cancelled(self):
        order = _order()
        order.transition_to(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    def test_skipping_shipped_rejected(self):
        with pytest.raises(InvalidStatusTransitionError):
            _order().transition_to(OrderStatus.DELIVERED)

    def test_cancelled_is_terminal(self):
        order = _order()
        order.transition_to(OrderStatus.CANCELLED)
        with pytest.raises(InvalidStatusTransitionError):
            order.transition_to(OrderStatus.SHIPPED)

    def test_leaving_delivered_rejected(self):
        order = _order()
        order.transition_to(OrderStatus.SHIPPED)
        order.transition_to(OrderStatus.DELIVERED)
        with pytest.raises(AlreadyDeliveredError, match="already been delivered"):
            order.transition_to(OrderStatus.PROCESSING)


class TestDeletion:

    def test_processing_not_deletable(self):
        with pytest.raises(OrderNotDeletableError):
            _order().ensure_deletable()

    def test_delivered_deletable(self):
        order = _order()
        order.transition_to(OrderStatus.SHIPPED)
        order.transition_to(OrderStatus.DELIVERED)
        order.ensure_deletable()

"""Inbound request models — the one place raw payloads are normalized.

Clients send alternate spellings for the same datum (``pinCode`` /
``pincode``, ``phoneNo`` / ``phoneNumber``) and images as a string, an
``{url}`` object or a list of either.  These pydantic models absorb all
of that once, at the boundary, and hand the application layer typed
values; nothing behind them branches on input shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderLineItem, PriceBreakdown, ShippingInfo
from storefront.domain.model.payment import GatewayKind, PaymentConfirmation
from storefront.domain.model.value_objects import Money, Quantity

RequestT = TypeVar("RequestT", bound=BaseModel)


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, frozen=True)


def _first_image_url(value: Any) -> Any:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("url")
    return value


# --- Cart --------------------------------------------------------------------


class AddCartItemRequest(_Request):
    product_id: str = Field(validation_alias=AliasChoices("productId", "product_id"), min_length=1)
    quantity: int = 1


class UpdateCartItemRequest(_Request):
    item_id: str = Field(validation_alias=AliasChoices("itemId", "item_id"), min_length=1)
    quantity: int


# --- Payment -----------------------------------------------------------------


class PaymentIntentRequest(_Request):
    amount: Decimal
    currency: str | None = None


class _ConfirmationRequest(_Request):
    status: str | None = None
    amount: int | None = None


class RazorpayConfirmationRequest(_ConfirmationRequest):
    razorpay_order_id: str = Field(
        validation_alias=AliasChoices("razorpayOrderId", "razorpay_order_id")
    )
    razorpay_payment_id: str = Field(
        validation_alias=AliasChoices("razorpayPaymentId", "razorpay_payment_id")
    )
    razorpay_signature: str = Field(
        validation_alias=AliasChoices("razorpaySignature", "razorpay_signature")
    )

    def to_confirmation(self) -> PaymentConfirmation:
        return PaymentConfirmation(
            payment_id=self.razorpay_payment_id,
            gateway_order_id=self.razorpay_order_id,
            signature=self.razorpay_signature,
            claimed_status=self.status,
            claimed_amount=self.amount,
        )


class StripeConfirmationRequest(_ConfirmationRequest):
    payment_intent_id: str = Field(
        validation_alias=AliasChoices("paymentIntentId", "payment_intent_id"), min_length=1
    )

    def to_confirmation(self) -> PaymentConfirmation:
        return PaymentConfirmation(
            payment_id=self.payment_intent_id,
            claimed_status=self.status,
            claimed_amount=self.amount,
        )


_CONFIRMATION_MODELS: dict[GatewayKind, type[RazorpayConfirmationRequest | StripeConfirmationRequest]] = {
    GatewayKind.RAZORPAY: RazorpayConfirmationRequest,
    GatewayKind.STRIPE: StripeConfirmationRequest,
}


# --- Checkout ----------------------------------------------------------------


class ShippingInfoRequest(_Request):
    address: str
    city: str
    state: str
    country: str
    pincode: str = Field(validation_alias=AliasChoices("pinCode", "pincode"))
    phone_number: str = Field(
        validation_alias=AliasChoices("phoneNo", "phoneNumber", "phone_number")
    )

    @field_validator("pincode", "phone_number", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class OrderItemRequest(_Request):
    product: str = Field(validation_alias=AliasChoices("product", "productId"), min_length=1)
    name: str
    price: Decimal
    quantity: int
    image: str | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _normalize_image(cls, value: Any) -> Any:
        return _first_image_url(value)


class CheckoutRequest(_Request):
    shipping_info: ShippingInfoRequest = Field(
        validation_alias=AliasChoices("shippingInfo", "shipping_info")
    )
    order_items: list[OrderItemRequest] = Field(
        validation_alias=AliasChoices("orderItems", "order_items"), min_length=1
    )
    item_price: Decimal = Field(
        validation_alias=AliasChoices("itemPrice", "itemsPrice", "item_price")
    )
    tax_price: Decimal = Field(
        default=Decimal("0"), validation_alias=AliasChoices("taxPrice", "tax_price")
    )
    shipping_price: Decimal = Field(
        default=Decimal("0"), validation_alias=AliasChoices("shippingPrice", "shipping_price")
    )
    total_price: Decimal = Field(validation_alias=AliasChoices("totalPrice", "total_price"))

    def to_shipping_info(self) -> ShippingInfo:
        s = self.shipping_info
        return ShippingInfo.parse(
            address=s.address,
            city=s.city,
            state=s.state,
            country=s.country,
            pincode=s.pincode,
            phone_number=s.phone_number,
        )

    def to_line_items(self, currency: str) -> list[OrderLineItem]:
        items = []
        for item in self.order_items:
            price = Money.of(item.price, currency)
            if price.is_zero:
                raise ValidationError(f"Price of {item.name} must be greater than zero")
            items.append(
                OrderLineItem(
                    product_id=item.product,
                    name=item.name,
                    price=price,
                    quantity=Quantity(item.quantity),
                    image=item.image,
                )
            )
        return items

    def to_price_breakdown(self, currency: str) -> PriceBreakdown:
        return PriceBreakdown(
            item_price=Money.of(self.item_price, currency),
            tax_price=Money.of(self.tax_price, currency),
            shipping_price=Money.of(self.shipping_price, currency),
            total_price=Money.of(self.total_price, currency),
        )


# --- Parsing -----------------------------------------------------------------


def parse_request(model: type[RequestT], payload: Mapping[str, Any]) -> RequestT:
    """Validate *payload* into *model*, translating pydantic errors."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def parse_confirmation(kind: GatewayKind, payload: Mapping[str, Any]) -> PaymentConfirmation:
    return parse_request(_CONFIRMATION_MODELS[kind], payload).to_confirmation()


def _describe(exc: PydanticValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        problems.append(f"{location}: {error['msg']}")
    return "Invalid request — " + "; ".join(problems)

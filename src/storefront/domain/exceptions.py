"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the boundary layer can catch them uniformly.  Every exception carries an
``ErrorKind`` which the boundary maps to a status code and a user-safe
message.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTH_FAILURE = "auth_failure"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = ErrorKind.INTERNAL


# --- Not found ---------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: '{product_id}'")


class CartNotFoundError(EntityNotFoundError):

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"Cart not found for user '{user_id}'")


class CartItemNotFoundError(EntityNotFoundError):

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Cart item not found: '{item_id}'")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


# --- Validation --------------------------------------------------------------


class ValidationError(DomainException):
    """A business rule or invariant was violated by the input."""

    kind = ErrorKind.VALIDATION


class InvalidQuantityError(ValidationError):
    """Raised for zero or negative quantities."""


class InvalidShippingFieldError(ValidationError):

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field} format: {value!r}. Please enter a numeric value."
        )


# --- Conflict ----------------------------------------------------------------


class ConflictError(DomainException):
    """The request is valid but clashes with the current state."""

    kind = ErrorKind.CONFLICT


class InsufficientStockError(ConflictError):

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, only {available} available)"
        )


class AlreadyDeliveredError(ConflictError):

    def __init__(self, order_id: int | None) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} has already been delivered")


class OrderNotDeletableError(ConflictError):

    def __init__(self, order_id: int | None, status: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(
            f"Order #{order_id} is {status} and cannot be deleted; "
            f"only delivered orders can be deleted"
        )


class DuplicatePaymentError(ConflictError):

    def __init__(self, payment_id: str, order_id: int | None) -> None:
        self.payment_id = payment_id
        self.order_id = order_id
        super().__init__(
            f"Payment {payment_id} has already been used for order #{order_id}"
        )


class InvalidStatusTransitionError(ConflictError):

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move order from {current} to {requested}")


# --- Payment verification ----------------------------------------------------


class PaymentVerificationError(DomainException):
    """A payment confirmation could not be trusted."""

    kind = ErrorKind.AUTH_FAILURE


class SignatureInvalidError(PaymentVerificationError):
    """The signature does not match the shared-secret HMAC."""


class PaymentNotConfirmedError(PaymentVerificationError):

    def __init__(self, payment_id: str, status: str) -> None:
        self.payment_id = payment_id
        self.status = status
        super().__init__(f"Payment {payment_id} not successful (status={status})")


class AmountMismatchError(PaymentVerificationError):

    def __init__(self, expected: int, reported: int, currency: str) -> None:
        self.expected = expected
        self.reported = reported
        self.currency = currency
        super().__init__(
            f"Payment amount mismatch: expected {expected} {currency} "
            f"minor units, gateway reported {reported}"
        )


# --- Infrastructure-facing ---------------------------------------------------


class UpstreamError(DomainException):
    """A collaborator outside the process failed."""

    kind = ErrorKind.UPSTREAM


class GatewayError(UpstreamError):
    """A payment gateway call failed or timed out."""


class InternalError(DomainException):
    kind = ErrorKind.INTERNAL


class PersistenceError(InternalError):
    """The document store rejected a read or write."""


class ConfigurationError(InternalError):
    """Settings are missing or unsafe."""

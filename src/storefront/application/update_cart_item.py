"""Application service: Update Cart Item quantity use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import (
    CartNotFoundError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, item_id: str, quantity: int) -> CartDTO:
        """Set a line's quantity, checked against the product's current stock."""
        if quantity <= 0:
            raise InvalidQuantityError("Quantity must be greater than 0")

        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)

        item = cart.get_item(item_id)
        product = self._product_repo.get_by_id(item.product_id)
        if product is None:
            raise ProductNotFoundError(item.product_id)

        cart.set_quantity(item_id, quantity, product)
        self._cart_repo.save(cart)
        return CartDTO.from_cart(cart)

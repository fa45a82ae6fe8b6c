"""Application service: Clear Cart use case.

Clearing a cart that was never created is an error, same as removal.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import CartNotFoundError
from storefront.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)

        cart.clear()
        self._cart_repo.save(cart)
        return CartDTO.from_cart(cart)

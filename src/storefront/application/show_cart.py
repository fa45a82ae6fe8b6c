"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str) -> CartDTO:
        """A user who never added anything sees an empty cart, not an error."""
        cart = self._cart_repo.get_by_user(user_id) or Cart(user_id=user_id)
        return CartDTO.from_cart(cart)

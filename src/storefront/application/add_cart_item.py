"""Application service: Add Cart Item use case.

Creates the cart lazily on first add.  Adding a product that is already
in the cart merges into the existing line; the stock check covers the
cumulative quantity.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


class AddCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, product_id: str, quantity: int = 1) -> CartDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        cart = self._cart_repo.get_by_user(user_id) or Cart(user_id=user_id)
        item = cart.add(product, quantity)
        self._cart_repo.save(cart)

        log.info(
            "cart.item_added",
            user_id=user_id,
            product_id=product_id,
            quantity=item.quantity,
        )
        return CartDTO.from_cart(cart)

"""Application service: List Orders use case (query)."""

from __future__ import annotations

from decimal import Decimal

from storefront.application.dto import OrderDTO, OrderListDTO
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None = None) -> OrderListDTO:
        """List one user's orders, or every order when *user_id* is None."""
        if user_id is None:
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_by_user(user_id)

        dtos = [OrderDTO.from_order(order) for order in orders]
        total = sum((dto.total_price for dto in dtos), Decimal("0"))
        return OrderListDTO(orders=dtos, total_amount=total)

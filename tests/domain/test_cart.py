"""Unit tests for the Cart aggregate."""

import pytest

from storefront.domain.exceptions import (
    CartItemNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _product(pid: str = "p1", price: str = "50.00", stock: int = 5) -> Product:
    return Product(id=pid, name=f"Product {pid}", price=Money.of(price), stock=stock)


class TestAddItem:

    def test_new_line_snapshots_price(self):
        cart = Cart(user_id="u1")
        product = _product(price="50.00")
        item = cart.add(product, 2)

        product.price = Money.of("80.00")

        assert item.price == Money.of("50.00")
        assert cart.total == Money.of("100.00")

    def test_same_product_merges_into_one_line(self):
        cart = Cart(user_id="u1")
        product = _product(stock=5)
        first = cart.add(product, 2)
        second = cart.add(product, 3)

        assert first.id == second.id
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_merge_checks_cumulative_quantity(self):
        cart = Cart(user_id="u1")
        product = _product(stock=4)
        cart.add(product, 3)

        with pytest.raises(InsufficientStockError):
            cart.add(product, 2)
        assert cart.items[0].quantity == 3

    def test_quantity_beyond_stock_rejected(self):
        with pytest.raises(InsufficientStockError):
            Cart(user_id="u1").add(_product(stock=1), 2)

    def test_zero_quantity_rejected(self):
        with pytest.raises(InvalidQuantityError):
            Cart(user_id="u1").add(_product(), 0)


class TestUpdateAndRemove:

    def test_set_quantity(self):
        cart = Cart(user_id="u1")
        product = _product(stock=5)
        item = cart.add(product, 1)
        cart.set_quantity(item.id, 4, product)
        assert cart.total_quantity == 4

    def test_set_quantity_zero_rejected(self):
        cart = Cart(user_id="u1")
        product = _product()
        item = cart.add(product, 1)
        with pytest.raises(InvalidQuantityError, match="greater than 0"):
            cart.set_quantity(item.id, 0, product)

    def test_set_quantity_unknown_item(self):
        with pytest.raises(CartItemNotFoundError):
            Cart(user_id="u1").set_quantity("nope", 1, _product())

    def test_remove_absent_item_is_noop(self):
        cart = Cart(user_id="u1")
        cart.add(_product(), 1)
        cart.remove("nope")
        assert len(cart.items) == 1

    def test_clear(self):
        cart = Cart(user_id="u1")
        cart.add(_product("p1"), 1)
        cart.add(_product("p2"), 1)
        cart.clear()
        assert cart.is_empty
        assert cart.total == Money.of("0")


class TestTotals:

    def test_totals_over_lines(self):
        cart = Cart(user_id="u1")
        cart.add(_product("p1", price="50.00"), 2)
        cart.add(_product("p2", price="12.50"), 1)
        assert cart.total_quantity == 3
        assert cart.total == Money.of("112.50")

"""Unit tests for the ShoppingCartService domain service."""

import threading

from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.shopping_cart_service import ShoppingCartService
from tests.fakes import FakeCartRepository, SlowCartRepository


def _item(product_id: int, qty: int, price: str = "10.00") -> CartItem:
    return CartItem(
        product_id=product_id,
        product_name=f"Product {product_id}",
        unit_price=Money.of(price),
        quantity=Quantity(qty),
    )


class TestAddAndGet:

    def test_add_then_get(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 2))
        items = svc.get_items("CART")
        assert [(i.product_id, i.quantity.value) for i in items] == [(1, 2)]

    def test_repeated_product_merges(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 2, "10.00"))
        items = svc.add_item("CART", _item(1, 3))
        assert len(items) == 1
        assert items[0].quantity == Quantity(5)

    def test_sum_per_distinct_product(self):
        svc = ShoppingCartService(FakeCartRepository())
        adds = [(1, 2), (2, 1), (1, 4), (3, 7), (2, 2), (1, 1)]
        for pid, qty in adds:
            svc.add_item("CART", _item(pid, qty))
        items = svc.get_items("CART")
        assert {i.product_id: i.quantity.value for i in items} == {1: 7, 2: 3, 3: 7}

    def test_unknown_cart_is_empty(self):
        svc = ShoppingCartService(FakeCartRepository())
        assert svc.get_items("NOPE") == []

    def test_carts_are_independent(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("A", _item(1, 1))
        svc.add_item("B", _item(2, 1))
        assert [i.product_id for i in svc.get_items("A")] == [1]
        assert [i.product_id for i in svc.get_items("B")] == [2]

    def test_returned_items_are_copies(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 1))
        items = svc.get_items("CART")
        items[0].quantity = Quantity(99)
        assert svc.get_items("CART")[0].quantity == Quantity(1)


class TestClear:

    def test_clear_then_get_is_empty(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 1))
        svc.add_item("CART", _item(2, 1))
        svc.clear("CART")
        assert svc.get_items("CART") == []

    def test_clear_unknown_cart_is_noop(self):
        repo = FakeCartRepository()
        svc = ShoppingCartService(repo)
        svc.clear("NOPE")
        assert repo.save_count == 0

    def test_clear_twice(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 1))
        svc.clear("CART")
        svc.clear("CART")
        assert svc.get_items("CART") == []

    def test_cart_usable_after_clear(self):
        svc = ShoppingCartService(FakeCartRepository())
        svc.add_item("CART", _item(1, 1))
        svc.clear("CART")
        svc.add_item("CART", _item(1, 2))
        assert svc.get_items("CART")[0].quantity == Quantity(2)


class TestSingleWriter:

    def test_concurrent_adds_to_one_cart_are_not_lost(self):
        svc = ShoppingCartService(SlowCartRepository())
        threads = [
            threading.Thread(target=svc.add_item, args=("CART", _item(1, 1)))
            for _ in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        items = svc.get_items("CART")
        assert len(items) == 1
        assert items[0].quantity == Quantity(20)

    def test_concurrent_adds_across_carts(self):
        svc = ShoppingCartService(SlowCartRepository())
        threads = [
            threading.Thread(target=svc.add_item, args=(f"CART{n % 4}", _item(n % 3 + 1, 1)))
            for n in range(24)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        total = sum(i.quantity.value for n in range(4) for i in svc.get_items(f"CART{n}"))
        assert total == 24

    def test_lock_registry_empties_when_idle(self):
        svc = ShoppingCartService(FakeCartRepository())
        for n in range(50):
            svc.get_items(f"LOOKED-AT-{n}")
        svc.add_item("CART", _item(1, 1))
        svc.clear("CART")
        assert svc._locks == {}

    def test_lock_kept_while_a_writer_waits(self):
        svc = ShoppingCartService(SlowCartRepository())
        threads = [
            threading.Thread(target=svc.add_item, args=("CART", _item(1, 1)))
            for _ in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert svc.get_items("CART")[0].quantity == Quantity(10)
        assert svc._locks == {}

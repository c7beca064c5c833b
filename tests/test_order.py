import pytest

from orderbook.order import Order, OrderModify
from orderbook.types import OrderType, Side


def make(order_type=OrderType.GOOD_TILL_CANCEL, price=100, quantity=10):
    return Order(order_type, 1, Side.BUY, price, quantity)


def test_new_order_is_unfilled():
    order = make()
    assert order.remaining_quantity == 10
    assert order.initial_quantity == 10
    assert order.filled_quantity == 0
    assert not order.is_filled


def test_partial_fill_keeps_invariant():
    order = make()
    order.fill(4)
    assert order.filled_quantity == 4
    assert order.remaining_quantity + order.filled_quantity == order.initial_quantity
    assert not order.is_filled


def test_full_fill():
    order = make()
    order.fill(10)
    assert order.is_filled
    assert order.filled_quantity == order.initial_quantity


def test_overfill_raises():
    order = make()
    with pytest.raises(ValueError, match="remaining quantity"):
        order.fill(11)
    assert order.remaining_quantity == 10


def test_non_market_cannot_change_price():
    order = make()
    with pytest.raises(ValueError, match="only market orders"):
        order.to_good_till_cancel(105)
    assert order.price == 100


def test_market_order_becomes_good_till_cancel():
    order = make(OrderType.MARKET, price=None)
    order.to_good_till_cancel(105)
    assert order.price == 105
    assert order.order_type is OrderType.GOOD_TILL_CANCEL


def test_modify_to_order():
    modify = OrderModify(order_id=7, side=Side.SELL, price=101, quantity=3)
    order = modify.to_order(OrderType.GOOD_FOR_DAY)
    assert order.order_id == 7
    assert order.side is Side.SELL
    assert order.price == 101
    assert order.initial_quantity == 3
    assert order.remaining_quantity == 3
    assert order.order_type is OrderType.GOOD_FOR_DAY
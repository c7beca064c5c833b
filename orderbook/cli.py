"""Small demonstration of adding and cancelling an order."""

from __future__ import annotations

import argparse

from .book import Orderbook
from .order import Order
from .types import OrderType, Side


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="orderbook", description="Add and cancel an order, printing the book size."
    )
    parser.parse_args(argv)

    with Orderbook() as book:
        order_id = 1
        book.add_order(Order(OrderType.GOOD_TILL_CANCEL, order_id, Side.BUY, 100, 10))
        print(len(book))
        book.cancel_order(order_id)
        print(len(book))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
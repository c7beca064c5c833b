"""A price-time priority limit order book."""

from __future__ import annotations

import datetime as dt
import operator
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from sortedcontainers import SortedDict

from .order import Order, OrderModify
from .types import LevelInfo, OrderbookLevelInfos, OrderType, Side, Trade, TradeInfo


class _LevelAction(Enum):
    ADD = auto()
    REMOVE = auto()
    MATCH = auto()


@dataclass
class _LevelData:
    quantity: int = 0
    count: int = 0


def _first(level: dict[int, Order]) -> Order:
    return next(iter(level.values()))


class Orderbook:
    """Matches orders and cancels good-for-day orders at the daily close."""

    def __init__(self, *, market_close: dt.time = dt.time(16, 0)) -> None:
        self._market_close = market_close
        self._data: dict[int, _LevelData] = {}
        self._bids: SortedDict = SortedDict(operator.neg)
        self._asks: SortedDict = SortedDict()
        self._orders: dict[int, Order] = {}
        self._lock = threading.RLock()
        self._shutdown = threading.Event()
        self._prune_thread = threading.Thread(target=self._prune_loop, daemon=True)
        self._prune_thread.start()

    def __enter__(self) -> Orderbook:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Stop the background pruning thread."""
        self._shutdown.set()
        if self._prune_thread.is_alive() and threading.current_thread() is not self._prune_thread:
            self._prune_thread.join()

    def _seconds_until_close(self) -> float:
        now = dt.datetime.now()
        target = now.replace(
            hour=self._market_close.hour, minute=0, second=0, microsecond=0
        )
        if now.hour >= self._market_close.hour:
            target += dt.timedelta(days=1)
        return (target - now).total_seconds() + 0.1

    def _prune_loop(self) -> None:
        while not self._shutdown.wait(self._seconds_until_close()):
            self.prune_good_for_day_orders()

    def prune_good_for_day_orders(self) -> None:
        """Cancel every resting good-for-day order."""
        with self._lock:
            ids = [
                order.order_id
                for order in self._orders.values()
                if order.order_type is OrderType.GOOD_FOR_DAY
            ]
        self.cancel_orders(ids)

    def _can_match(self, side: Side, price: int) -> bool:
        if side is Side.BUY:
            return bool(self._asks) and price >= self._asks.peekitem(0)[0]
        return bool(self._bids) and price <= self._bids.peekitem(0)[0]

    def _can_fully_fill(self, side: Side, price: int, quantity: int) -> bool:
        if not self._can_match(side, price):
            return False
        if side is Side.BUY:
            threshold = self._asks.peekitem(0)[0]
        else:
            threshold = self._bids.peekitem(0)[0]
        for level_price, data in self._data.items():
            if side is Side.BUY and (level_price < threshold or level_price > price):
                continue
            if side is Side.SELL and (level_price > threshold or level_price < price):
                continue
            if quantity <= data.quantity:
                return True
            quantity -= data.quantity
        return False

    def _match_orders(self) -> list[Trade]:
        trades: list[Trade] = []
        while self._bids and self._asks:
            bid_price, bids = self._bids.peekitem(0)
            ask_price, asks = self._asks.peekitem(0)
            if bid_price < ask_price:
                break
            while bids and asks:
                bid = _first(bids)
                ask = _first(asks)
                quantity = min(bid.remaining_quantity, ask.remaining_quantity)
                bid.fill(quantity)
                ask.fill(quantity)
                if bid.is_filled:
                    del bids[bid.order_id]
                    del self._orders[bid.order_id]
                if ask.is_filled:
                    del asks[ask.order_id]
                    del self._orders[ask.order_id]
                trades.append(
                    Trade(
                        TradeInfo(bid.order_id, bid.price, quantity),
                        TradeInfo(ask.order_id, ask.price, quantity),
                    )
                )
                self._on_order_matched(bid.price, quantity, bid.is_filled)
                self._on_order_matched(ask.price, quantity, ask.is_filled)
            if not bids:
                del self._bids[bid_price]
            if not asks:
                del self._asks[ask_price]

        for book in (self._bids, self._asks):
            if book:
                order = _first(book.peekitem(0)[1])
                if order.order_type is OrderType.FILL_AND_KILL:
                    self._cancel_order_internal(order.order_id)
        return trades

    def add_order(self, order: Order) -> list[Trade]:
        """Add an order and return the trades it produced."""
        with self._lock:
            if order.order_id in self._orders:
                return []

            if order.order_type is OrderType.MARKET:
                if order.side is Side.BUY and self._asks:
                    order.to_good_till_cancel(self._asks.peekitem(-1)[0])
                elif order.side is Side.SELL and self._bids:
                    order.to_good_till_cancel(self._bids.peekitem(-1)[0])
                else:
                    return []

            if order.order_type is OrderType.FILL_AND_KILL and not self._can_match(
                order.side, order.price
            ):
                return []

            if order.order_type is OrderType.FILL_OR_KILL and not self._can_fully_fill(
                order.side, order.price, order.initial_quantity
            ):
                return []

            book = self._bids if order.side is Side.BUY else self._asks
            book.setdefault(order.price, {})[order.order_id] = order
            self._orders[order.order_id] = order
            self._update_level_data(order.price, order.initial_quantity, _LevelAction.ADD)
            return self._match_orders()

    def _cancel_order_internal(self, order_id: int) -> None:
        order = self._orders.pop(order_id, None)
        if order is None:
            return
        book = self._asks if order.side is Side.SELL else self._bids
        level = book[order.price]
        del level[order_id]
        if not level:
            del book[order.price]
        self._update_level_data(order.price, order.remaining_quantity, _LevelAction.REMOVE)

    def cancel_order(self, order_id: int) -> None:
        """Cancel an order; unknown ids are ignored."""
        with self._lock:
            self._cancel_order_internal(order_id)

    def cancel_orders(self, order_ids: Iterable[int]) -> None:
        with self._lock:
            for order_id in order_ids:
                self._cancel_order_internal(order_id)

    def modify_order(self, modify: OrderModify) -> list[Trade]:
        """Replace an order, keeping its type; unknown ids yield no trades."""
        with self._lock:
            existing = self._orders.get(modify.order_id)
            if existing is None:
                return []
            self._cancel_order_internal(modify.order_id)
            return self.add_order(modify.to_order(existing.order_type))

    def _update_level_data(self, price: int, quantity: int, action: _LevelAction) -> None:
        data = self._data.setdefault(price, _LevelData())
        if action is _LevelAction.ADD:
            data.count += 1
            data.quantity += quantity
        else:
            if action is _LevelAction.REMOVE:
                data.count -= 1
            data.quantity -= quantity
        if data.count == 0:
            del self._data[price]

    def _on_order_matched(self, price: int, quantity: int, fully_filled: bool) -> None:
        action = _LevelAction.REMOVE if fully_filled else _LevelAction.MATCH
        self._update_level_data(price, quantity, action)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def level_infos(self) -> OrderbookLevelInfos:
        """Aggregate remaining quantity per price level, best prices first."""
        with self._lock:

            def levels(book: SortedDict) -> tuple[LevelInfo, ...]:
                return tuple(
                    LevelInfo(price, sum(o.remaining_quantity for o in orders.values()))
                    for price, orders in book.items()
                )

            return OrderbookLevelInfos(bids=levels(self._bids), asks=levels(self._asks))
# orderbook

A limit order book with price-time priority matching.

Orders rest in the book at their price level. Bids are matched against asks
whenever the best bid reaches the best ask, and each match produces a `Trade`
whose `bid` and `ask` members are `TradeInfo` records (`order_id`, `price`,
`quantity`).

Supported order types (`orderbook.types.OrderType`):

- `GOOD_TILL_CANCEL`: rests until filled or cancelled.
- `FILL_AND_KILL`: accepted only if it can match right away; whatever is left
  of it after matching is cancelled.
- `FILL_OR_KILL`: accepted only if the opposite side holds enough quantity at
  acceptable prices to fill it in full.
- `GOOD_FOR_DAY`: like good-till-cancel, but cancelled at the daily close.
- `MARKET`: takes the worst opposite price currently in the book and then
  behaves as good-till-cancel.

## Installation

```
pip install .
```

## Usage

```python
from orderbook.book import Orderbook
from orderbook.order import Order, OrderModify
from orderbook.types import OrderType, Side

with Orderbook() as book:
    book.add_order(Order(OrderType.GOOD_TILL_CANCEL, 1, Side.BUY, 100, 10))
    trades = book.add_order(Order(OrderType.GOOD_TILL_CANCEL, 2, Side.SELL, 100, 4))
    for trade in trades:
        print(trade.bid, trade.ask)

    print(len(book))                 # orders still resting
    infos = book.level_infos()
    print(infos.bids, infos.asks)    # LevelInfo(price, quantity) tuples, best price first

    book.modify_order(OrderModify(1, Side.BUY, 101, 8))
    book.cancel_order(1)
```

### Orders

`orderbook.order.Order(order_type, order_id, side, price, initial_quantity)`
tracks `remaining_quantity`, `filled_quantity` and `is_filled`. `fill()`
raises `ValueError` when asked to fill more than remains, and
`to_good_till_cancel()` raises `ValueError` on anything but a market order.
A market order may be given `None` as its price.

`OrderModify(order_id, side, price, quantity)` describes a replacement;
`Orderbook.modify_order()` cancels the existing order and adds a new one with
the same order type. An unknown id yields no trades.

### The book

`Orderbook.add_order()` returns the list of trades the order produced.
Adding an order whose id is already in the book, a market order with nothing
to trade against, a fill-and-kill order that cannot match, or a fill-or-kill
order that cannot be filled in full, leaves the book unchanged and returns an
empty list. `cancel_order()` and `cancel_orders()` ignore unknown ids.

The book runs a background thread that cancels good-for-day orders at the
market close, 16:00 local time by default; pass
`Orderbook(market_close=datetime.time(...))` to choose another hour (only the
hour is used). Use the book as a context manager, or call `close()` when done,
to stop that thread. `prune_good_for_day_orders()` cancels every good-for-day
order straight away.

## Command line

```
orderbook
```

Adds a single buy order, prints the number of resting orders, cancels it and
prints the count again. It takes no options besides `--help`.

## What it does not do

The book lives in memory only: it does not store orders or trades anywhere,
and it offers no network interface or order entry protocol.
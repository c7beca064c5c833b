"""Core value types shared by orders, trades and the order book."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OrderType(Enum):
    """How long an order may rest and how it may be filled."""

    GOOD_TILL_CANCEL = auto()
    FILL_AND_KILL = auto()
    FILL_OR_KILL = auto()
    GOOD_FOR_DAY = auto()
    MARKET = auto()


class Side(Enum):
    """Which side of the book an order belongs to."""

    BUY = auto()
    SELL = auto()


@dataclass(frozen=True)
class LevelInfo:
    """Aggregated remaining quantity resting at one price."""

    price: int
    quantity: int


@dataclass(frozen=True)
class OrderbookLevelInfos:
    """Snapshot of the book: bids best-first (descending), asks best-first (ascending)."""

    bids: tuple[LevelInfo, ...]
    asks: tuple[LevelInfo, ...]


@dataclass(frozen=True)
class TradeInfo:
    """One side of a trade."""

    order_id: int
    price: int
    quantity: int


@dataclass(frozen=True)
class Trade:
    """A match between a bid and an ask."""

    bid: TradeInfo
    ask: TradeInfo
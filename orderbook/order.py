"""Orders and order modifications."""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import OrderType, Side


@dataclass(eq=False)
class Order:
    """A single order; market orders start without a price."""

    order_type: OrderType
    order_id: int
    side: Side
    price: int | None
    initial_quantity: int
    remaining_quantity: int = field(init=False)

    def __post_init__(self) -> None:
        self.remaining_quantity = self.initial_quantity

    @property
    def filled_quantity(self) -> int:
        return self.initial_quantity - self.remaining_quantity

    @property
    def is_filled(self) -> bool:
        return self.remaining_quantity == 0

    def fill(self, quantity: int) -> None:
        """Reduce the remaining quantity; overfilling is an error."""
        if quantity > self.remaining_quantity:
            raise ValueError(
                f"Order ({self.order_id}) cannot be filled for more than its remaining quantity"
            )
        self.remaining_quantity -= quantity

    def to_good_till_cancel(self, price: int) -> None:
        """Give a market order a price and make it good-till-cancel."""
        if self.order_type is not OrderType.MARKET:
            raise ValueError(
                f"Order ({self.order_id}) cannot have its price adjusted, only market orders can."
            )
        self.price = price
        self.order_type = OrderType.GOOD_TILL_CANCEL


@dataclass(frozen=True)
class OrderModify:
    """A request to replace an existing order with new terms."""

    order_id: int
    side: Side
    price: int
    quantity: int

    def to_order(self, order_type: OrderType) -> Order:
        return Order(order_type, self.order_id, self.side, self.price, self.quantity)
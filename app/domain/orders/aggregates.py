from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


@dataclass
class OrderLine:
    """One product line of an order.

    ``product_name`` and ``product_sku`` are captured when the order is placed
    and are never refreshed from the catalog afterwards.
    """

    product_ref: int
    product_name: str
    product_sku: str
    quantity: int | None
    unit_price: Decimal | None
    line_id: int | None = None

    @property
    def total_price(self) -> Decimal | None:
        if self.quantity is None or self.unit_price is None:
            return None
        return self.unit_price * self.quantity


@dataclass
class OrderAggregate:
    customer_ref: int | None
    shipping_address: str | None = None
    notes: str | None = None
    lines: list[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    order_number: str | None = None
    order_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def total_amount(self) -> Decimal:
        # Incomplete lines contribute zero instead of failing the whole order.
        return sum(
            (line.total_price for line in self.lines if line.total_price is not None),
            Decimal("0"),
        )

    def add_line(self, line: OrderLine) -> None:
        self.lines.append(replace(line))

    def remove_line(self, line: OrderLine) -> None:
        # Removing a line the order does not hold is a no-op.
        if line in self.lines:
            self.lines.remove(line)

    def replace_lines(self, lines: Iterable[OrderLine]) -> None:
        self.lines = [replace(line) for line in lines]

    def can_be_cancelled(self) -> bool:
        return self.status in {OrderStatus.PENDING, OrderStatus.CONFIRMED}

    def is_terminal(self) -> bool:
        return self.status in {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}

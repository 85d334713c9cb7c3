from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from app.domain.orders.aggregates import OrderAggregate, OrderStatus


@dataclass(frozen=True)
class UserSummary:
    id: int | None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class OrderRepository(Protocol):
    def save(self, order: OrderAggregate) -> OrderAggregate:
        ...

    def find_by_id(self, order_id: int) -> OrderAggregate | None:
        ...

    def find_by_order_number(self, order_number: str) -> OrderAggregate | None:
        ...

    def find_all(self) -> list[OrderAggregate]:
        ...

    def find_by_customer(self, customer_ref: int) -> list[OrderAggregate]:
        ...

    def find_by_status(self, status: OrderStatus) -> list[OrderAggregate]:
        ...

    def delete_by_id(self, order_id: int) -> None:
        ...

    def exists_by_order_number(self, order_number: str) -> bool:
        ...


class UserEnrichmentClient(Protocol):
    """Remote user lookup.

    Implementations own their timeout and must report both "unreachable" and
    "unknown user" as ``None`` rather than raising.
    """

    def lookup(self, customer_ref: int) -> UserSummary | None:
        ...

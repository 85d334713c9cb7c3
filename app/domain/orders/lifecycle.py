from __future__ import annotations

from app.domain.orders.aggregates import OrderAggregate, OrderStatus
from app.domain.orders.errors import InvalidTransitionError, NotCancellableError

TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
)

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}


def is_allowed(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS.get(current, frozenset())


def transition(order: OrderAggregate, requested: OrderStatus) -> OrderAggregate:
    requested = OrderStatus(requested)
    if not is_allowed(order.status, requested):
        raise InvalidTransitionError(order.status, requested)
    order.status = requested
    return order


def cancel(order: OrderAggregate) -> OrderAggregate:
    # can_be_cancelled() agrees with the table today; it is checked first so
    # callers get NotCancellableError rather than the generic transition error.
    if not order.can_be_cancelled():
        raise NotCancellableError(order.status)
    return transition(order, OrderStatus.CANCELLED)

from __future__ import annotations

import logging
from typing import Callable, Iterable

from app.domain.orders import lifecycle
from app.domain.orders.aggregates import OrderAggregate, OrderStatus
from app.domain.orders.commands import CreateOrderCommand
from app.domain.orders.errors import NotFoundError
from app.domain.orders.numbering import generate_order_number
from app.domain.orders.ports import OrderRepository, UserEnrichmentClient, UserSummary
from app.domain.orders.projections import OrderView, build_order_view

logger = logging.getLogger(__name__)


class OrderService:
    """Order use cases on top of the repository and user-lookup ports.

    Domain errors (``NotFoundError``, ``InvalidTransitionError``,
    ``NotCancellableError``, ``DuplicateIdentifierError``) propagate to the
    caller unchanged. User enrichment is best-effort: a failed lookup leaves
    ``OrderView.user`` empty and never fails the read.
    """

    def __init__(
        self,
        repository: OrderRepository,
        users: UserEnrichmentClient | None = None,
        number_factory: Callable[[], str] | None = None,
    ):
        self.repository = repository
        self.users = users
        self.number_factory = number_factory or generate_order_number

    def create_order(self, command: CreateOrderCommand) -> OrderAggregate:
        order = OrderAggregate(
            customer_ref=command.customer_ref,
            shipping_address=command.shipping_address,
            notes=command.notes,
        )
        order.replace_lines(command.to_lines())
        order.order_number = self.number_factory()
        order.status = OrderStatus.PENDING
        saved = self.repository.save(order)
        logger.info(
            "order created: order_number=%s customer_ref=%s total=%s",
            saved.order_number,
            saved.customer_ref,
            saved.total_amount,
        )
        return saved

    def get_order(self, order_id: int) -> OrderAggregate:
        order = self.repository.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", "id", order_id)
        return order

    def get_order_by_number(self, order_number: str) -> OrderAggregate:
        order = self.repository.find_by_order_number(order_number)
        if order is None:
            raise NotFoundError("Order", "orderNumber", order_number)
        return order

    def list_orders(self) -> list[OrderAggregate]:
        return self.repository.find_all()

    def list_orders_by_customer(self, customer_ref: int) -> list[OrderAggregate]:
        return self.repository.find_by_customer(customer_ref)

    def list_orders_by_status(self, status: OrderStatus) -> list[OrderAggregate]:
        return self.repository.find_by_status(OrderStatus(status))

    def update_status(self, order_id: int, status: OrderStatus) -> OrderAggregate:
        order = self.get_order(order_id)
        previous = order.status
        lifecycle.transition(order, status)
        saved = self.repository.save(order)
        logger.info("order status changed: id=%s %s -> %s", order_id, previous.value, saved.status.value)
        return saved

    def cancel_order(self, order_id: int) -> OrderAggregate:
        order = self.get_order(order_id)
        lifecycle.cancel(order)
        saved = self.repository.save(order)
        logger.info("order cancelled: id=%s order_number=%s", order_id, saved.order_number)
        return saved

    def delete_order(self, order_id: int) -> None:
        # Any status may be deleted; only existence is checked.
        self.get_order(order_id)
        self.repository.delete_by_id(order_id)
        logger.info("order deleted: id=%s", order_id)

    def _lookup_user(self, customer_ref: int | None) -> UserSummary | None:
        if self.users is None or customer_ref is None:
            return None
        try:
            return self.users.lookup(customer_ref)
        except Exception as exc:
            logger.warning("user enrichment failed for customer_ref=%s: %s", customer_ref, exc)
            return None

    def view(self, order: OrderAggregate) -> OrderView:
        return build_order_view(order, self._lookup_user(order.customer_ref))

    def view_many(self, orders: Iterable[OrderAggregate]) -> list[OrderView]:
        orders = list(orders)
        # One lookup per distinct customer for the whole batch.
        users: dict[int | None, UserSummary | None] = {}
        for order in orders:
            if order.customer_ref not in users:
                users[order.customer_ref] = self._lookup_user(order.customer_ref)
        return [build_order_view(order, users[order.customer_ref]) for order in orders]

from app.domain.orders.aggregates import OrderAggregate, OrderLine, OrderStatus
from app.domain.orders.errors import (
    DuplicateIdentifierError,
    InvalidTransitionError,
    NotCancellableError,
    NotFoundError,
    OrderDomainError,
)
from app.domain.orders.ports import OrderRepository, UserEnrichmentClient, UserSummary
from app.domain.orders.service import OrderService

__all__ = [
    "DuplicateIdentifierError",
    "InvalidTransitionError",
    "NotCancellableError",
    "NotFoundError",
    "OrderAggregate",
    "OrderDomainError",
    "OrderLine",
    "OrderRepository",
    "OrderService",
    "OrderStatus",
    "UserEnrichmentClient",
    "UserSummary",
]

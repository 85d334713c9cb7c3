from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.domain.orders.aggregates import OrderAggregate, OrderLine, OrderStatus
from app.domain.orders.ports import UserSummary


class _View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserView(_View):
    id: int | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class OrderLineView(_View):
    id: int | None = None
    product_id: int
    product_name: str
    product_sku: str
    quantity: int | None = None
    unit_price: Decimal | None = None
    total_price: Decimal | None = None


class OrderView(_View):
    id: int | None = None
    order_number: str | None = None
    user_id: int | None = None
    user: UserView | None = None
    status: OrderStatus
    total_amount: Decimal
    shipping_address: str | None = None
    notes: str | None = None
    items: list[OrderLineView]
    item_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _line_view(line: OrderLine) -> OrderLineView:
    return OrderLineView(
        id=line.line_id,
        product_id=line.product_ref,
        product_name=line.product_name,
        product_sku=line.product_sku,
        quantity=line.quantity,
        unit_price=line.unit_price,
        total_price=line.total_price,
    )


def build_order_view(order: OrderAggregate, user: UserSummary | None = None) -> OrderView:
    items = [_line_view(line) for line in order.lines]
    return OrderView(
        id=order.order_id,
        order_number=order.order_number,
        user_id=order.customer_ref,
        user=UserView(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )
        if user is not None
        else None,
        status=order.status,
        total_amount=order.total_amount,
        shipping_address=order.shipping_address,
        notes=order.notes,
        items=items,
        item_count=len(items),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )

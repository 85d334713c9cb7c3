from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.domain.orders.aggregates import OrderAggregate, OrderLine, OrderStatus
from app.domain.orders.errors import DuplicateIdentifierError, NotFoundError
from app.persistence.models import OrderLineModel, OrderModel


def _to_line(row: OrderLineModel) -> OrderLine:
    return OrderLine(
        product_ref=row.product_id,
        product_name=row.product_name,
        product_sku=row.product_sku,
        quantity=row.quantity,
        unit_price=row.unit_price,
        line_id=row.id,
    )


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on DateTime(timezone=True); stored values are UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def to_aggregate(model: OrderModel) -> OrderAggregate:
    return OrderAggregate(
        customer_ref=model.user_id,
        shipping_address=model.shipping_address,
        notes=model.notes,
        lines=[_to_line(row) for row in model.lines],
        status=OrderStatus(model.status),
        order_number=model.order_number,
        order_id=model.id,
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
    )


class SqlAlchemyOrderRepository:
    def __init__(self, session: Session):
        self.session = session

    def _base_query(self):
        return select(OrderModel).options(selectinload(OrderModel.lines)).order_by(OrderModel.id.asc())

    def _apply(self, model: OrderModel, order: OrderAggregate) -> None:
        model.order_number = order.order_number
        model.user_id = order.customer_ref
        model.status = OrderStatus(order.status).value
        model.total_amount = order.total_amount
        model.shipping_address = order.shipping_address
        model.notes = order.notes

        existing = {row.id: row for row in model.lines}
        rows: list[OrderLineModel] = []
        for line in order.lines:
            row = existing.get(line.line_id) if line.line_id is not None else None
            if row is None:
                row = OrderLineModel()
            row.product_id = line.product_ref
            row.product_name = line.product_name
            row.product_sku = line.product_sku
            row.quantity = line.quantity
            row.unit_price = line.unit_price
            row.total_price = line.total_price
            rows.append(row)
        # Lines dropped from the aggregate become orphans and are deleted.
        model.lines = rows

    def save(self, order: OrderAggregate) -> OrderAggregate:
        if order.order_id is None:
            model = OrderModel()
            self.session.add(model)
        else:
            model = self.session.get(OrderModel, order.order_id)
            if model is None:
                raise NotFoundError("Order", "id", order.order_id)
        self._apply(model, order)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            if "order_number" in str(exc.orig):
                raise DuplicateIdentifierError("orderNumber", order.order_number) from exc
            raise
        return to_aggregate(model)

    def find_by_id(self, order_id: int) -> OrderAggregate | None:
        model = self.session.scalar(self._base_query().where(OrderModel.id == order_id))
        return to_aggregate(model) if model is not None else None

    def find_by_order_number(self, order_number: str) -> OrderAggregate | None:
        model = self.session.scalar(self._base_query().where(OrderModel.order_number == order_number))
        return to_aggregate(model) if model is not None else None

    def find_all(self) -> list[OrderAggregate]:
        return [to_aggregate(m) for m in self.session.scalars(self._base_query()).all()]

    def find_by_customer(self, customer_ref: int) -> list[OrderAggregate]:
        stmt = self._base_query().where(OrderModel.user_id == customer_ref)
        return [to_aggregate(m) for m in self.session.scalars(stmt).all()]

    def find_by_status(self, status: OrderStatus) -> list[OrderAggregate]:
        stmt = self._base_query().where(OrderModel.status == OrderStatus(status).value)
        return [to_aggregate(m) for m in self.session.scalars(stmt).all()]

    def delete_by_id(self, order_id: int) -> None:
        model = self.session.get(OrderModel, order_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.flush()

    def exists_by_order_number(self, order_number: str) -> bool:
        stmt = select(OrderModel.id).where(OrderModel.order_number == order_number).limit(1)
        return self.session.scalar(stmt) is not None

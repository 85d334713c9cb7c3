from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.domain.orders.aggregates import OrderAggregate, OrderLine, OrderStatus
from app.domain.orders.errors import DuplicateIdentifierError
from app.persistence.models import OrderLineModel
from app.persistence.order_repository import SqlAlchemyOrderRepository


def _order(number: str, customer_ref: int = 1, status: OrderStatus = OrderStatus.PENDING) -> OrderAggregate:
    order = OrderAggregate(customer_ref=customer_ref, shipping_address="1 Test Rd", status=status)
    order.order_number = number
    order.add_line(OrderLine(1, "Notebook", "NB-A5", 2, Decimal("10.00")))
    order.add_line(OrderLine(2, "Pen", "PEN-BLK", 1, Decimal("5.00")))
    return order


def test_save_assigns_identity_and_timestamps(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    saved = repo.save(_order("ORD-1"))

    assert saved.order_id is not None
    assert all(line.line_id is not None for line in saved.lines)
    assert saved.created_at is not None
    assert saved.updated_at is not None
    assert saved.total_amount == Decimal("25.00")


def test_round_trip_preserves_lines(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    saved = repo.save(_order("ORD-1"))
    memory_session.commit()
    memory_session.expire_all()

    loaded = repo.find_by_id(saved.order_id)
    assert loaded is not None
    assert loaded.order_number == "ORD-1"
    assert [(l.product_sku, l.quantity, l.unit_price) for l in loaded.lines] == [
        ("NB-A5", 2, Decimal("10.00")),
        ("PEN-BLK", 1, Decimal("5.00")),
    ]
    assert loaded.total_amount == Decimal("25.00")
    assert repo.find_by_id(saved.order_id) == loaded


def test_duplicate_order_number_raises(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    repo.save(_order("ORD-DUP"))
    memory_session.commit()

    with pytest.raises(DuplicateIdentifierError) as info:
        repo.save(_order("ORD-DUP", customer_ref=2))
    assert info.value.value == "ORD-DUP"


def test_status_update_and_line_replacement(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    saved = repo.save(_order("ORD-1"))

    saved.status = OrderStatus.CONFIRMED
    saved.replace_lines([saved.lines[0]])
    repo.save(saved)
    memory_session.commit()

    loaded = repo.find_by_order_number("ORD-1")
    assert loaded.status is OrderStatus.CONFIRMED
    assert len(loaded.lines) == 1
    assert loaded.lines[0].line_id == saved.lines[0].line_id
    assert loaded.total_amount == Decimal("20.00")
    assert memory_session.scalar(select(func.count()).select_from(OrderLineModel)) == 1


def test_finders(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    a = repo.save(_order("ORD-A", customer_ref=1))
    b = repo.save(_order("ORD-B", customer_ref=2, status=OrderStatus.SHIPPED))
    c = repo.save(_order("ORD-C", customer_ref=1))

    assert [o.order_id for o in repo.find_all()] == [a.order_id, b.order_id, c.order_id]
    assert [o.order_id for o in repo.find_by_customer(1)] == [a.order_id, c.order_id]
    assert [o.order_id for o in repo.find_by_status(OrderStatus.SHIPPED)] == [b.order_id]
    assert repo.find_by_order_number("ORD-ZZZ") is None
    assert repo.exists_by_order_number("ORD-B") is True
    assert repo.exists_by_order_number("ORD-ZZZ") is False


def test_delete_removes_order_and_lines(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    saved = repo.save(_order("ORD-1"))
    repo.delete_by_id(saved.order_id)
    memory_session.commit()

    assert repo.find_by_id(saved.order_id) is None
    assert memory_session.scalar(select(func.count()).select_from(OrderLineModel)) == 0


def test_reloaded_timestamps_are_utc(memory_session):
    repo = SqlAlchemyOrderRepository(memory_session)
    saved = repo.save(_order("ORD-UTC"))
    memory_session.commit()
    memory_session.expire_all()

    loaded = repo.find_by_id(saved.order_id)
    assert loaded.created_at.tzinfo is not None
    assert loaded.created_at.utcoffset() == timedelta(0)
    assert loaded.updated_at.tzinfo is not None
    assert loaded.created_at == saved.created_at

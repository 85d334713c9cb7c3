from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.utils import success
from app.clients.user_service import build_user_client
from app.core.config import get_settings
from app.domain.orders.aggregates import OrderStatus
from app.domain.orders.commands import CreateOrderCommand, StatusUpdateCommand
from app.domain.orders.numbering import generate_order_number
from app.domain.orders.ports import UserEnrichmentClient
from app.domain.orders.service import OrderService
from app.persistence.order_repository import SqlAlchemyOrderRepository
from app.persistence.pg import get_session

router = APIRouter(prefix="/orders", tags=["orders"])


def get_user_client() -> UserEnrichmentClient:
    return build_user_client()


def get_order_service(
    session: Session = Depends(get_session),
    users: UserEnrichmentClient = Depends(get_user_client),
) -> OrderService:
    prefix = get_settings().order_number_prefix
    return OrderService(
        SqlAlchemyOrderRepository(session),
        users=users,
        number_factory=lambda: generate_order_number(prefix),
    )


@router.post("", status_code=201)
def create_order(request: CreateOrderCommand, service: OrderService = Depends(get_order_service)):
    order = service.create_order(request)
    return JSONResponse(
        status_code=201,
        content=success(service.view(order).to_payload(), message="Created successfully"),
    )


@router.get("")
def list_orders(service: OrderService = Depends(get_order_service)):
    views = service.view_many(service.list_orders())
    return success([v.to_payload() for v in views])


@router.get("/number/{order_number}")
def get_order_by_number(order_number: str, service: OrderService = Depends(get_order_service)):
    return success(service.view(service.get_order_by_number(order_number)).to_payload())


@router.get("/user/{user_id}")
def list_orders_by_user(user_id: int, service: OrderService = Depends(get_order_service)):
    views = service.view_many(service.list_orders_by_customer(user_id))
    return success([v.to_payload() for v in views])


@router.get("/status/{status}")
def list_orders_by_status(status: OrderStatus, service: OrderService = Depends(get_order_service)):
    views = service.view_many(service.list_orders_by_status(status))
    return success([v.to_payload() for v in views])


@router.get("/{order_id}")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return success(service.view(service.get_order(order_id)).to_payload())


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    request: StatusUpdateCommand,
    service: OrderService = Depends(get_order_service),
):
    order = service.update_status(order_id, request.status)
    return success(service.view(order).to_payload(), message="Order status updated successfully")


@router.post("/{order_id}/cancel")
def cancel_order(order_id: int, service: OrderService = Depends(get_order_service)):
    order = service.cancel_order(order_id)
    return success(service.view(order).to_payload(), message="Order cancelled successfully")


@router.delete("/{order_id}")
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    service.delete_order(order_id)
    return success(None, message="Order deleted successfully")

from __future__ import annotations

import argparse
import json
import sys

from app.clients.user_service import build_user_client
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.domain.orders.aggregates import OrderStatus
from app.domain.orders.errors import OrderDomainError
from app.domain.orders.numbering import generate_order_number
from app.domain.orders.service import OrderService
from app.persistence.order_repository import SqlAlchemyOrderRepository
from app.persistence.pg import init_db, session_scope

STATUS_CHOICES = [status.value for status in OrderStatus]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Order service CLI")
    parser.add_argument("--no-enrich", action="store_true", help="Skip user-service lookups")
    top = parser.add_subparsers(dest="command", required=True)

    db = top.add_parser("db", help="Database operations")
    db_sub = db.add_subparsers(dest="db_command", required=True)
    db_sub.add_parser("init", help="Create tables")

    serve = top.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    orders = top.add_parser("orders", help="Order operations")
    orders_sub = orders.add_subparsers(dest="orders_command", required=True)

    list_cmd = orders_sub.add_parser("list", help="List orders")
    list_filter = list_cmd.add_mutually_exclusive_group()
    list_filter.add_argument("--status", choices=STATUS_CHOICES, default=None)
    list_filter.add_argument("--customer", type=int, default=None)

    show = orders_sub.add_parser("show", help="Show one order by order number")
    show.add_argument("order_number")

    advance = orders_sub.add_parser("advance", help="Move an order to a new status")
    advance.add_argument("order_id", type=int)
    advance.add_argument("status", choices=STATUS_CHOICES)

    cancel = orders_sub.add_parser("cancel", help="Cancel an order")
    cancel.add_argument("order_id", type=int)

    return parser


def _print(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _run_orders(args: argparse.Namespace) -> int:
    prefix = get_settings().order_number_prefix
    with session_scope() as session:
        service = OrderService(
            SqlAlchemyOrderRepository(session),
            users=None if args.no_enrich else build_user_client(),
            number_factory=lambda: generate_order_number(prefix),
        )
        if args.orders_command == "list":
            if args.status:
                orders = service.list_orders_by_status(OrderStatus(args.status))
            elif args.customer is not None:
                orders = service.list_orders_by_customer(args.customer)
            else:
                orders = service.list_orders()
            _print([view.to_payload() for view in service.view_many(orders)])
            return 0
        if args.orders_command == "show":
            order = service.get_order_by_number(args.order_number)
        elif args.orders_command == "advance":
            order = service.update_status(args.order_id, OrderStatus(args.status))
        else:
            order = service.cancel_order(args.order_id)
        _print(service.view(order).to_payload())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "db" and args.db_command == "init":
        init_db()
        _print({"status": "ok"})
        return 0

    if args.command == "serve":
        import uvicorn

        settings = get_settings()
        uvicorn.run("app.main:app", host=args.host or settings.api_host, port=args.port or settings.api_port)
        return 0

    if args.command == "orders":
        init_db()
        try:
            return _run_orders(args)
        except OrderDomainError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routes_orders import router as orders_router
from app.api.utils import error, now_utc
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.domain.orders.errors import (
    DuplicateIdentifierError,
    InvalidTransitionError,
    NotCancellableError,
    NotFoundError,
)
from app.persistence.pg import init_db

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.app_version)

ENDPOINTS = {
    "GET /orders": "Get all orders",
    "GET /orders/{id}": "Get order by ID",
    "GET /orders/number/{orderNumber}": "Get order by order number",
    "GET /orders/user/{userId}": "Get orders by user ID",
    "GET /orders/status/{status}": "Get orders by status",
    "POST /orders": "Create a new order",
    "PATCH /orders/{id}/status": "Update order status",
    "POST /orders/{id}/cancel": "Cancel an order",
    "DELETE /orders/{id}": "Delete an order",
    "GET /docs": "Swagger UI documentation",
    "GET /openapi.json": "OpenAPI specification (JSON)",
    "GET /healthz": "Health check endpoint",
}


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("%s %s ready (env=%s)", settings.app_name, settings.app_version, settings.env)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content=error(str(exc), request.url.path))


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return JSONResponse(status_code=400, content=error(str(exc), request.url.path))


@app.exception_handler(NotCancellableError)
async def not_cancellable_handler(request: Request, exc: NotCancellableError):
    return JSONResponse(status_code=400, content=error(str(exc), request.url.path))


@app.exception_handler(DuplicateIdentifierError)
async def duplicate_identifier_handler(request: Request, exc: DuplicateIdentifierError):
    logger.warning("duplicate identifier on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=409, content=error(str(exc), request.url.path))


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    details = ", ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=error(f"Validation failed: {details}", request.url.path))


@app.get("/")
def service_info() -> dict:
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "description": settings.app_description,
        "status": "UP",
        "timestamp": now_utc().isoformat().replace("+00:00", "Z"),
        "endpoints": ENDPOINTS,
    }


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(orders_router)

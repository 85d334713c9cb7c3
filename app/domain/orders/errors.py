from __future__ import annotations

from typing import Any


class OrderDomainError(Exception):
    pass


class NotFoundError(OrderDomainError, LookupError):
    def __init__(self, resource: str, field: str, value: Any):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} not found with {field}: '{value}'")


class InvalidTransitionError(OrderDomainError, ValueError):
    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"Invalid status transition from {_name(current)} to {_name(requested)}")


class NotCancellableError(OrderDomainError, ValueError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Order cannot be cancelled. Current status: {_name(status)}")


class DuplicateIdentifierError(OrderDomainError, ValueError):
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"duplicate {field}: '{value}'")


def _name(status) -> str:
    return getattr(status, "value", str(status))

from __future__ import annotations

from datetime import date
from uuid import uuid4


def generate_order_number(prefix: str = "ORD", today: date | None = None) -> str:
    """Return an order number such as ``ORD-20240115-A1B2C``.

    The random suffix makes collisions unlikely but not impossible; the
    repository's unique constraint is what actually enforces uniqueness.
    """
    day = (today or date.today()).strftime("%Y%m%d")
    suffix = uuid4().hex[:5].upper()
    return f"{prefix}-{day}-{suffix}"

from __future__ import annotations

import re
from datetime import date

from app.domain.orders.numbering import generate_order_number


def test_order_number_format():
    number = generate_order_number(today=date(2024, 1, 15))
    assert re.fullmatch(r"ORD-20240115-[0-9A-F]{5}", number)


def test_order_number_prefix_is_configurable():
    assert generate_order_number("SHOP").startswith("SHOP-")


def test_order_numbers_vary():
    numbers = {generate_order_number() for _ in range(50)}
    assert len(numbers) > 1

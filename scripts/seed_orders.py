#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json

import requests

SAMPLE_ORDERS = [
    {
        "userId": 1,
        "shippingAddress": "123 Main St, Springfield, 12345",
        "notes": "Leave at door",
        "items": [
            {"productId": 1, "productName": "iPhone 15 Pro", "productSku": "IPHONE-15-PRO-256", "quantity": 1, "unitPrice": "999.99"},
            {"productId": 4, "productName": "USB-C Cable", "productSku": "CABLE-USBC-2M", "quantity": 2, "unitPrice": "19.90"},
        ],
    },
    {
        "userId": 2,
        "shippingAddress": "42 Harbour Rd, Portsmouth, PO1 2AB",
        "items": [
            {"productId": 2, "productName": "MacBook Air 13", "productSku": "MBA-13-M3-512", "quantity": 1, "unitPrice": "1299.00"},
        ],
    },
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Create sample orders against a running order service")
    parser.add_argument("--base-url", default="http://localhost:8083")
    parser.add_argument("--confirm", action="store_true", help="Also move each new order to CONFIRMED")
    args = parser.parse_args()

    created = []
    for body in SAMPLE_ORDERS:
        resp = requests.post(f"{args.base_url}/orders", json=body, timeout=30)
        resp.raise_for_status()
        order = resp.json()["data"]
        if args.confirm:
            resp = requests.patch(
                f"{args.base_url}/orders/{order['id']}/status",
                json={"status": "CONFIRMED"},
                timeout=30,
            )
            resp.raise_for_status()
            order = resp.json()["data"]
        created.append({"id": order["id"], "orderNumber": order["orderNumber"], "status": order["status"]})
    print(json.dumps(created, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()

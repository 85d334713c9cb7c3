from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp() -> str:
    return now_utc().isoformat().replace("+00:00", "Z")


def success(data: Any = None, message: str = "Success") -> dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": _timestamp(),
    }


def error(message: str, path: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": False,
        "message": message,
        "data": None,
        "timestamp": _timestamp(),
    }
    if path is not None:
        body["path"] = path
    return body

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import Settings, get_settings
from app.domain.orders.ports import UserEnrichmentClient, UserSummary

logger = logging.getLogger(__name__)


class HttpUserServiceClient:
    """Looks up users in the user service for order views.

    Every failure mode (timeout, connection error, non-2xx, unexpected body)
    ends as ``None`` with a single warning; there is no retry.
    """

    backend_name = "http"

    def __init__(self, settings: Settings | None = None, transport: httpx.BaseTransport | None = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.user_service_url.rstrip("/")
        self.timeout = self.settings.user_service_timeout_seconds
        self.transport = transport

    def _request(self, path: str) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict):
            return payload
        return {"data": payload}

    @staticmethod
    def _to_summary(data: dict[str, Any]) -> UserSummary:
        raw_id = data.get("id")
        return UserSummary(
            id=int(raw_id) if isinstance(raw_id, (int, str)) and str(raw_id).isdigit() else None,
            username=data.get("username"),
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
        )

    def lookup(self, customer_ref: int) -> UserSummary | None:
        logger.debug("fetching user %s from %s", customer_ref, self.base_url)
        try:
            payload = self._request(f"/users/{customer_ref}")
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("failed to fetch user with id %s: %s", customer_ref, exc)
            return None

        data = payload.get("data")
        if not isinstance(data, dict):
            logger.warning("user service response for id %s has no data object", customer_ref)
            return None
        return self._to_summary(data)


class NullUserServiceClient:
    backend_name = "null"

    def lookup(self, customer_ref: int) -> UserSummary | None:
        return None


def build_user_client(settings: Settings | None = None) -> UserEnrichmentClient:
    cfg = settings or get_settings()
    if cfg.user_enrichment_enabled:
        return HttpUserServiceClient(cfg)
    return NullUserServiceClient()

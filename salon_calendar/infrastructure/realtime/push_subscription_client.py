from __future__ import annotations

import logging

import httpx

from salon_calendar.application.exceptions import NetworkFailure
from salon_calendar.application.ports.push_channel import PushChannelPort
from salon_calendar.core.config import settings


class PushSubscriptionClient(PushChannelPort):
    """Registers this service's webhook for a realtime room on the admin backend."""

    def __init__(
        self,
        base_url: str | None = None,
        callback_url: str | None = None,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.ADMIN_API_BASE_URL or "").rstrip("/")
        self._callback_url = callback_url or settings.REALTIME_CALLBACK_URL
        self._token = token if token is not None else settings.ADMIN_API_TOKEN
        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("ADMIN_API_BASE_URL is required for push subscriptions")

    async def subscribe(self, room: str) -> None:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        body = {"room": room, "callbackUrl": self._callback_url}

        try:
            response = await self._client.post(f"{self._base_url}/realtime/subscribe", json=body, headers=headers)
        except httpx.HTTPError as e:
            raise NetworkFailure(str(e) or "Network error") from e

        if response.status_code >= 400:
            raise NetworkFailure(f"Subscribe failed: HTTP {response.status_code}", status_code=response.status_code)

        self._logger.info("Push subscription registered", extra={"reason": room})

    async def aclose(self) -> None:
        await self._client.aclose()

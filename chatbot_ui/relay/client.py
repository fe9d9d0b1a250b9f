from __future__ import annotations

import os
from typing import Optional

import httpx

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")


class RelayError(Exception):
    """The relay call did not succeed (network, status or body)."""


class RelayClient:
    """Async client for the backend `POST /api/chat` endpoint."""

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        *,
        timeout: Optional[float] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def send(self, message: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                r = await client.post(
                    f"{self.base_url}/api/chat", json={"message": message}
                )
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RelayError(f"Failed to get response: {e}") from e
        if not isinstance(data, dict):
            raise RelayError("Failed to get response: unexpected body")
        reply = data.get("response")
        return reply if isinstance(reply, str) else ""

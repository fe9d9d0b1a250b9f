"""Gemini generateContent wrapper used by the relay backend.

Behavior:
- Reads the API key from `GEMINI_API_KEY` (or the legacy `GEMINI_API_KEY2`).
  The key stays in-process and is only ever sent upstream as the `key` query
  parameter.
- Exposes an async `generate_content(message)` that performs exactly one
  outbound call and returns the first candidate's text.
- Any transport error, non-2xx status or non-JSON body raises `UpstreamError`.
  Missing candidate fields are not errors; they yield an empty string.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

# Configuration: model, endpoint and timeout are configurable via environment.
MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
).rstrip("/")
TIMEOUT = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))

API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GEMINI_API_KEY2")


class UpstreamError(Exception):
    """Raised when the provider call fails for any reason."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def api_key_present() -> bool:
    return bool(API_KEY)


def endpoint_url(model: str | None = None) -> str:
    return f"{API_BASE}/models/{model or MODEL}:generateContent"


def build_request_body(message: str) -> dict:
    return {"contents": [{"parts": [{"text": message}]}]}


def extract_text(data: Any) -> str:
    """Return `candidates[0].content.parts[0].text`, or "" when any link is missing."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        return ""
    part = parts[0]
    text = part.get("text") if isinstance(part, dict) else None
    # Mirror a falsy-coalescing read: anything but a non-empty string is "".
    return text if isinstance(text, str) else ""


async def generate_content(
    message: str,
    *,
    timeout: Optional[float] = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Forward one message upstream and return the generated text.

    No validation is applied to `message`; empty strings are forwarded as-is.
    """
    params = {"key": API_KEY or ""}
    try:
        async with httpx.AsyncClient(
            timeout=timeout if timeout is not None else TIMEOUT, transport=transport
        ) as client:
            r = await client.post(
                endpoint_url(),
                params=params,
                json=build_request_body(message),
                headers={"Content-Type": "application/json"},
            )
    except httpx.HTTPError as e:
        raise UpstreamError(f"Gemini request failed: {e.__class__.__name__}") from e

    if not r.is_success:
        raise UpstreamError(
            f"API request failed with status {r.status_code}", status_code=r.status_code
        )
    try:
        data = r.json()
    except ValueError as e:
        raise UpstreamError("Gemini returned a non-JSON body") from e

    text = extract_text(data)
    logger.info("Gemini reply received (len=%d)", len(text))
    return text

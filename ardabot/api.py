"""Async client for the Arda's Legends game-state HTTP API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from .models import Payload

logger = logging.getLogger("ardabot.api")

CREATE_RPCHAR_PATH = "/api/player/create/rpchar"
BIND_ARMY_PATH = "/api/army/bind-army"
UPDATE_IGN_PATH = "/api/player/update/ign"
UPDATE_RPCHAR_TITLE_PATH = "/api/player/update/rpchar/title"
UNPAID_ARMIES_PATH = "/api/army/unpaid"

UNREACHABLE_MESSAGE = "Could not reach the game server. Please try again later."


class ApiError(Exception):
    """Raised when the game-state API rejects a request or cannot be reached."""

    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _error_message(body: str, reason: Optional[str]) -> str:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    if body and body.strip():
        return body.strip()
    return reason or "Unknown error"


def _decode_body(body: str) -> Any:
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        logger.debug("Response body is not JSON; returning raw text.")
        return body


class ArdaApiClient:
    """Thin wrapper around one shared ``aiohttp.ClientSession``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, payload: Payload) -> Any:
        return await self._request("POST", path, payload)

    async def patch(self, path: str, payload: Payload) -> Any:
        return await self._request("PATCH", path, payload)

    async def _request(self, method: str, path: str, payload: Optional[Payload] = None) -> Any:
        if self._session is None:
            raise RuntimeError("ArdaApiClient.start() must be awaited before sending requests.")
        url = f"{self.base_url}{path}"
        logger.debug("API %s %s payload=%s", method, url, payload)
        try:
            async with self._session.request(method, url, json=payload, timeout=self._timeout) as resp:
                body = await resp.text()
                if resp.status >= 400:
                    message = _error_message(body, resp.reason)
                    logger.info("API %s %s failed (%s): %s", method, path, resp.status, message)
                    raise ApiError(resp.status, message)
                return _decode_body(body)
        except asyncio.TimeoutError as exc:
            logger.warning("API %s %s timed out: %s", method, path, exc)
            raise ApiError(None, UNREACHABLE_MESSAGE) from exc
        except aiohttp.ClientError as exc:
            logger.warning("API %s %s error: %s", method, path, exc)
            raise ApiError(None, UNREACHABLE_MESSAGE) from exc


__all__ = [
    "ApiError",
    "ArdaApiClient",
    "BIND_ARMY_PATH",
    "CREATE_RPCHAR_PATH",
    "UNPAID_ARMIES_PATH",
    "UNREACHABLE_MESSAGE",
    "UPDATE_IGN_PATH",
    "UPDATE_RPCHAR_TITLE_PATH",
]

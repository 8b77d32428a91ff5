"""Access token service.

Exchanges the subscription key for a short-lived bearer token. Tokens are
valid for ten minutes; they are cached and refreshed a minute early.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time

import httpx

from speech_translator.config import DEFAULT_TOKEN_URL
from speech_translator.errors import TokenError

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class TokenProvider:
    def __init__(
        self,
        api_key: str,
        token_url: str = DEFAULT_TOKEN_URL,
        lifetime_s: float = 540,
        timeout: float = 30,
    ):
        self.api_key = api_key
        self.token_url = token_url
        self.lifetime_s = lifetime_s
        self.timeout = timeout
        self._token: str | None = None
        self._expires_at = 0.0
        self._lock = threading.Lock()
        self._async_lock: asyncio.Lock | None = None

    def _headers(self) -> dict[str, str]:
        return {SUBSCRIPTION_KEY_HEADER: self.api_key}

    def _cached(self) -> str | None:
        if self._token and time.monotonic() < self._expires_at:
            return self._token
        return None

    def _store(self, response: httpx.Response) -> str:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TokenError(
                f"token request failed with status {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e
        token = response.text.strip()
        if not token:
            raise TokenError("token endpoint returned an empty token")
        self._token = token
        self._expires_at = time.monotonic() + self.lifetime_s
        logger.debug("Issued access token, valid for %.0fs", self.lifetime_s)
        return token

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = 0.0

    def get_token(self) -> str:
        with self._lock:
            cached = self._cached()
            if cached:
                return cached
            try:
                with httpx.Client(headers=self._headers(), timeout=self.timeout) as c:
                    r = c.post(self.token_url)
            except httpx.HTTPError as e:
                raise TokenError(f"token request failed: {e}") from e
            return self._store(r)

    async def async_get_token(self) -> str:
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        async with self._async_lock:
            cached = self._cached()
            if cached:
                return cached
            try:
                async with httpx.AsyncClient(headers=self._headers(), timeout=self.timeout) as c:
                    r = await c.post(self.token_url)
            except httpx.HTTPError as e:
                raise TokenError(f"token request failed: {e}") from e
            return self._store(r)

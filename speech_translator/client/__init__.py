from __future__ import annotations

import asyncio
import contextlib
import logging
import ssl
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote, urlencode

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from speech_translator.audio import ensure_audio, iter_frames, read_audio_file
from speech_translator.auth import SUBSCRIPTION_KEY_HEADER, TokenProvider
from speech_translator.config import Settings, settings as default_settings
from speech_translator.errors import (
    ConnectFailedError,
    ConnectionClosedError,
    TranslationTimeoutError,
    TransportError,
)
from speech_translator.models import TranslationResponse
from speech_translator.operations import SPEECH_TRANSLATE, OperationDescriptor
from speech_translator.pacing import PacedSender
from speech_translator.validation import verify_endpoint, verify_headers, verify_parameters

logger = logging.getLogger(__name__)

DEBUG_LANGUAGES = {"from": "en-US", "to": "de-DE"}


class SpeechTranslatorClient:
    """Client for the speech translation WebSocket API.

    Each call opens its own connection, streams one audio payload and
    returns the first message the service sends back.
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        *,
        settings: Settings | None = None,
        token_provider: TokenProvider | None = None,
        ssl_verify: bool = True,
    ):
        self.settings = settings or default_settings
        self.api_key = api_key if api_key is not None else self.settings.translator_api_key
        self.endpoint = verify_endpoint(endpoint or self.settings.translator_endpoint)
        self.operation: OperationDescriptor = SPEECH_TRANSLATE
        self.ssl_verify = ssl_verify
        if token_provider is None and self.settings.translator_use_token:
            token_provider = TokenProvider(
                self.api_key,
                token_url=self.settings.translator_token_url,
                lifetime_s=self.settings.translator_token_lifetime_s,
            )
        self.token_provider = token_provider

    def _headers(self) -> dict[str, str]:
        return {SUBSCRIPTION_KEY_HEADER: self.api_key} if self.api_key else {}

    async def _auth_headers(self) -> dict[str, str]:
        if self.token_provider is not None:
            token = await self.token_provider.async_get_token()
            return {"Authorization": f"Bearer {token}"}
        return self._headers()

    def _ssl_context(self) -> ssl.SSLContext | None:
        if self.ssl_verify:
            return None
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx

    def build_uri(self, parameters: Mapping[str, Any] | None) -> str:
        """Validate parameters and return the full ``wss://`` request URI."""
        params = dict(parameters or {})
        if self.settings.translator_debug_default_languages:
            logger.warning(
                "Debug default languages enabled, overriding from=%s to=%s",
                params.get("from"),
                params.get("to"),
            )
            params.update(DEBUG_LANGUAGES)
        query = urlencode(verify_parameters(self.operation, params), quote_via=quote, safe="/,")
        return f"wss://{self.endpoint}/{self.operation.path}?{query}"

    def build_headers(self, headers: Mapping[str, Any] | None = None) -> dict[str, str]:
        """Diagnostic headers for the request, descriptor defaults included."""
        return verify_headers(self.operation, headers)

    async def _connect(self, uri: str, headers: dict[str, str]) -> Any:
        kwargs: dict[str, Any] = {
            "additional_headers": list(headers.items()),
            "max_size": self.settings.max_message_bytes,
        }
        ctx = self._ssl_context()
        if ctx is not None:
            kwargs["ssl"] = ctx
        try:
            return await websockets.connect(uri, **kwargs)
        except (OSError, WebSocketException) as e:
            logger.debug("Connection failed: %s", e)
            raise ConnectFailedError(f"could not connect to {uri}: {e}") from e

    async def _receive_first(self, ws: Any, send_task: asyncio.Task[int]) -> str | bytes:
        recv_task = asyncio.ensure_future(ws.recv())
        try:
            await asyncio.wait({recv_task, send_task}, return_when=asyncio.FIRST_COMPLETED)
            if not recv_task.done():
                # The writer finished first; a failed writer ends the request
                exc = send_task.exception()
                if exc is not None:
                    raise exc
            return await recv_task
        finally:
            if not recv_task.done():
                recv_task.cancel()
                with contextlib.suppress(BaseException):
                    await recv_task

    async def _exchange(self, ws: Any, uri: str, audio: bytes, timeout: float | None) -> TranslationResponse:
        sender = PacedSender(ws.send, self.settings.frame_interval_s)
        frames = iter_frames(
            audio,
            self.settings.translator_frame_size,
            self.settings.translator_silence_padding_bytes,
        )
        send_task = asyncio.create_task(sender.send_all(frames))
        try:
            if timeout is None:
                payload = await self._receive_first(ws, send_task)
            else:
                payload = await asyncio.wait_for(self._receive_first(ws, send_task), timeout)
        except asyncio.TimeoutError as e:
            raise TranslationTimeoutError(
                f"no message received within {timeout}s", details={"uri": uri}
            ) from e
        except ConnectionClosed as e:
            logger.info("Connection closing ...")
            rcvd = getattr(e, "rcvd", None)
            raise ConnectionClosedError(
                rcvd.code if rcvd is not None else None,
                rcvd.reason if rcvd is not None else "",
            ) from e
        except (OSError, WebSocketException) as e:
            logger.info("Connection error: %s", e)
            raise TransportError(f"connection error: {e}") from e
        finally:
            if not send_task.done():
                send_task.cancel()
            with contextlib.suppress(BaseException):
                await send_task

        size = len(payload)
        logger.info("Message received (%d %s)", size, "bytes" if isinstance(payload, bytes) else "chars")
        return TranslationResponse(payload=payload, uri=uri)

    async def async_translate(
        self,
        parameters: Mapping[str, Any] | None,
        audio: bytes,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> TranslationResponse:
        """Stream ``audio`` to the service and return its first message.

        ``timeout`` overrides the configured response timeout; ``0`` waits
        indefinitely.
        """
        audio = ensure_audio(audio)
        uri = self.build_uri(parameters)
        request_headers = self.build_headers(headers)
        request_headers.update(await self._auth_headers())
        if timeout is None:
            timeout = self.settings.timeout
        elif timeout <= 0:
            timeout = None

        logger.info("Request URI: %s", uri)
        ws = await self._connect(uri, request_headers)
        try:
            return await self._exchange(ws, uri, audio, timeout)
        finally:
            await ws.close()

    async def async_translate_file(
        self,
        parameters: Mapping[str, Any] | None,
        path: str | Path,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> TranslationResponse:
        audio = read_audio_file(path)
        return await self.async_translate(parameters, audio, headers=headers, timeout=timeout)

    def translate(
        self,
        parameters: Mapping[str, Any] | None,
        audio: bytes,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> TranslationResponse:
        return asyncio.run(self.async_translate(parameters, audio, headers=headers, timeout=timeout))

    def translate_file(
        self,
        parameters: Mapping[str, Any] | None,
        path: str | Path,
        headers: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> TranslationResponse:
        return asyncio.run(self.async_translate_file(parameters, path, headers=headers, timeout=timeout))

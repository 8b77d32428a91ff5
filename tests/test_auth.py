from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from speech_translator.auth import TokenProvider
from speech_translator.client import SpeechTranslatorClient
from speech_translator.config import Settings
from speech_translator.errors import TokenError

TOKEN_URL = "https://sts.example.com/sts/v1.0/issueToken"


def _sync_client(resp):
    client = MagicMock()
    client.post.return_value = resp
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


def _ok(text="token-1"):
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.text = text
    return resp


def test_get_token_posts_subscription_key():
    client = _sync_client(_ok())
    with patch("httpx.Client", return_value=client) as ctor:
        tp = TokenProvider("k", token_url=TOKEN_URL)
        assert tp.get_token() == "token-1"

    assert ctor.call_args.kwargs["headers"] == {"Ocp-Apim-Subscription-Key": "k"}
    client.post.assert_called_once_with(TOKEN_URL)


def test_token_is_cached_until_invalidated():
    client = _sync_client(_ok())
    with patch("httpx.Client", return_value=client):
        tp = TokenProvider("k", token_url=TOKEN_URL)
        tp.get_token()
        tp.get_token()
        assert client.post.call_count == 1
        tp.invalidate()
        tp.get_token()
        assert client.post.call_count == 2


def test_expired_token_is_refreshed():
    client = _sync_client(_ok())
    with patch("httpx.Client", return_value=client):
        tp = TokenProvider("k", token_url=TOKEN_URL, lifetime_s=0)
        tp.get_token()
        tp.get_token()
    assert client.post.call_count == 2


def test_http_error_raises_token_error():
    request = httpx.Request("POST", TOKEN_URL)
    resp = MagicMock()
    resp.raise_for_status.side_effect = httpx.HTTPStatusError(
        "unauthorized", request=request, response=httpx.Response(401, request=request)
    )
    with patch("httpx.Client", return_value=_sync_client(resp)):
        tp = TokenProvider("bad", token_url=TOKEN_URL)
        with pytest.raises(TokenError) as exc_info:
            tp.get_token()
    assert exc_info.value.details == {"status_code": 401}


def test_network_error_raises_token_error():
    client = MagicMock()
    client.post.side_effect = httpx.ConnectError("unreachable")
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    with patch("httpx.Client", return_value=client):
        with pytest.raises(TokenError, match="unreachable"):
            TokenProvider("k", token_url=TOKEN_URL).get_token()


def test_empty_token_rejected():
    with patch("httpx.Client", return_value=_sync_client(_ok("  "))):
        with pytest.raises(TokenError, match="empty"):
            TokenProvider("k", token_url=TOKEN_URL).get_token()


@pytest.mark.asyncio
async def test_async_get_token():
    client = MagicMock()
    client.post = AsyncMock(return_value=_ok("token-async"))
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    with patch("httpx.AsyncClient", return_value=client):
        tp = TokenProvider("k", token_url=TOKEN_URL)
        assert await tp.async_get_token() == "token-async"
        assert await tp.async_get_token() == "token-async"
    assert client.post.await_count == 1


def test_client_builds_token_provider_from_settings():
    s = Settings(
        translator_endpoint="host",
        translator_api_key="k",
        translator_use_token=True,
        translator_token_url=TOKEN_URL,
        translator_token_lifetime_s=120,
    )
    c = SpeechTranslatorClient(settings=s)
    assert isinstance(c.token_provider, TokenProvider)
    assert c.token_provider.token_url == TOKEN_URL
    assert c.token_provider.lifetime_s == 120

"""Exception types raised by the speech translator client.

Every error derives from ``SpeechTranslatorError`` and from the closest
builtin exception, so callers can catch either. Transport failures keep the
original exception as ``__cause__``.
"""

from __future__ import annotations

from typing import Any


class SpeechTranslatorError(Exception):
    """Base error for the client."""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


# ── Local input ──────────────────────────────────────────────────────────────


class AudioFileNotFoundError(SpeechTranslatorError, FileNotFoundError):
    """The audio file to translate does not exist."""

    def __init__(self, path: str):
        super().__init__(f"could not find file {path}", details={"path": path})
        self.path = path


class AudioPayloadError(SpeechTranslatorError, ValueError):
    """The audio payload is empty or not bytes."""


class ParameterValidationError(SpeechTranslatorError, ValueError):
    """Parameters or headers do not satisfy the operation descriptor."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems), details=list(problems))
        self.problems = list(problems)


# ── Transport ────────────────────────────────────────────────────────────────


class ConnectFailedError(SpeechTranslatorError, ConnectionError):
    """The WebSocket could not be established."""


class TransportError(SpeechTranslatorError, ConnectionError):
    """The connection failed after it was established."""


class ConnectionClosedError(SpeechTranslatorError, ConnectionError):
    """The remote side closed the connection before sending a message."""

    def __init__(self, code: int | None = None, reason: str = ""):
        message = "connection closed before a message was received"
        if code is not None:
            message = f"{message} (code={code}, reason={reason or 'none'})"
        super().__init__(message, details={"code": code, "reason": reason})
        self.code = code
        self.reason = reason


class TranslationTimeoutError(SpeechTranslatorError, TimeoutError):
    """No message arrived within the configured timeout."""


# ── Auth ─────────────────────────────────────────────────────────────────────


class TokenError(SpeechTranslatorError):
    """Issuing an access token failed."""

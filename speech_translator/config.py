"""Client configuration via environment variables.

Naming convention:
  TRANSLATOR_*  all settings of the speech translation client

The subscription key and endpoint can also be passed directly to
``SpeechTranslatorClient``; explicit arguments win over the environment.
"""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "dev.microsofttranslator.com"
DEFAULT_TOKEN_URL = "https://api.cognitive.microsoft.com/sts/v1.0/issueToken"


class Settings(BaseSettings):
    """Speech translator settings: connection, framing and auth."""

    # ── Connection ───────────────────────────────────────────────────────────
    translator_api_key: str = ""
    translator_endpoint: str = DEFAULT_ENDPOINT
    translator_timeout_s: float = 60.0
    translator_max_message_mb: int = 10

    # ── Framing / pacing ─────────────────────────────────────────────────────
    translator_frame_size: int = 32000
    translator_silence_padding_bytes: int = 160000
    translator_frame_interval_ms: int = 100

    # ── Legacy behaviour ─────────────────────────────────────────────────────
    # Forces from=en-US&to=de-DE regardless of caller parameters.
    translator_debug_default_languages: bool = False

    # ── Token auth ───────────────────────────────────────────────────────────
    translator_use_token: bool = False
    translator_token_url: str = DEFAULT_TOKEN_URL
    translator_token_lifetime_s: int = 540

    @property
    def frame_interval_s(self) -> float:
        return max(self.translator_frame_interval_ms, 0) / 1000.0

    @property
    def timeout(self) -> float | None:
        """Per-call response timeout; ``None`` when disabled (0 or negative)."""
        return self.translator_timeout_s if self.translator_timeout_s > 0 else None

    @property
    def max_message_bytes(self) -> int:
        return self.translator_max_message_mb * 1024 * 1024

    model_config = {"env_prefix": "", "case_sensitive": False, "extra": "ignore"}


settings = Settings()

if settings.translator_debug_default_languages:
    logger.warning(
        "TRANSLATOR_DEBUG_DEFAULT_LANGUAGES is enabled, from/to are forced to en-US/de-DE"
    )

"""Pydantic models for translation results."""

from __future__ import annotations

import json
import time
from typing import Any

from pydantic import BaseModel, Field


class TranslationResponse(BaseModel):
    """The single message the service sent back, kept verbatim."""
    payload: str | bytes
    uri: str
    received_at: float = Field(default_factory=time.time)

    @property
    def is_binary(self) -> bool:
        return isinstance(self.payload, bytes)

    @property
    def text(self) -> str:
        if isinstance(self.payload, bytes):
            return self.payload.decode("utf-8")
        return self.payload

    def as_json(self) -> Any:
        """Decode a JSON text payload."""
        return json.loads(self.text)

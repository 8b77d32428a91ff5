from __future__ import annotations

import io
import wave

import numpy as np
import pytest

from speech_translator.config import Settings


def make_wav(duration_s: float = 1.5, sample_rate: int = 16000) -> bytes:
    """Speech-range tone mix as a 16-bit mono WAV."""
    t = np.linspace(0, duration_s, int(sample_rate * duration_s), endpoint=False)
    tone = np.sin(2 * np.pi * 200 * t) * 0.3 + np.sin(2 * np.pi * 400 * t) * 0.2
    pcm = (tone * 16000).astype(np.int16).tobytes()
    buf = io.BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sample_rate)
        w.writeframes(pcm)
    return buf.getvalue()


@pytest.fixture
def wav_bytes() -> bytes:
    return make_wav()


@pytest.fixture
def wav_file(tmp_path, wav_bytes):
    path = tmp_path / "whatstheweatherlike.wav"
    path.write_bytes(wav_bytes)
    return path


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        translator_api_key="test-key",
        translator_endpoint="translator.example.com",
        translator_frame_interval_ms=0,
        translator_timeout_s=5,
    )

"""Audio payload helpers: reading files and cutting them into socket frames."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from pathlib import Path

from speech_translator.errors import AudioFileNotFoundError, AudioPayloadError

logger = logging.getLogger(__name__)

FRAME_SIZE = 32000
# Trailing silence tells the service the utterance has ended
SILENCE_PADDING_BYTES = 160000


def read_audio_file(path: str | Path) -> bytes:
    """Read an audio file fully into memory.

    Raises AudioFileNotFoundError when the path does not name a file.
    """
    p = Path(path)
    if not p.is_file():
        raise AudioFileNotFoundError(str(path))
    data = p.resolve().read_bytes()
    logger.debug("Read %d bytes of audio from %s", len(data), p)
    return data


def ensure_audio(audio: object) -> bytes:
    """Return the payload as bytes, rejecting empty or non-bytes input."""
    if isinstance(audio, (bytearray, memoryview)):
        audio = bytes(audio)
    if not isinstance(audio, bytes):
        raise AudioPayloadError(f"audio must be bytes, got {type(audio).__name__}")
    if not audio:
        raise AudioPayloadError("audio payload is empty")
    return audio


def iter_frames(
    audio: bytes,
    frame_size: int = FRAME_SIZE,
    padding_bytes: int = SILENCE_PADDING_BYTES,
) -> Iterator[bytes]:
    """Yield fixed-size audio frames followed by one silence padding frame.

    The last audio frame is zero-filled up to ``frame_size``.
    """
    if frame_size <= 0:
        raise ValueError(f"frame_size must be positive, got {frame_size}")
    view = memoryview(audio)
    for start in range(0, len(view), frame_size):
        frame = bytes(view[start : start + frame_size])
        if len(frame) < frame_size:
            frame += b"\x00" * (frame_size - len(frame))
        yield frame
    if padding_bytes > 0:
        yield bytes(padding_bytes)


def frame_count(audio_length: int, frame_size: int = FRAME_SIZE, padding_bytes: int = SILENCE_PADDING_BYTES) -> int:
    return math.ceil(audio_length / frame_size) + (1 if padding_bytes > 0 else 0)


def total_bytes(audio_length: int, frame_size: int = FRAME_SIZE, padding_bytes: int = SILENCE_PADDING_BYTES) -> int:
    return math.ceil(audio_length / frame_size) * frame_size + max(padding_bytes, 0)

"""Fixed-interval frame writer.

Frames go out on a timer rather than on the socket's flow control, so the
remote endpoint sees a steady frame rate.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)


class PacedSender:
    """Send frames through ``send`` no faster than one per ``interval`` seconds."""

    def __init__(self, send: Callable[[bytes], Awaitable[None]], interval: float = 0.1):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self._send = send
        self.interval = interval
        self.frames_sent = 0
        self.bytes_sent = 0

    async def _emit(self, frame: bytes, deadline: float | None) -> float | None:
        if deadline is not None:
            loop = asyncio.get_running_loop()
            delay = deadline - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
        await self._send(frame)
        self.frames_sent += 1
        self.bytes_sent += len(frame)
        if self.interval <= 0:
            return None
        # Schedule from the previous deadline so sleep jitter does not accumulate
        base = deadline if deadline is not None else asyncio.get_running_loop().time()
        return base + self.interval

    async def send_all(self, frames: Iterable[bytes] | AsyncIterable[bytes]) -> int:
        """Send every frame in order; returns the number of frames sent."""
        deadline: float | None = None
        if hasattr(frames, "__aiter__"):
            async for frame in frames:  # type: ignore[union-attr]
                deadline = await self._emit(frame, deadline)
        else:
            for frame in frames:  # type: ignore[union-attr]
                deadline = await self._emit(frame, deadline)
        logger.debug("Sent %d frames (%d bytes)", self.frames_sent, self.bytes_sent)
        return self.frames_sent

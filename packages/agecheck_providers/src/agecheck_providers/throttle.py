"""Fixed-interval throttle for outbound provider calls."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from agecheck_utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = get_logger("agecheck_providers.throttle")


class FixedIntervalThrottle:
    """Spaces successive calls at least min_interval seconds apart.

    Callers queue on a lock, so concurrent requests to the same upstream are
    released one interval after another instead of all at once.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize throttle.

        Args:
            min_interval: Minimum seconds between two released calls.
            clock: Monotonic time source.
            sleep: Coroutine used to wait.
        """
        if min_interval < 0:
            msg = f"min_interval must be >= 0, got {min_interval}"
            raise ValueError(msg)

        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_release: float | None = None

    async def acquire(self) -> float:
        """Wait for the next slot.

        Returns:
            Seconds spent waiting.
        """
        async with self._lock:
            waited = 0.0
            if self._last_release is not None:
                waited = max(0.0, self._last_release + self.min_interval - self._clock())
            if waited > 0:
                log.debug("throttle_wait", seconds=round(waited, 3))
                await self._sleep(waited)
            self._last_release = self._clock()
            return waited


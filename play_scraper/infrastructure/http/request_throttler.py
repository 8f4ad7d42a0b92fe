"""
Request throttling for respectful store scraping.

A throttler is the single admission point for every request that shares
it: callers queue on its lock, so the outbound rate is capped no matter
how many coroutines are fetching.
"""
import asyncio
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[Any]]


class RequestThrottler(ABC):
    """Gate awaited before every outbound request."""

    @abstractmethod
    async def await_continue(self) -> None:
        """Wait until the next request may be issued."""
        pass


class NoRequestThrottling(RequestThrottler):
    """
    Throttler that doesn't throttle (for testing).

    Provides the same interface but never delays requests.
    """

    async def await_continue(self) -> None:
        pass


class _GapThrottler(RequestThrottler):
    """Enforces a minimum gap between consecutive requests."""

    def __init__(self, clock: Optional[Clock] = None, sleep: Optional[Sleep] = None):
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep
        self._last_request_time: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    @abstractmethod
    def _required_gap(self) -> float:
        pass

    async def await_continue(self) -> None:
        async with self._lock:
            required_gap = self._required_gap()
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < required_gap:
                    wait_time = required_gap - elapsed
                    logger.debug(f"Throttling request for {wait_time:.2f}s")
                    await self._sleep(wait_time)
            self._last_request_time = self._clock()

    def reset(self) -> None:
        """Forget the last request; the next one passes immediately."""
        self._last_request_time = None


class HumanBehaviorThrottler(_GapThrottler):
    """
    Paces requests like a person browsing.

    Each gap is base_delay plus a uniform jitter in [jitter_min, jitter_max].
    Default: 1-2 seconds between requests.
    """

    def __init__(
        self,
        base_delay: float = 1.0,
        jitter_min: float = 0.0,
        jitter_max: float = 1.0,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
        rng: Optional[random.Random] = None,
    ):
        if base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {base_delay}")
        if jitter_min < 0 or jitter_max < jitter_min:
            raise ValueError(
                f"Invalid jitter range [{jitter_min}, {jitter_max}]"
            )
        super().__init__(clock=clock, sleep=sleep)
        self.base_delay = base_delay
        self.jitter_min = jitter_min
        self.jitter_max = jitter_max
        self._rng = rng or random.Random()

    def _required_gap(self) -> float:
        return self.base_delay + self._rng.uniform(self.jitter_min, self.jitter_max)


class FixedIntervalThrottler(_GapThrottler):
    """Constant gap between requests."""

    def __init__(
        self,
        interval: float = 1.0,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        super().__init__(clock=clock, sleep=sleep)
        self.interval = interval

    def _required_gap(self) -> float:
        return self.interval


def build_throttler(name: str, base_delay: float = 1.0) -> RequestThrottler:
    """
    Create a throttler by name.

    Args:
        name: "human", "fixed" or "none"
        base_delay: Base delay (human) or interval (fixed), in seconds

    Raises:
        ValueError: Unknown name
    """
    normalized = name.strip().lower()
    if normalized == "human":
        return HumanBehaviorThrottler(base_delay=base_delay)
    if normalized == "fixed":
        return FixedIntervalThrottler(interval=base_delay)
    if normalized == "none":
        return NoRequestThrottling()
    raise ValueError(f"Unknown throttler '{name}'. Expected one of: human, fixed, none")

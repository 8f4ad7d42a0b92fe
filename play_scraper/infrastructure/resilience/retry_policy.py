"""
Retry Policy Implementation

Re-invokes a fallible async operation with exponential backoff, honouring
server-supplied Retry-After hints.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, FrozenSet, Optional, TypeVar

from play_scraper.domain.errors import (
    HttpError,
    NetworkError,
    RateLimitError,
    ScraperError,
)
from .error_classifier import classify_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRYABLE_STATUS_CODES: FrozenSet[int] = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff configuration. Delays are in seconds.

    The wait before retry n (0-indexed) is
    min(initial_delay * multiplier ** n, max_delay).
    """
    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    multiplier: float = 2.0
    retryable_status_codes: FrozenSet[int] = DEFAULT_RETRYABLE_STATUS_CODES

    DEFAULT: ClassVar["RetryPolicy"]
    AGGRESSIVE: ClassVar["RetryPolicy"]
    CONSERVATIVE: ClassVar["RetryPolicy"]
    NO_RETRY: ClassVar["RetryPolicy"]

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay < 0:
            raise ValueError(f"initial_delay must be >= 0, got {self.initial_delay}")
        if self.max_delay < self.initial_delay:
            raise ValueError(
                f"max_delay ({self.max_delay}) must be >= initial_delay ({self.initial_delay})"
            )
        if self.multiplier < 1.0:
            raise ValueError(f"multiplier must be >= 1.0, got {self.multiplier}")
        object.__setattr__(
            self, "retryable_status_codes", frozenset(self.retryable_status_codes)
        )

    def calculate_delay(self, attempt: int) -> float:
        """
        Backoff delay after a failed attempt.

        Args:
            attempt: Attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        return min(self.initial_delay * (self.multiplier ** attempt), self.max_delay)

    def is_retryable(self, error: ScraperError) -> bool:
        if isinstance(error, (NetworkError, RateLimitError)):
            return True
        if isinstance(error, HttpError):
            return error.status_code in self.retryable_status_codes
        return False

    def delay_for(self, error: ScraperError, attempt: int) -> float:
        """Server hint wins over computed backoff."""
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(error.retry_after)
        return self.calculate_delay(attempt)

    @classmethod
    def from_name(cls, name: str) -> "RetryPolicy":
        """
        Look up a preset by name (default, aggressive, conservative, none).

        Raises:
            ValueError: Unknown name
        """
        presets = {
            "default": cls.DEFAULT,
            "aggressive": cls.AGGRESSIVE,
            "conservative": cls.CONSERVATIVE,
            "none": cls.NO_RETRY,
            "no_retry": cls.NO_RETRY,
        }
        try:
            return presets[name.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown retry policy '{name}'. "
                f"Expected one of: default, aggressive, conservative, none"
            ) from None


RetryPolicy.DEFAULT = RetryPolicy()
RetryPolicy.AGGRESSIVE = RetryPolicy(
    max_attempts=5, initial_delay=0.5, max_delay=5.0, multiplier=1.5
)
RetryPolicy.CONSERVATIVE = RetryPolicy(
    max_attempts=2, initial_delay=2.0, max_delay=20.0, multiplier=3.0
)
RetryPolicy.NO_RETRY = RetryPolicy(
    max_attempts=1, initial_delay=0.0, max_delay=0.0, multiplier=1.0
)


class RetryExecutor:
    """
    Runs an operation under a RetryPolicy.

    Usage:
        executor = RetryExecutor()

        async def fetch(attempt):
            return await client.get(url)

        html = await executor.execute(RetryPolicy.DEFAULT, fetch)

    Exhaustion re-raises the last failure unchanged. Cancellation during a
    backoff wait propagates and no further attempt is made.
    """

    def __init__(
        self,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        on_retry: Optional[Callable[[int, ScraperError, float], Any]] = None,
    ):
        self._sleep = sleep or asyncio.sleep
        self._on_retry = on_retry

    async def execute(
        self,
        policy: RetryPolicy,
        operation: Callable[[int], Awaitable[T]],
    ) -> T:
        """
        Execute `operation(attempt)` with retry logic.

        Args:
            policy: Backoff configuration
            operation: Async callable taking the 0-indexed attempt number

        Returns:
            Result of the first successful attempt

        Raises:
            The original exception of the last attempt, or of the first
            non-retryable failure
        """
        attempt = 0
        while True:
            try:
                return await operation(attempt)
            except Exception as e:
                error = classify_error(e)

                if attempt >= policy.max_attempts - 1:
                    logger.warning(
                        f"Giving up after {policy.max_attempts} attempts: {error}"
                    )
                    raise

                if not policy.is_retryable(error):
                    raise

                delay = policy.delay_for(error, attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{policy.max_attempts} failed "
                    f"({error.kind.value}): {error}. Retrying in {delay:.2f}s"
                )
                await self._notify(attempt + 1, error, delay)

            await self._sleep(delay)
            attempt += 1

    async def _notify(self, attempt: int, error: ScraperError, delay: float) -> None:
        if self._on_retry is None:
            return
        try:
            result = self._on_retry(attempt, error, delay)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.warning(f"on_retry callback failed: {e}")

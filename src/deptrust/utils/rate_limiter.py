"""Token-bucket rate limiting for upstream APIs."""

import asyncio
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field


class RateLimiter:
    """Token bucket refilled in whole-window steps.

    Tokens are only replenished once a full window has elapsed since the
    last refill; partial windows never add tokens. Callers that find the
    bucket empty wait in arrival order and are released on the next refill
    that yields tokens.
    """

    def __init__(
        self,
        max_requests: int,
        window_ms: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Bucket capacity, i.e. requests allowed per window.
            window_ms: Window length in milliseconds.
            clock: Returns the current time in seconds.
        """
        if max_requests < 1 or window_ms <= 0:
            raise ValueError("max_requests must be >= 1 and window_ms > 0")
        self.max_tokens = max_requests
        self.window_ms = window_ms
        self._clock = clock
        self._tokens = max_requests
        self._last_refill = self._now_ms()
        self._waiters: deque[asyncio.Future[None]] = deque()
        self._timer: asyncio.TimerHandle | None = None

    def _now_ms(self) -> float:
        return self._clock() * 1000

    async def acquire(self) -> None:
        """Take one token, waiting for the next refill if none are left."""
        self._refill()
        if self._tokens > 0:
            self._tokens -= 1
            return

        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()
        self._waiters.append(waiter)
        self._schedule_refill(loop)
        try:
            await waiter
        except asyncio.CancelledError:
            # Granted a token but cancelled before resuming: hand it back.
            if waiter.done() and not waiter.cancelled():
                self._tokens = min(self.max_tokens, self._tokens + 1)
                self._drain()
            raise

    def remaining(self) -> int:
        """Tokens currently available."""
        self._refill()
        return self._tokens

    def ms_until_refill(self) -> float:
        """Milliseconds until the next whole-window refill."""
        elapsed = self._now_ms() - self._last_refill
        return max(0.0, self.window_ms - elapsed)

    @property
    def waiting(self) -> int:
        """Number of callers queued for a token."""
        return sum(1 for w in self._waiters if not w.done())

    def _refill(self) -> None:
        now = self._now_ms()
        elapsed = now - self._last_refill
        if elapsed < self.window_ms:
            return

        periods = int(elapsed // self.window_ms)
        self._tokens = min(self.max_tokens, self._tokens + periods * self.max_tokens)
        self._last_refill = now - (elapsed % self.window_ms)
        self._drain()

    def _drain(self) -> None:
        while self._waiters and self._tokens > 0:
            waiter = self._waiters.popleft()
            if waiter.done():
                continue
            self._tokens -= 1
            waiter.set_result(None)

    def _schedule_refill(self, loop: asyncio.AbstractEventLoop) -> None:
        delay = self.ms_until_refill()
        if delay <= 0:
            self._refill()
            return
        if self._timer is None:
            self._timer = loop.call_later(delay / 1000, self._on_timer, loop)

    def _on_timer(self, loop: asyncio.AbstractEventLoop) -> None:
        self._timer = None
        self._refill()
        if any(not w.done() for w in self._waiters):
            self._schedule_refill(loop)


@dataclass
class RateLimiters:
    """One limiter per upstream source, shared by every collector in a process.

    Limits follow each service's documented or assumed ceiling.
    """

    github: RateLimiter = field(default_factory=lambda: RateLimiter(5000, 3_600_000))
    npm: RateLimiter = field(default_factory=lambda: RateLimiter(300, 60_000))
    pypi: RateLimiter = field(default_factory=lambda: RateLimiter(100, 60_000))
    osv: RateLimiter = field(default_factory=lambda: RateLimiter(600, 60_000))
    npm_downloads: RateLimiter = field(default_factory=lambda: RateLimiter(300, 60_000))
    pypistats: RateLimiter = field(default_factory=lambda: RateLimiter(30, 60_000))
    opencollective: RateLimiter = field(default_factory=lambda: RateLimiter(60, 60_000))

    def registry(self, ecosystem: str) -> RateLimiter:
        """Limiter for an ecosystem's package registry."""
        return self.pypi if ecosystem == "pypi" else self.npm

    def downloads(self, ecosystem: str) -> RateLimiter:
        """Limiter for an ecosystem's download statistics API."""
        return self.pypistats if ecosystem == "pypi" else self.npm_downloads

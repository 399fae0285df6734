"""Per-upstream rate limiting for outbound API calls.

Every external service (MusicBrainz, Wikidata, Wikipedia, Cover Art
Archive) gets its own :class:`RateLimiter` instance.  A limiter hands out
``limit_for_period`` permits per ``limit_refresh_period`` window; a caller
that finds the window exhausted waits for the next one, but never longer
than ``timeout`` seconds in total.  When the wait would exceed the timeout
the caller receives :class:`RateLimitExceededError` rather than a generic
failure, so the resolver can decide per call whether to propagate the
error (mandatory stages) or degrade (enrichment stages).

Waiting callers queue on an ``asyncio.Lock``, which wakes waiters in FIFO
order.  Time spent queueing counts against the caller's timeout.

MusicBrainz asks clients to stay at or below 1 request per second, which
is also the default for every upstream here.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any

import structlog

from jukebox.utils.errors import ConfigurationError, RateLimitExceededError

logger = structlog.get_logger(logger_name=__name__)


@dataclass(frozen=True)
class RateLimiterConfig:
    """Quota settings for a single upstream.

    Attributes
    ----------
    limit_for_period:
        Permits available in each refresh window.
    limit_refresh_period:
        Window length in seconds.
    timeout:
        Maximum seconds a caller may wait for a permit before failing.
    """

    limit_for_period: int = 1
    limit_refresh_period: float = 1.0
    timeout: float = 2.0

    def validate(self, name: str) -> None:
        """Raise :class:`ConfigurationError` if any value is out of range."""
        if self.limit_for_period < 1:
            raise ConfigurationError(
                message=f"limit_for_period must be >= 1 for rate limiter '{name}'"
            )
        if self.limit_refresh_period <= 0:
            raise ConfigurationError(
                message=f"limit_refresh_period must be > 0 for rate limiter '{name}'"
            )
        if self.timeout < 0:
            raise ConfigurationError(message=f"timeout must be >= 0 for rate limiter '{name}'")


class RateLimiter:
    """Fixed-window permit limiter for one upstream service.

    State is ``(permits_available, window_start)``.  Windows are aligned
    to the limiter's creation time; when one or more whole windows have
    elapsed the permit count refills to ``limit_for_period``.
    """

    def __init__(self, name: str, config: RateLimiterConfig | None = None) -> None:
        self._name = name
        self._config = config or RateLimiterConfig()
        self._config.validate(name)
        self._permits = self._config.limit_for_period
        self._window_start = time.monotonic()
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> RateLimiterConfig:
        return self._config

    def _refresh(self, now: float) -> None:
        """Advance the window and refill permits if a period has elapsed."""
        period = self._config.limit_refresh_period
        elapsed = now - self._window_start
        if elapsed >= period:
            self._window_start += (elapsed // period) * period
            self._permits = self._config.limit_for_period

    def _exceeded(self) -> RateLimitExceededError:
        logger.warning(
            "rate_limit_exceeded",
            upstream=self._name,
            timeout=self._config.timeout,
        )
        return RateLimitExceededError(
            message=f"Rate limit exceeded for {self._name}, please try again later",
            provider_name=self._name,
        )

    async def acquire(self) -> None:
        """Wait for and consume one permit.

        Raises
        ------
        RateLimitExceededError
            If no permit becomes available within the configured timeout.
        """
        deadline = time.monotonic() + self._config.timeout

        # Lock.acquire() on a free lock completes without suspending, so the
        # fast path never trips a zero-second wait_for.
        if self._lock.locked():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise self._exceeded()
            try:
                await asyncio.wait_for(self._lock.acquire(), timeout=remaining)
            except asyncio.TimeoutError:
                raise self._exceeded() from None
        else:
            await self._lock.acquire()

        try:
            while True:
                now = time.monotonic()
                self._refresh(now)
                if self._permits > 0:
                    self._permits -= 1
                    return

                next_window = self._window_start + self._config.limit_refresh_period
                if next_window > deadline:
                    raise self._exceeded()

                logger.debug(
                    "rate_limit_wait",
                    upstream=self._name,
                    wait_seconds=round(next_window - now, 3),
                )
                await asyncio.sleep(next_window - now)
        finally:
            self._lock.release()

    def snapshot(self) -> dict[str, Any]:
        """Return the limiter's configuration and current permit count."""
        self._refresh(time.monotonic())
        return {
            "permits_available": self._permits,
            "limit_for_period": self._config.limit_for_period,
            "limit_refresh_period": self._config.limit_refresh_period,
            "timeout": self._config.timeout,
        }


class RateLimiterRegistry:
    """Owns one :class:`RateLimiter` per upstream name.

    Constructed explicitly in ``main._build_all`` and handed to each
    provider; there is no module-level default instance.
    """

    def __init__(self, limiters: list[RateLimiter] | None = None) -> None:
        self._limiters: dict[str, RateLimiter] = {}
        for limiter in limiters or []:
            self.register(limiter)

    @classmethod
    def from_config(
        cls,
        names: list[str],
        defaults: RateLimiterConfig,
        overrides: dict[str, dict[str, Any]] | None = None,
    ) -> RateLimiterRegistry:
        """Build a registry with one limiter per name.

        Parameters
        ----------
        names:
            Upstream names to create limiters for.
        defaults:
            Quota applied where no override exists.
        overrides:
            Per-name dicts whose keys match :class:`RateLimiterConfig`
            fields (typically the ``rate_limiters`` section of
            ``config/config.yaml``).
        """
        overrides = overrides or {}
        registry = cls()
        for name in names:
            override = overrides.get(name) or {}
            try:
                config = RateLimiterConfig(
                    limit_for_period=int(
                        override.get("limit_for_period", defaults.limit_for_period)
                    ),
                    limit_refresh_period=float(
                        override.get("limit_refresh_period", defaults.limit_refresh_period)
                    ),
                    timeout=float(override.get("timeout", defaults.timeout)),
                )
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    message=f"Invalid rate limiter settings for '{name}': {exc}"
                ) from exc
            registry.register(RateLimiter(name, config))
        return registry

    def register(self, limiter: RateLimiter) -> None:
        self._limiters[limiter.name] = limiter

    def get(self, name: str) -> RateLimiter:
        """Return the limiter for *name*.

        Raises
        ------
        ConfigurationError
            If no limiter was registered under *name*.
        """
        try:
            return self._limiters[name]
        except KeyError:
            raise ConfigurationError(message=f"No rate limiter registered for '{name}'") from None

    async def acquire(self, name: str) -> None:
        """Consume one permit from the limiter registered under *name*."""
        await self.get(name).acquire()

    def names(self) -> list[str]:
        return list(self._limiters)

    def snapshot(self) -> dict[str, dict[str, Any]]:
        return {name: limiter.snapshot() for name, limiter in self._limiters.items()}

"""Utility modules for the Jukebox API.

- **errors** -- Exception hierarchy rooted at JukeboxError; each failure
  kind maps to exactly one HTTP status at the API boundary.
- **rate_limiter** -- Per-upstream fixed-window permit limiter with a
  bounded wait, plus the registry that owns one limiter per service.
- **concurrency** -- Semaphore-throttled ``asyncio.gather`` used for the
  per-album cover-art fan-out.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
- **text_normalizer** -- Cache-key folding and URL-relation parsing.
"""

from jukebox.utils.concurrency import throttled_gather
from jukebox.utils.errors import (
    ArtistNotFoundError,
    ConfigurationError,
    DeadlineExceededError,
    InvalidArgumentError,
    JukeboxError,
    RateLimitExceededError,
    UpstreamError,
)
from jukebox.utils.logging import configure_logging, get_logger
from jukebox.utils.rate_limiter import RateLimiter, RateLimiterConfig, RateLimiterRegistry
from jukebox.utils.text_normalizer import (
    is_blank,
    last_path_segment,
    normalize_artist_key,
    normalize_mbid_key,
    wikipedia_title_from_url,
)

__all__ = [
    "ArtistNotFoundError",
    "ConfigurationError",
    "DeadlineExceededError",
    "InvalidArgumentError",
    "JukeboxError",
    "RateLimitExceededError",
    "RateLimiter",
    "RateLimiterConfig",
    "RateLimiterRegistry",
    "UpstreamError",
    "configure_logging",
    "get_logger",
    "is_blank",
    "last_path_segment",
    "normalize_artist_key",
    "normalize_mbid_key",
    "throttled_gather",
    "wikipedia_title_from_url",
]

"""Custom exception hierarchy for the Jukebox API.

All application exceptions inherit from :class:`JukeboxError`, which
carries an optional ``provider_name`` so error handlers can identify which
upstream service (e.g. "musicbrainz", "wikipedia", "coverart") caused the
failure.

The hierarchy is organized by how the resolver and the HTTP layer treat
each failure:

    JukeboxError  (base -- catch-all for any jukebox error)
    +-- InvalidArgumentError     (blank artist name / MBID -> HTTP 400)
    +-- ArtistNotFoundError      (upstream returned no match -> HTTP 404)
    +-- RateLimitExceededError   (no permit within the limiter timeout -> HTTP 429)
    +-- UpstreamError            (transport / parse failure -> HTTP 500)
    |   +-- DeadlineExceededError  (caller deadline elapsed mid-pipeline)
    +-- ConfigurationError       (invalid limiter / cache configuration)

Mandatory pipeline stages (identity and detail lookup) let these propagate.
Enrichment stages (biography, cover art) catch them at the call site and
degrade to an absent field.
"""


class JukeboxError(Exception):
    """Base exception for all Jukebox errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which upstream service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[musicbrainz] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller errors
# ---------------------------------------------------------------------------

class InvalidArgumentError(JukeboxError):
    """Raised when a required input (artist name, MBID, cache key) is blank.

    Raised before any cache, rate-limiter, or upstream interaction and
    never retried.
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ArtistNotFoundError(JukeboxError):
    """Raised when an upstream source returns no matching artist data.

    This is a normal not-found outcome: it is logged at warning level,
    not as an error.
    """

    def __init__(
        self,
        message: str = "Artist not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class RateLimitExceededError(JukeboxError):
    """Raised when no rate-limiter permit was granted within the timeout.

    The message always starts with ``"Rate limit exceeded"`` so the HTTP
    layer and log scanners can recognize it.  Callers should back off.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UpstreamError(JukeboxError):
    """Raised when an upstream call fails in transport or returns an unparseable payload."""

    def __init__(
        self,
        message: str = "Upstream service call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DeadlineExceededError(UpstreamError):
    """Raised when a caller-supplied deadline elapses before the pipeline completes.

    In-flight upstream calls are cancelled; no partial record is returned
    or cached.
    """

    def __init__(
        self,
        message: str = "Request deadline exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Startup errors
# ---------------------------------------------------------------------------

class ConfigurationError(JukeboxError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

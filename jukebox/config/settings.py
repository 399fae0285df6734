"""Application settings loaded from environment variables via pydantic-settings.

# --- HOW SETTINGS WORK -------------------------------------------------
#
# Values are read from two sources (in priority order):
#
#   1. Environment variables -- e.g. MUSICBRAINZ_CONTACT=ops@example.com
#   2. .env file in the working directory (local development)
#
# Field ``musicbrainz_contact`` maps to env var ``MUSICBRAINZ_CONTACT``.
# Defaults below apply when neither source sets a value.  Per-upstream and
# per-cache overrides live in config/config.yaml (see config/loader.py).
# ----------------------------------------------------------------------
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Jukebox application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream identification ===
    # MusicBrainz rejects anonymous clients; the User-Agent is built from these.
    musicbrainz_app_name: str = "JukeboxApi"
    musicbrainz_app_version: str = "1.0"
    musicbrainz_contact: str = ""

    # === Upstream endpoints ===
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2/artist/"
    cover_art_base_url: str = "https://coverartarchive.org/release-group/"
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikidata_api_url: str = "https://www.wikidata.org/w/api.php"

    # === Timeouts ===
    http_timeout_seconds: float = 10.0  # per upstream HTTP call
    request_timeout_seconds: float = 30.0  # default deadline for a whole resolution

    # === Caches (defaults for all three; per-cache overrides in config.yaml) ===
    cache_max_size: int = 1000
    cache_ttl_seconds: float = 3600.0

    # === Rate limiting (defaults for every upstream) ===
    rate_limit_for_period: int = 1
    rate_limit_refresh_period_seconds: float = 1.0
    rate_limit_timeout_seconds: float = 2.0

    # === Album enrichment ===
    cover_art_concurrency: int = 1  # capped at the coverart limiter's limit_for_period

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    def user_agent(self) -> str:
        """Return the User-Agent string sent to every upstream."""
        contact = self.musicbrainz_contact or "no-contact-configured"
        return f"{self.musicbrainz_app_name}/{self.musicbrainz_app_version} ({contact})"

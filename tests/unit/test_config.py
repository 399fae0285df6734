"""Unit tests for Settings and the YAML configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from jukebox.config.loader import load_config
from jukebox.config.settings import Settings
from jukebox.utils.errors import ConfigurationError


def _settings(**overrides) -> Settings:
    """Build Settings that ignore any local .env file."""
    return Settings(_env_file=None, **overrides)


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MUSICBRAINZ_CONTACT", raising=False)
        monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
        settings = _settings()

        assert settings.musicbrainz_base_url == "https://musicbrainz.org/ws/2/artist/"
        assert settings.cover_art_base_url == "https://coverartarchive.org/release-group/"
        assert settings.cache_max_size == 1000
        assert settings.cache_ttl_seconds == 3600.0
        assert settings.rate_limit_for_period == 1
        assert settings.rate_limit_refresh_period_seconds == 1.0
        assert settings.rate_limit_timeout_seconds == 2.0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVER_ART_CONCURRENCY", "8")
        monkeypatch.setenv("RATE_LIMIT_TIMEOUT_SECONDS", "0.5")

        settings = _settings()

        assert settings.cover_art_concurrency == 8
        assert settings.rate_limit_timeout_seconds == 0.5

    def test_user_agent_includes_contact(self) -> None:
        settings = _settings(
            musicbrainz_app_name="JukeboxApi",
            musicbrainz_app_version="2.1",
            musicbrainz_contact="ops@example.com",
        )
        assert settings.user_agent() == "JukeboxApi/2.1 (ops@example.com)"

    def test_user_agent_without_contact(self) -> None:
        settings = _settings(musicbrainz_contact="")
        assert settings.user_agent().endswith("(no-contact-configured)")


class TestLoadConfig:
    def test_reads_override_sections(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "rate_limiters:\n"
            "  coverart:\n"
            "    limit_for_period: 4\n"
            "caches:\n"
            "  artistDetailsCache:\n"
            "    ttl: 600\n"
        )

        config = load_config(str(config_file))

        assert config == {
            "rate_limiters": {"coverart": {"limit_for_period": 4}},
            "caches": {"artistDetailsCache": {"ttl": 600}},
        }

    def test_unrelated_sections_ignored(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("app:\n  name: jukebox\n")

        config = load_config(str(config_file))

        assert config == {"rate_limiters": {}, "caches": {}}

    def test_missing_file_yields_empty_sections(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config == {"rate_limiters": {}, "caches": {}}

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("rate_limiters: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(str(config_file))

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a\n- list\n")

        with pytest.raises(ConfigurationError):
            load_config(str(config_file))

    def test_section_entry_must_be_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("rate_limiters:\n  coverart: 5\n")

        with pytest.raises(ConfigurationError):
            load_config(str(config_file))

    def test_repository_config_is_valid(self) -> None:
        repo_config = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
        config = load_config(str(repo_config))

        assert set(config["rate_limiters"]) == {"musicbrainz", "wikidata", "wikipedia", "coverart"}
        assert set(config["caches"]) == {
            "artistLookupCache",
            "artistDetailsCache",
            "artistDiscographyCache",
        }

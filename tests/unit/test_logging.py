"""Unit tests for structlog configuration in jukebox/utils/logging.py."""

from __future__ import annotations

import logging

import pytest
import structlog

from jukebox.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_development_logging():
    yield
    configure_logging()


class TestConfigureLogging:
    def test_production_renders_json(self) -> None:
        configure_logging(app_env="production")
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_logging(app_env="development")
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_request_context_merged_first(self) -> None:
        configure_logging()
        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.contextvars.merge_contextvars

    def test_root_level_and_httpx_quieted(self) -> None:
        configure_logging(log_level="debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

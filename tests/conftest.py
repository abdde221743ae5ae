"""Pytest configuration and fixtures."""

import os

import pytest

from app.core.config import get_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["CHECKIN_ENV"] = "test"
    get_settings.cache_clear()


@pytest.fixture
def override_settings(monkeypatch):
    """Set environment overrides and rebuild the cached settings."""

    def _override(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
        return get_settings()

    yield _override
    get_settings.cache_clear()

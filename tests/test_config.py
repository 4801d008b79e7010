"""Tests for settings loading."""

import pytest

from app.config import get_settings, reset_settings_cache


@pytest.fixture()
def fresh_settings(monkeypatch):
    yield monkeypatch
    monkeypatch.undo()
    reset_settings_cache()


def test_reset_settings_cache_reloads_environment(fresh_settings):
    assert get_settings().notification_unread_limit == 20

    fresh_settings.setenv("NOTIFICATION_UNREAD_LIMIT", "5")
    fresh_settings.setenv("LOG_LEVEL", "debug")
    assert get_settings().notification_unread_limit == 20

    reset_settings_cache()

    settings = get_settings()
    assert settings.notification_unread_limit == 5
    assert settings.log_level == "DEBUG"

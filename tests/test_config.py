from __future__ import annotations

import pytest
from pydantic import ValidationError

from feedsearch.config import DEFAULT_ENDPOINT_TEMPLATE, AppSettings, FeedSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("FEEDSEARCH_ENVIRONMENT", "FEEDSEARCH_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = AppSettings()

    assert settings.environment == "dev"
    assert settings.feed.endpoint_template == DEFAULT_ENDPOINT_TEMPLATE
    assert settings.feed.max_attempts == 3
    assert settings.search.debounce_seconds == 0.5
    assert settings.search.order == "newest_first"


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("FEEDSEARCH_SEARCH__DEBOUNCE_SECONDS", "0.1")
    monkeypatch.setenv("FEEDSEARCH_FEED__MAX_ATTEMPTS", "1")
    monkeypatch.setenv("FEEDSEARCH_ENVIRONMENT", "prod")

    settings = AppSettings()

    assert settings.search.debounce_seconds == 0.1
    assert settings.feed.max_attempts == 1
    assert settings.environment == "prod"


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("FEEDSEARCH_SEARCH__ORDER=oldest_first\n", encoding="utf-8")

    assert AppSettings().search.order == "oldest_first"


def test_endpoint_template_requires_placeholder():
    with pytest.raises(ValidationError):
        FeedSettings(endpoint_template="https://feed.example/photos")


def test_debounce_must_not_be_negative(monkeypatch):
    monkeypatch.setenv("FEEDSEARCH_SEARCH__DEBOUNCE_SECONDS", "-1")
    with pytest.raises(ValidationError):
        AppSettings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()

"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from lexinote.config import Environment, Settings, clear_settings_cache, get_settings

GOOGLE_TRIPLE = {
    "GOOGLE_CLIENT_ID": "client-id.apps.googleusercontent.com",
    "GOOGLE_CLIENT_SECRET": "client-secret",
    "GOOGLE_REDIRECT_URI": "https://app.example.com/auth/google/callback",
}


def _make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults + overrides."""
    defaults = {
        "DATABASE_URL": "postgresql+psycopg://localhost/test",
        "LEXINOTE_ENV": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


class TestDefaults:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PASSWORD_HASH_ROUNDS", raising=False)
        s = _make_settings()
        assert s.lexinote_env == Environment.TEST
        assert s.session_ttl_days == 30
        assert s.oauth_cookie_max_age_s == 600
        assert s.password_hash_rounds == 10
        assert s.deepseek_model == "deepseek-chat"
        assert s.gemini_model == "gemini-2.0-flash-lite"
        assert s.lingva_base_url == "https://lingva.ml"
        assert s.http_timeout_s == 30.0
        assert s.session_sweep_interval_s == 3600

    def test_cookies_not_secure_outside_deployed_envs(self):
        assert _make_settings(LEXINOTE_ENV="local").cookie_secure is False
        assert _make_settings(LEXINOTE_ENV="test").cookie_secure is False

    def test_celery_urls_fall_back_to_redis_url(self):
        s = _make_settings(REDIS_URL="redis://localhost:6379/0")
        assert s.effective_celery_broker_url == "redis://localhost:6379/0"
        assert s.effective_celery_result_backend == "redis://localhost:6379/0"

    def test_explicit_celery_broker_wins(self):
        s = _make_settings(
            REDIS_URL="redis://localhost:6379/0", CELERY_BROKER_URL="redis://broker:6379/1"
        )
        assert s.effective_celery_broker_url == "redis://broker:6379/1"


class TestGoogleOAuthValidation:
    def test_absent_triple_allowed_in_test(self):
        s = _make_settings()
        assert s.google_oauth_configured is False

    def test_complete_triple_configures_google(self):
        s = _make_settings(**GOOGLE_TRIPLE)
        assert s.google_oauth_configured is True

    def test_partial_triple_rejected_in_any_env(self):
        with pytest.raises(ValidationError, match="GOOGLE_REDIRECT_URI"):
            _make_settings(
                GOOGLE_CLIENT_ID="client-id",
                GOOGLE_CLIENT_SECRET="secret",
            )

    @pytest.mark.parametrize("env", ["staging", "prod"])
    def test_triple_required_in_deployed_envs(self, env: str):
        with pytest.raises(ValidationError, match="required"):
            _make_settings(LEXINOTE_ENV=env)

    def test_prod_with_triple_is_secure(self):
        s = _make_settings(LEXINOTE_ENV="prod", **GOOGLE_TRIPLE)
        assert s.cookie_secure is True


class TestBounds:
    def test_hash_rounds_below_floor_rejected(self):
        with pytest.raises(ValidationError):
            _make_settings(PASSWORD_HASH_ROUNDS=3)

    def test_zero_ttl_rejected(self):
        with pytest.raises(ValidationError):
            _make_settings(SESSION_TTL_DAYS=0)


class TestSettingsCache:
    def test_get_settings_is_cached_until_cleared(self, monkeypatch):
        monkeypatch.setenv("SESSION_TTL_DAYS", "7")
        first = get_settings()
        assert first.session_ttl_days == 7
        assert get_settings() is first

        monkeypatch.setenv("SESSION_TTL_DAYS", "14")
        clear_settings_cache()
        assert get_settings().session_ttl_days == 14

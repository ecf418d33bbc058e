"""Application settings loaded from environment variables.

Environment Configuration:
    LEXINOTE_ENV: Deployment environment (local | test | staging | prod)
    DATABASE_URL: PostgreSQL connection string (required)

Redis / Celery Configuration:
    REDIS_URL: Redis connection string (required for worker)
    CELERY_BROKER_URL: Celery broker URL (defaults to REDIS_URL)
    CELERY_RESULT_BACKEND: Celery result backend URL (defaults to REDIS_URL)

Google OAuth Configuration (required in staging/prod):
    GOOGLE_CLIENT_ID: OAuth client ID
    GOOGLE_CLIENT_SECRET: OAuth client secret
    GOOGLE_REDIRECT_URI: Callback URL registered with Google

Translation Providers (optional):
    DEEPSEEK_API_KEY: Enables the deepseek provider
    GEMINI_API_KEY: Enables the gemini provider

The Google triple is all-or-nothing: a partially configured client is
rejected at startup in every environment.
"""

from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Valid deployment environments."""

    LOCAL = "local"
    TEST = "test"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables.
    Validation rules:
    - DATABASE_URL is always required
    - GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, GOOGLE_REDIRECT_URI are set together or not at all
    - The Google triple is required in staging and prod
    """

    lexinote_env: Environment = Field(default=Environment.LOCAL, alias="LEXINOTE_ENV")
    database_url: Annotated[str, Field(alias="DATABASE_URL")]

    # Redis / Celery settings
    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    celery_broker_url: str | None = Field(default=None, alias="CELERY_BROKER_URL")
    celery_result_backend: str | None = Field(default=None, alias="CELERY_RESULT_BACKEND")

    # Google OAuth
    google_client_id: str | None = Field(default=None, alias="GOOGLE_CLIENT_ID")
    google_client_secret: str | None = Field(default=None, alias="GOOGLE_CLIENT_SECRET")
    google_redirect_uri: str | None = Field(default=None, alias="GOOGLE_REDIRECT_URI")

    # Translation providers
    deepseek_api_key: str | None = Field(default=None, alias="DEEPSEEK_API_KEY")
    deepseek_model: str = Field(default="deepseek-chat", alias="DEEPSEEK_MODEL")
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash-lite", alias="GEMINI_MODEL")
    lingva_base_url: str = Field(default="https://lingva.ml", alias="LINGVA_BASE_URL")

    # Sessions and credentials
    session_ttl_days: int = Field(default=30, ge=1, alias="SESSION_TTL_DAYS")
    oauth_cookie_max_age_s: int = Field(default=600, ge=1, alias="OAUTH_COOKIE_MAX_AGE_S")  # 10 min
    password_hash_rounds: int = Field(default=10, ge=4, le=31, alias="PASSWORD_HASH_ROUNDS")
    session_sweep_interval_s: int = Field(default=3600, ge=1, alias="SESSION_SWEEP_INTERVAL_S")

    # Outbound HTTP
    http_timeout_s: float = Field(default=30.0, gt=0, alias="HTTP_TIMEOUT_S")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def validate_required_settings(self) -> "Settings":
        """Ensure the Google OAuth triple is coherent for the environment."""
        google_fields = {
            "GOOGLE_CLIENT_ID": self.google_client_id,
            "GOOGLE_CLIENT_SECRET": self.google_client_secret,
            "GOOGLE_REDIRECT_URI": self.google_redirect_uri,
        }
        missing_google = [name for name, value in google_fields.items() if not value]

        if missing_google and len(missing_google) < len(google_fields):
            raise ValueError(
                f"Incomplete Google OAuth settings, missing: {', '.join(missing_google)}. "
                "Set all three variables or none of them."
            )

        if self.lexinote_env in (Environment.STAGING, Environment.PROD) and missing_google:
            raise ValueError(
                f"Google OAuth settings are required for LEXINOTE_ENV={self.lexinote_env.value}: "
                f"{', '.join(missing_google)}"
            )

        return self

    @property
    def cookie_secure(self) -> bool:
        """Whether cookies carry the Secure attribute."""
        return self.lexinote_env in (Environment.STAGING, Environment.PROD)

    @property
    def google_oauth_configured(self) -> bool:
        """Whether Google sign-in can be offered."""
        return bool(self.google_client_id and self.google_client_secret and self.google_redirect_uri)

    @property
    def effective_celery_broker_url(self) -> str | None:
        """Return Celery broker URL, falling back to REDIS_URL if not set."""
        return self.celery_broker_url or self.redis_url

    @property
    def effective_celery_result_backend(self) -> str | None:
        """Return Celery result backend URL, falling back to REDIS_URL if not set."""
        return self.celery_result_backend or self.redis_url


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()

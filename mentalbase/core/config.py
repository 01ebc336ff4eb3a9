"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.03.00"

    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./mentalbase.db"

    # Session Token (supports key rotation)
    JWT_SECRET: str = "change-this-in-production"
    JWT_SECRET_PREVIOUS: str = ""  # Set during rotation, clear after
    JWT_EXPIRES_HOURS: int = 4

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # "Today" boundaries for task views are computed in this zone
    DEFAULT_TIMEZONE: str = "UTC"

    # Composite reads (mentor client view, dashboard)
    CATEGORY_FETCH_TIMEOUT_SECONDS: float = 10.0
    CATEGORY_FETCH_MAX_TIMEOUT_SECONDS: float = 30.0
    CATEGORY_FETCH_CONCURRENCY: int = 5

    # Activity feed
    ACTIVITY_FEED_DEFAULT_LIMIT: int = 10
    ACTIVITY_FEED_MAX_LIMIT: int = 100
    ACTIVITY_FEED_PER_SOURCE_CAP: int = 10

    # Data view audit listings
    VIEW_LOG_DEFAULT_LIMIT: int = 100

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def jwt_secrets(self) -> list[str]:
        """Returns list of valid secrets (current first, then previous if set)."""
        secrets = [self.JWT_SECRET]
        if self.JWT_SECRET_PREVIOUS:
            secrets.append(self.JWT_SECRET_PREVIOUS)
        return secrets


settings = Settings()

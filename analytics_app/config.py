from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Analytics service settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables (prefixed with ANALYTICS_)
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "URL Shortener - Analytics Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 5000

    # Database
    database_url: str = "sqlite:///./analytics.db"

    # Peer services
    shortener_base_url: str = "http://localhost:8000"
    metadata_base_url: str = "http://localhost:3000"
    upstream_timeout: float = 5.0  # Seconds, per outbound call

    # Dashboard stats
    top_urls_limit: int = 5
    recent_clicks_limit: int = 10
    stats_days: int = 7

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()

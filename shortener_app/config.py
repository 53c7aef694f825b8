from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Redirect/creation service settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables (prefixed with SHORTENER_)
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "URL Shortener - Redirect Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./shortener.db"

    # URL Shortener specific
    base_url: str = "http://localhost:8000"
    short_code_length: int = 6
    max_retries: int = 10  # Collision redraws before giving up

    # Click notifications (Analytics Service)
    analytics_base_url: str = "http://localhost:5000"
    notify_timeout: float = 2.0  # Seconds

    # Cache settings
    cache_backend: str = "memory"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="SHORTENER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()

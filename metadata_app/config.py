from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Metadata service settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables (prefixed with METADATA_)
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "URL Shortener - Metadata Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Database
    database_url: str = "sqlite:///./metadata.db"

    # Page fetching
    fetch_timeout: float = 5.0  # Seconds
    max_redirects: int = 5
    user_agent: str = "Mozilla/5.0 (compatible; URLShortenerBot/1.0)"

    # Stored field caps
    title_max_length: int = 200
    description_max_length: int = 500

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="METADATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()

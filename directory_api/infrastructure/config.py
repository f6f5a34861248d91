"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://directory:directory_dev_password@db:5432/directory"

    # Public site (sitemap URLs)
    site_url: str = "http://localhost:3000"

    # Directory pages
    directory_page_size: int = 50
    home_location_limit: int = 12

    # Search
    search_min_query_length: int = 2
    search_listing_limit: int = 5
    search_location_limit: int = 3
    search_category_limit: int = 3
    search_timeout_seconds: float = 5.0

    # Page cache (0 = entries live until invalidated)
    cache_ttl_seconds: int = 0

    # Revalidation
    revalidate_token: str = "dev-revalidate-token-change-in-production"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

"""
Configuration management for Recruit CRM.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # API
    api_prefix: str = "/api"
    cors_origins: str = "http://localhost:5173"

    # Pagination
    default_page_size: int = 25
    max_page_size: int = 100

    # Rate limiting (applied to write endpoints)
    rate_limit: str = "120/minute"
    rate_limit_enabled: bool = True

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()

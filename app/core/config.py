"""
Application configuration management.

This module handles all configuration loading from environment variables,
provides validation, and sets up proper defaults for different environments.
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from app.core.password_validation import REFERENCE_SYMBOLS, PolicyConfiguration


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "Password Policy API"
    app_version: str = "1.0.0"
    api_version: str = "1.0"
    environment: str = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # nosec: B104 - Intentional for containerized deployment
    port: int = 8000

    # Password policy
    password_min_length: int = 8
    password_max_length: int = 50
    password_min_categories: int = 3  # of upper, lower, digit, symbol
    password_symbols: str = REFERENCE_SYMBOLS

    # CORS - explicit origins apply in production only
    allowed_origins: list = [
        "https://catalyst.everythingdisc.com",
        "https://www.catalyst.everythingdisc.com",
    ]
    allowed_hosts: list = ["localhost", "127.0.0.1"]

    # OpenAPI server host (DOMAIN)
    domain: str | None = None

    # Logging
    log_dir: str = "logs"
    log_to_file: bool = True

    @field_validator("environment")
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_envs = ["development", "testing", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @model_validator(mode="after")
    def check_password_policy(self):
        """Fail at load time if the password policy bounds are inconsistent."""
        PolicyConfiguration.from_settings(self)
        return self

    @property
    def password_policy(self) -> PolicyConfiguration:
        """Password policy built from the password_* settings."""
        return PolicyConfiguration.from_settings(self)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def docs_enabled(self) -> bool:
        """Swagger UI and the OpenAPI document are served outside production."""
        return not self.is_production

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object
    """
    return Settings()


# Export commonly used settings
settings = get_settings()

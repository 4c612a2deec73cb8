"""
Application configuration.

Loads settings from environment variables and .env file.
The record store location is read here and handed to the store at
construction time; nothing else reads the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the boxes store.
        box_ttl_seconds: Age after which a registration is evicted on ping.
        trust_forwarded_for: Take the client IP from X-Forwarded-For.
        rate_limit_default: Default rate limit for all endpoints.
        register_rate_limit: Rate limit for the register endpoint.
        allow_clear: Enable the maintenance-only clear operation.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Box Registration Server"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./data/boxes.sqlite"
    box_ttl_seconds: int = 60
    trust_forwarded_for: bool = False
    rate_limit_default: str = "60/minute"
    register_rate_limit: str = "30/minute"
    allow_clear: bool = False


settings = Settings()

"""Application configuration settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Cycle Planner"
    debug: bool = False

    # Logging
    log_json: bool = True  # JSON lines; set False for console output in development

    # Training constants (YAML). Empty means the packaged training.yaml.
    training_config_path: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

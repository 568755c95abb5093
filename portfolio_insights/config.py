"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "portfolio-insights"
    log_level: str = "INFO"

    # Exports
    export_filename_prefix: str = "financials-report"

    # Observability
    metrics_enabled: bool = True


settings = Settings()

"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./redflag.db"

    # Service
    service_name: str = "redflag-engine"
    log_level: str = "INFO"
    history_limit: int = 20

    # Analysis tuning
    revenue_threshold_percent: float = 10.0
    revenue_jump_rule_enabled: bool = False
    severity_high_threshold: float = 2.5
    severity_medium_threshold: float = 1.5
    concentration_threshold_percent: float = 20.0

    # Uploads
    max_upload_bytes: int = 5_000_000

    # Completion webhook
    scan_webhook_url: Optional[str] = None
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds


settings = Settings()

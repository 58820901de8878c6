"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ResumeCraft"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Runtime environment, mirrors NODE_ENV of the web frontend
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("node_env", "environment"),
    )

    # Debug endpoints are opt-in; compared case-insensitively against "true"
    debug_auth: str = ""

    # Session tokens (JWT)
    nextauth_secret: str = ""
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 60 * 24 * 7
    dev_fallback_secret: str = "dev-insecure-secret"

    # Seed admin account, created at startup when both are set
    admin_email: str = ""
    admin_password: str = ""
    admin_name: str = "Administrator"

    # Routes
    login_path: str = "/auth/login"

    # CSRF cookie
    csrf_cookie_name: str = "csrfToken"
    csrf_cookie_max_age: int = 60 * 60 * 24  # 24h

    # Interview settings
    question_budget: int = 6
    max_generation_attempts: int = 3

    # Worker (Celery on Redis)
    redis_url: str = "redis://localhost:6379/0"
    celery_broker_url: str = ""  # defaults to redis_url
    celery_result_backend: str = ""  # defaults to redis_url
    video_queue_name: str = "video-processing"
    worker_concurrency: int = 2
    task_max_retries: int = 3
    task_retry_delay_seconds: int = 10
    task_time_limit_seconds: int = 300

    # CORS - stored as comma-separated string in env
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def debug_auth_enabled(self) -> bool:
        return self.debug_auth.lower() == "true"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

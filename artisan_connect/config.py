"""Artisan Connect — Central Configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── App ──
    app_name: str = "Artisan Connect"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # ── Identity ──
    # X-User-* headers are only trusted behind the auth proxy that sets them.
    # When non-empty, only these user ids may act as admin.
    admin_user_ids: List[str] = []

    # ── Database ──
    database_url: str = ""

    # ── Object Storage ──
    storage_url: str = ""
    storage_service_key: Optional[str] = None
    storage_bucket: str = "artisan-images"
    storage_cache_control: str = "3600"
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MB

    # ── Analytics ──
    trend_window_days: int = 30  # Current vs previous window length
    chart_days: int = 30
    top_artisans_limit: int = 5

    @property
    def effective_database_url(self) -> str:
        """Configured URL, or a local SQLite file when none is set."""
        return self.database_url or "sqlite:///./artisan_connect.db"

    @property
    def storage_enabled(self) -> bool:
        return bool(self.storage_url and self.storage_service_key)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
